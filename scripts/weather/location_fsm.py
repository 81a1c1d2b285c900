# scripts/weather/location_fsm.py
"""
Диалог ввода города (ConversationHandler).

Вход: кнопка «Найти город» или /weather без аргументов.
/weather <город> ищет сразу, минуя диалог.
"""
import logging

from telegram import Update
from telegram.ext import ContextTypes, ConversationHandler

from process_manager import process_manager
from scripts.weather.weather_handler import run_search

logger = logging.getLogger("location_fsm")

# Состояние ТОЛЬКО для ввода города
ENTER_LOCATION = 1

PROMPT_TEXT = "🏙️ Введите название города (например, London или Санкт-Петербург).\n/cancel — отмена"


async def ask_location(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Открывает диалог ввода города."""
    if update.callback_query:
        await update.callback_query.answer()
    await context.bot.send_message(chat_id=update.effective_chat.id, text=PROMPT_TEXT)
    return ENTER_LOCATION


async def weather_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/weather [город]."""
    if not context.args:
        return await ask_location(update, context)

    city = process_manager.normalize_city_name(" ".join(context.args))
    if not city:
        return await ask_location(update, context)

    await run_search(update.effective_chat.id, city)
    return ConversationHandler.END


async def handle_location_input(update: Update, context: ContextTypes.DEFAULT_TYPE):
    chat_id = update.effective_chat.id
    city = process_manager.normalize_city_name(update.message.text)
    logger.info(f"⌨️ Чат {chat_id}: введён город '{city}'")

    if not city:
        await context.bot.send_message(chat_id=chat_id, text="❌ Не похоже на название города. Попробуйте ещё раз.")
        return ENTER_LOCATION

    await run_search(chat_id, city)
    return ConversationHandler.END


async def cancel_location(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await context.bot.send_message(chat_id=update.effective_chat.id, text="Отменено.")
    return ConversationHandler.END
