# scripts/weather/weather_handler.py
"""
Экран погоды: главное меню, карточки и наблюдатели за состоянием view-model.
"""
import asyncio
import logging
from typing import Dict, Optional

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.constants import ChatAction, ParseMode
from telegram.error import BadRequest
from telegram.ext import ContextTypes

from core.event_bus import HOURLY_FORECAST_STATE, RECENT_SEARCHES, WEATHER_STATE, subscribe_async
from core.models.ui_state import Error, HourlyForecastSuccess, Loading, WeatherSuccess
from core.utils.cache_manager import cleanup_old_files, save_plot
from process_manager import process_manager
from scripts.weather._processes.formatter import (
    build_hourly_chart,
    format_current_weather,
    format_hourly_forecast,
    format_recent_searches,
)

logger = logging.getLogger("weather_handler")

CB_SEARCH_NEW = "search_new"
CB_CLEAR_RECENT = "clear_recent"
CB_RECENT_PREFIX = "recent:"

MAX_RECENT_BUTTONS = 8


def _recent_keyboard(chat_id: int) -> InlineKeyboardMarkup:
    """Кнопки: повтор недавних запросов, новый город, очистка."""
    view_model = process_manager.get_view_model(chat_id)
    searches = view_model.recent_searches
    buttons = []
    for i, search in enumerate(searches[:MAX_RECENT_BUTTONS]):
        label = f"{search.city}, {search.country_code}" if search.country_code else search.city
        buttons.append([InlineKeyboardButton(f"📍 {label[:32]}", callback_data=f"{CB_RECENT_PREFIX}{i}")])
    buttons.append([InlineKeyboardButton("🔎 Найти город", callback_data=CB_SEARCH_NEW)])
    if searches:
        buttons.append([InlineKeyboardButton("🗑️ Очистить историю", callback_data=CB_CLEAR_RECENT)])
    return InlineKeyboardMarkup(buttons)


# === КАРТОЧКА ИСТОРИИ ===
# chat_id → message_id последней показанной карточки; её перерисовывает наблюдатель
_recent_cards: Dict[int, int] = {}


async def send_recent_searches(bot: Bot, chat_id: int):
    view_model = process_manager.get_view_model(chat_id)
    message = await bot.send_message(
        chat_id=chat_id,
        text=format_recent_searches(view_model.recent_searches),
        reply_markup=_recent_keyboard(chat_id),
        parse_mode=ParseMode.HTML
    )
    _recent_cards[chat_id] = message.message_id


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Главное меню."""
    chat_id = update.effective_chat.id
    await context.bot.send_message(
        chat_id=chat_id,
        text=(
            "🌤️ <b>Погода</b>\n\n"
            "• /weather &lt;город&gt; — погода сейчас и на сегодня\n"
            "• /recent — недавние запросы\n"
            "• /clear — очистить историю"
        ),
        parse_mode=ParseMode.HTML
    )
    await send_recent_searches(context.bot, chat_id)


async def recent_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await send_recent_searches(context.bot, update.effective_chat.id)


async def clear_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    chat_id = update.effective_chat.id
    await process_manager.get_view_model(chat_id).clear_searches()
    await context.bot.send_message(chat_id=chat_id, text="🧹 История поиска очищена.")


async def run_search(chat_id: int, city: str):
    """Запускает оба запроса; результат приходит наблюдателям через event_bus."""
    logger.info(f"🔎 Чат {chat_id}: поиск {city!r}")
    view_model = process_manager.get_view_model(chat_id)
    await view_model.fetch_hourly_forecast(city)
    await view_model.fetch_weather(city)


async def recent_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Повтор поиска из истории или очистка."""
    query = update.callback_query
    await query.answer()
    chat_id = update.effective_chat.id
    data = query.data

    if data == CB_CLEAR_RECENT:
        await process_manager.get_view_model(chat_id).clear_searches()
        return

    if data.startswith(CB_RECENT_PREFIX):
        index = int(data.split(":", 1)[1])
        searches = process_manager.get_view_model(chat_id).recent_searches
        if index >= len(searches):
            await context.bot.send_message(chat_id=chat_id, text="❌ Запрос не найден в истории.")
            return
        search = searches[index]
        # q=<город>,<код страны>
        query_text = f"{search.city},{search.country_code}" if search.country_code else search.city
        await run_search(chat_id, query_text)


def _render_chart(hourly_forecast, chat_id: int) -> Optional[str]:
    """Рисует и сохраняет график (вызывается в рабочем потоке)."""
    fig = build_hourly_chart(hourly_forecast)
    if fig is None:
        return None
    return save_plot(fig, prefix=f"hourly_{chat_id}")


# === НАБЛЮДАТЕЛИ ЗА СОСТОЯНИЕМ ===
def register_state_observers(bot: Bot):
    """Подписывает экран на изменения view-model."""

    async def on_weather_state(event):
        chat_id, state = event["chat_id"], event["state"]
        if isinstance(state, Loading):
            await bot.send_chat_action(chat_id=chat_id, action=ChatAction.TYPING)
        elif isinstance(state, WeatherSuccess):
            await bot.send_message(
                chat_id=chat_id,
                text=format_current_weather(state.weather),
                parse_mode=ParseMode.HTML
            )
            view_model = process_manager.get_view_model(chat_id)
            await view_model.add_search(state.weather.name, state.weather.country_code)
        elif isinstance(state, Error):
            await bot.send_message(chat_id=chat_id, text=f"⚠️ {state.message}")

    async def on_hourly_forecast_state(event):
        chat_id, state = event["chat_id"], event["state"]
        if isinstance(state, Loading):
            await bot.send_chat_action(chat_id=chat_id, action=ChatAction.UPLOAD_PHOTO)
        elif isinstance(state, HourlyForecastSuccess):
            text = format_hourly_forecast(state.hourly_forecast)
            path = await asyncio.to_thread(_render_chart, state.hourly_forecast, chat_id)
            if path is None:
                await bot.send_message(chat_id=chat_id, text=text, parse_mode=ParseMode.HTML)
                return
            with open(path, "rb") as photo:
                await bot.send_photo(chat_id=chat_id, photo=photo, caption=text, parse_mode=ParseMode.HTML)
            await asyncio.to_thread(cleanup_old_files)
        elif isinstance(state, Error):
            # Пользователь увидит ошибку из запроса текущей погоды
            logger.info(f"Чат {chat_id}: прогноз недоступен: {state.message}")

    async def on_recent_searches(event):
        chat_id = event["chat_id"]
        message_id = _recent_cards.get(chat_id)
        if message_id is None:
            return
        try:
            await bot.edit_message_text(
                chat_id=chat_id,
                message_id=message_id,
                text=format_recent_searches(event["searches"]),
                reply_markup=_recent_keyboard(chat_id),
                parse_mode=ParseMode.HTML
            )
        except BadRequest as e:
            # карточку удалили или текст не изменился
            logger.debug(f"Карточка истории в чате {chat_id} не обновлена: {e}")
            _recent_cards.pop(chat_id, None)

    subscribe_async(WEATHER_STATE, on_weather_state)
    subscribe_async(HOURLY_FORECAST_STATE, on_hourly_forecast_state)
    subscribe_async(RECENT_SEARCHES, on_recent_searches)
