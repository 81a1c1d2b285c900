# bot.py
# -*- coding: utf-8 -*-
"""
Основной скрипт бота: поиск погоды по городу и история запросов.
"""
import logging
import sys
from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    MessageHandler,
    CallbackQueryHandler,
    ConversationHandler,
    filters,
    ContextTypes
)
from core.utils.error_handler import log_exception
from process_manager import process_manager

from scripts.weather.location_fsm import (
    ENTER_LOCATION,
    ask_location,
    cancel_location,
    handle_location_input,
    weather_command
)
from scripts.weather.weather_handler import (
    CB_CLEAR_RECENT,
    CB_RECENT_PREFIX,
    CB_SEARCH_NEW,
    clear_command,
    recent_callback,
    recent_command,
    register_state_observers,
    start
)


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    update_id = getattr(update, "update_id", None)
    log_exception(context.error, "⚠️ Исключение при обработке", {"update_id": update_id})


def build_application() -> Application:
    config = process_manager.config
    app = Application.builder().token(config.telegram_token).build()

    # 1. FSM ввода города — до универсальных обработчиков
    location_conv = ConversationHandler(
        entry_points=[
            CommandHandler("weather", weather_command),
            CallbackQueryHandler(ask_location, pattern=f"^{CB_SEARCH_NEW}$")
        ],
        states={
            ENTER_LOCATION: [
                MessageHandler(filters.TEXT & ~filters.COMMAND, handle_location_input)
            ]
        },
        fallbacks=[
            CommandHandler("cancel", cancel_location)
        ],
        per_user=True,
        allow_reentry=True
    )
    app.add_handler(location_conv)

    # 2. Команды
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("recent", recent_command))
    app.add_handler(CommandHandler("clear", clear_command))

    # 3. Кнопки истории (с pattern — только свои callback'и)
    app.add_handler(CallbackQueryHandler(recent_callback, pattern=f"^({CB_CLEAR_RECENT}|{CB_RECENT_PREFIX}\\d+)$"))

    # 4. Экран подписывается на состояние view-model
    register_state_observers(app.bot)

    app.add_error_handler(error_handler)
    return app


def main():
    process_manager.initialize_sync()
    logging.info("🚀 Запуск бота")
    config = process_manager.config
    if not config.telegram_token:
        logging.critical("❌ TELEGRAM_BOT_TOKEN не задан")
        raise ValueError("TELEGRAM_BOT_TOKEN не задан в .env!")
    if not config.weather_api_key:
        logging.critical("❌ OPENWEATHER_API_KEY не задан")
        raise ValueError("OPENWEATHER_API_KEY не задан в .env!")

    app = build_application()
    logging.info("🚀 Бот запущен. Нажмите Ctrl+C для остановки.")

    try:
        app.run_polling(drop_pending_updates=True)
    finally:
        process_manager.shutdown_sync()
        logging.info("✅ Бот завершил работу.")


if __name__ == "__main__":
    if sys.platform == "win32":
        import asyncio
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())
    main()
