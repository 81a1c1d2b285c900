# -*- coding: utf-8 -*-
"""
Шина событий (Event Bus) между view-model и экраном бота.

Архитектурный принцип:
- WeatherViewModel публикует изменения состояния
- bot.py (экран) подписывается и перерисовывает сообщения
- event_bus.py НЕ импортирует bot.py и scripts/ — зависимости только в одну сторону

Использование:

# В bot.py (потребитель):
from core.event_bus import subscribe_async, WEATHER_STATE

async def on_weather_state(event):
    await bot.send_message(event["chat_id"], ...)

subscribe_async(WEATHER_STATE, on_weather_state)

# В view-model (производитель):
await emit_event(WEATHER_STATE, {"chat_id": 123, "state": state})
"""

from typing import Any, Awaitable, Callable, Dict, List
import logging

logger = logging.getLogger("event_bus")

# === ТИПЫ СОБЫТИЙ ===
WEATHER_STATE = "weather_state"
HOURLY_FORECAST_STATE = "hourly_forecast_state"
RECENT_SEARCHES = "recent_searches"

AsyncHandler = Callable[[Dict[str, Any]], Awaitable[None]]

# Реестр обработчиков
_async_handlers: Dict[str, List[AsyncHandler]] = {}


def subscribe_async(event_type: str, handler: AsyncHandler) -> None:
    """
    Подписка на событие с асинхронным обработчиком.

    Args:
        event_type (str): Тип события (например, WEATHER_STATE)
        handler (callable): Асинхронная функция, принимающая dict с данными события
    """
    if handler is None:
        logger.warning(f"⚠️ Попытка подписаться на событие {event_type} с handler=None. Игнорируем.")
        return
    _async_handlers.setdefault(event_type, []).append(handler)
    logger.debug("Зарегистрирован асинхронный обработчик для события: %s", event_type)


def unsubscribe_async(event_type: str, handler: AsyncHandler) -> None:
    """Отписка от события."""
    if event_type in _async_handlers:
        try:
            _async_handlers[event_type].remove(handler)
            logger.debug("Обработчик удалён для события: %s", event_type)
        except ValueError:
            logger.warning("Обработчик не найден для события: %s", event_type)


async def emit_event(event_type: str, event_data: Dict[str, Any]) -> None:
    """
    Публикация события.

    Обработчики вызываются по порядку подписки. Ошибка в одном обработчике
    логируется и не мешает остальным.
    """
    logger.debug("Публикация события: %s, данные: %s", event_type, event_data)

    for handler in list(_async_handlers.get(event_type, [])):
        try:
            await handler(event_data)
        except Exception as e:
            logger.error("Ошибка в асинхронном обработчике события %s: %s", event_type, e, exc_info=True)


# Утилита для очистки (полезна в тестах)
def clear_all_handlers() -> None:
    """Очищает все зарегистрированные обработчики. Используется в тестах."""
    _async_handlers.clear()
