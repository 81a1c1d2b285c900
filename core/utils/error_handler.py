# -*- coding: utf-8 -*-
"""
Утилита для централизованной обработки ошибок.
"""

import logging
from typing import Optional

logger = logging.getLogger("error_handler")

UNKNOWN_ERROR_MESSAGE = "Unknown error"


class WeatherFetchError(Exception):
    """
    Единая ошибка получения погоды: сеть, HTTP-статус, пустой ответ.
    Несёт только текст для пользователя.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def error_message(exception: BaseException) -> str:
    """Текст ошибки для показа пользователю."""
    return str(exception) or UNKNOWN_ERROR_MESSAGE


def log_exception(exception: Exception, message: str = "Необработанное исключение", context: Optional[dict] = None):
    """
    Просто логирует исключение без выбрасывания.
    """
    log_context = f" | Контекст: {context}" if context else ""
    logger.error(f"{message}{log_context} | Ошибка: {exception!r}", exc_info=exception)
