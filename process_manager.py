# process_manager.py
# -*- coding: utf-8 -*-
"""
Глобальный координатор зависимостей.
Инициализирует все сервисы один раз и предоставляет к ним доступ.
"""

import logging
from typing import Dict, Optional

from config.bot_config import BotConfig
from config.logging_config import setup_logging
from core.db.preferences_db import PreferencesDB
from core.utils.api_client import WeatherService
from core.utils.validator import normalize_city_name
from scripts.weather._services.weather_repository import PREFS_NAME, WeatherRepository
from scripts.weather.weather_view_model import WeatherViewModel

logger = logging.getLogger("process_manager")


class ProcessManager:
    """
    Единый контекст приложения. Все зависимости инициализируются здесь.
    """

    def __init__(self):
        self._initialized = False
        # Конфигурация
        self.config: Optional[BotConfig] = None
        # HTTP-клиент погоды (один на приложение)
        self.weather_service: Optional[WeatherService] = None
        # View-model на каждый чат
        self._view_models: Dict[int, WeatherViewModel] = {}
        # Утилиты
        self.normalize_city_name = normalize_city_name

    def initialize_sync(self, config: Optional[BotConfig] = None, configure_logging: bool = True):
        """Синхронная инициализация всех компонентов."""
        if self._initialized:
            return

        # 1. Загрузка конфигурации
        self.config = config or BotConfig.load()
        if configure_logging:
            setup_logging(self.config.log_level)

        # 2. HTTP-клиент
        self.weather_service = WeatherService(
            base_url=self.config.weather_base_url,
            timeout=self.config.api_timeout
        )

        self._initialized = True
        logger.info("✅ ProcessManager: initialized")

    def get_view_model(self, chat_id: int) -> WeatherViewModel:
        """View-model чата; создаётся при первом обращении и живёт до остановки бота."""
        if not self._initialized:
            raise RuntimeError("ProcessManager не инициализирован: вызовите initialize_sync()")

        view_model = self._view_models.get(chat_id)
        if view_model is None:
            preferences = PreferencesDB(namespace=f"{PREFS_NAME}:{chat_id}")
            repository = WeatherRepository(self.weather_service, preferences, units=self.config.units)
            view_model = WeatherViewModel(repository, self.config.weather_api_key, chat_id=chat_id)
            self._view_models[chat_id] = view_model
            logger.debug(f"🧩 Создан view-model для чата {chat_id}")
        return view_model

    def shutdown_sync(self):
        """Синхронное завершение (закрытие ресурсов)."""
        if not self._initialized:
            return

        self.weather_service.close()
        self._view_models.clear()
        self._initialized = False
        logger.info("🛑 ProcessManager: shut down")


# Глобальный экземпляр — точка доступа для всех модулей
process_manager = ProcessManager()
