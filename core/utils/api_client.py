# -*- coding: utf-8 -*-
"""
Клиент OpenWeatherMap.

Два GET-запроса:
- weather  — текущая погода по названию города
- forecast — прогноз на 5 дней с шагом 3 часа

Методы возвращают сырой requests.Response: разбор статуса и тела
делает репозиторий. Сетевые исключения пробрасываются как есть.
"""
import logging
from typing import Optional
from urllib.parse import urljoin

import requests

from config.bot_config import OPENWEATHER_BASE_URL

logger = logging.getLogger("api_client")

# === КОНФИГУРАЦИЯ API ===
API_TIMEOUT = 10  # секунд
DEFAULT_UNITS = "metric"


class WeatherService:
    """Клиент для OpenWeatherMap API (data/2.5)."""

    WEATHER_PATH = "weather"
    FORECAST_PATH = "forecast"

    def __init__(
        self,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = API_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        # urljoin отбрасывает последний сегмент пути без завершающего слэша
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, path: str, params: dict) -> requests.Response:
        url = urljoin(self.base_url, path)
        response = self.session.get(url, params=params, timeout=self.timeout)
        logger.info(f"🌐 GET {path} q={params.get('q')!r} → {response.status_code}")
        return response

    def get_weather(self, city_name: str, api_key: str, units: str = DEFAULT_UNITS) -> requests.Response:
        """Текущая погода в городе."""
        return self._get(self.WEATHER_PATH, {"q": city_name, "appid": api_key, "units": units})

    def get_hourly_forecast(self, city_name: str, api_key: str, units: str = DEFAULT_UNITS) -> requests.Response:
        """Прогноз на 5 дней / 3 часа."""
        return self._get(self.FORECAST_PATH, {"q": city_name, "appid": api_key, "units": units})

    def close(self):
        self.session.close()
