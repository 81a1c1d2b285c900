# -*- coding: utf-8 -*-
"""
Репозиторий погоды: HTTP-клиент + локальная история поиска.

Любая ошибка получения данных (сеть, HTTP-статус, пустое тело)
превращается в WeatherFetchError с текстом для пользователя.
"""

import json
import logging
from datetime import datetime
from typing import List, Optional

import requests

from core.db.preferences_db import PreferencesDB
from core.models.recent_search import RecentSearch
from core.models.weather_response import HourlyForecastResponse, HourlyWeather, WeatherResponse
from core.utils.api_client import DEFAULT_UNITS, WeatherService
from core.utils.error_handler import WeatherFetchError, error_message
from scripts.weather._processes.forecast_filter import filter_today_forecast

logger = logging.getLogger("weather_repository")

PREFS_NAME = "recent_searches_prefs"
RECENT_SEARCHES_KEY = "recent_searches"

NO_WEATHER_DATA = "No weather data available"
NO_FORECAST_DATA = "No hourly forecast data available"


def _read_body(response: requests.Response) -> Optional[dict]:
    """JSON-тело ответа или None, если тела нет."""
    if not response.content:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _status_message(response: requests.Response) -> str:
    return response.reason or f"HTTP {response.status_code}"


class WeatherRepository:

    def __init__(self, weather_service: WeatherService, preferences: PreferencesDB, units: str = DEFAULT_UNITS):
        self.weather_service = weather_service
        self.preferences = preferences
        self.units = units

    # === ИСТОРИЯ ПОИСКА ===
    def save_recent_searches(self, searches: List[RecentSearch]) -> None:
        json_string = json.dumps([search.to_dict() for search in searches], ensure_ascii=False)
        self.preferences.put_string(RECENT_SEARCHES_KEY, json_string)

    def get_recent_searches(self) -> List[RecentSearch]:
        json_string = self.preferences.get_string(RECENT_SEARCHES_KEY)
        if json_string is None:
            return []
        try:
            return [RecentSearch.from_dict(item) for item in json.loads(json_string)]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"⚠️ Повреждённая история поиска в {self.preferences.namespace}: {e}")
            return []

    def clear_recent_searches(self) -> None:
        self.preferences.remove(RECENT_SEARCHES_KEY)

    # === ЗАПРОСЫ ===
    def get_weather(self, city_name: str, api_key: str) -> WeatherResponse:
        try:
            response = self.weather_service.get_weather(city_name, api_key, self.units)
        except requests.RequestException as e:
            logger.error(f"❌ Ошибка сети (weather, {city_name!r}): {e}")
            raise WeatherFetchError(error_message(e)) from e

        if not response.ok:
            logger.warning(f"⚠️ weather {city_name!r}: {response.status_code} {response.reason}")
            raise WeatherFetchError(_status_message(response))

        body = _read_body(response)
        if body is None:
            raise WeatherFetchError(NO_WEATHER_DATA)
        try:
            weather = WeatherResponse.from_dict(body)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"❌ Неожиданный формат ответа weather: {e!r}")
            raise WeatherFetchError(NO_WEATHER_DATA) from e

        logger.info(f"✅ Погода получена: {weather.name}, {weather.country_code}, {weather.temperature}°")
        return weather

    def get_hourly_forecast(self, city_name: str, api_key: str, now: Optional[datetime] = None) -> List[HourlyWeather]:
        try:
            response = self.weather_service.get_hourly_forecast(city_name, api_key, self.units)
        except requests.RequestException as e:
            logger.error(f"❌ Ошибка сети (forecast, {city_name!r}): {e}")
            raise WeatherFetchError(error_message(e)) from e

        if not response.ok:
            logger.warning(f"⚠️ forecast {city_name!r}: {response.status_code} {response.reason}")
            raise WeatherFetchError(_status_message(response))

        body = _read_body(response)
        if body is None:
            raise WeatherFetchError(NO_FORECAST_DATA)
        try:
            forecast = HourlyForecastResponse.from_dict(body)
            today_forecast = filter_today_forecast(forecast.list, now)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"❌ Неожиданный формат ответа forecast: {e!r}")
            raise WeatherFetchError(NO_FORECAST_DATA) from e

        logger.info(f"✅ Прогноз получен: {len(forecast.list)} точек, на сегодня {len(today_forecast)}")
        return today_forecast
