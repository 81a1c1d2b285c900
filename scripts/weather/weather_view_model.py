# -*- coding: utf-8 -*-
"""
View-model экрана погоды для одного чата.

Хранит состояние (текущая погода, прогноз, история поиска) и публикует
каждое изменение в event_bus. Экран только подписывается и рисует.
"""

import asyncio
import logging
from typing import Any, List, Optional

from core.event_bus import HOURLY_FORECAST_STATE, RECENT_SEARCHES, WEATHER_STATE, emit_event
from core.models.recent_search import RecentSearch
from core.models.ui_state import (
    IDLE,
    LOADING,
    Error,
    HourlyForecastSuccess,
    HourlyForecastUiState,
    WeatherSuccess,
    WeatherUiState,
)
from core.utils.error_handler import WeatherFetchError, error_message, log_exception
from scripts.weather._services.weather_repository import WeatherRepository

logger = logging.getLogger("weather_view_model")


class WeatherViewModel:

    def __init__(self, repository: WeatherRepository, api_key: str, chat_id: Optional[int] = None):
        self.repository = repository
        self.api_key = api_key
        self.chat_id = chat_id
        self.weather_state: WeatherUiState = IDLE
        self.hourly_forecast_state: HourlyForecastUiState = IDLE
        self._recent_searches: List[RecentSearch] = list(repository.get_recent_searches())

    @property
    def recent_searches(self) -> List[RecentSearch]:
        """История поиска, новые сверху."""
        return list(reversed(self._recent_searches))

    async def _publish(self, event_type: str, **data: Any) -> None:
        await emit_event(event_type, {"chat_id": self.chat_id, **data})

    async def _set_weather_state(self, state: WeatherUiState) -> None:
        self.weather_state = state
        await self._publish(WEATHER_STATE, state=state)

    async def _set_hourly_forecast_state(self, state: HourlyForecastUiState) -> None:
        self.hourly_forecast_state = state
        await self._publish(HOURLY_FORECAST_STATE, state=state)

    async def fetch_weather(self, city: str) -> None:
        await self._set_weather_state(LOADING)
        try:
            weather = await asyncio.to_thread(self.repository.get_weather, city, self.api_key)
        except WeatherFetchError as e:
            await self._set_weather_state(Error(error_message(e)))
            return
        except Exception as e:
            # экран не должен остаться в Loading
            log_exception(e, "Непредвиденная ошибка запроса", {"chat_id": self.chat_id, "city": city})
            await self._set_weather_state(Error(error_message(e)))
            return
        await self._set_weather_state(WeatherSuccess(weather))

    async def fetch_hourly_forecast(self, city: str) -> None:
        await self._set_hourly_forecast_state(LOADING)
        try:
            forecast = await asyncio.to_thread(self.repository.get_hourly_forecast, city, self.api_key)
        except WeatherFetchError as e:
            await self._set_hourly_forecast_state(Error(error_message(e)))
            return
        except Exception as e:
            # экран не должен остаться в Loading
            log_exception(e, "Непредвиденная ошибка запроса", {"chat_id": self.chat_id, "city": city})
            await self._set_hourly_forecast_state(Error(error_message(e)))
            return
        await self._set_hourly_forecast_state(HourlyForecastSuccess(forecast))

    async def add_search(self, city_name: str, country_code: str) -> bool:
        """
        Добавляет город в историю, если пары (город, страна) там ещё нет.
        Возвращает True, если список изменился.
        """
        new_search = RecentSearch(city=city_name, country_code=country_code)
        if any(search.key == new_search.key for search in self._recent_searches):
            return False
        self._recent_searches.append(new_search)
        await asyncio.to_thread(self._save_searches)
        logger.info(f"🕘 Чат {self.chat_id}: в историю добавлен {city_name}, {country_code}")
        await self._publish(RECENT_SEARCHES, searches=self.recent_searches)
        return True

    async def clear_searches(self) -> None:
        await self._set_weather_state(IDLE)
        await self._set_hourly_forecast_state(IDLE)
        self._recent_searches.clear()
        await asyncio.to_thread(self.repository.clear_recent_searches)
        logger.info(f"🧹 Чат {self.chat_id}: история поиска очищена")
        await self._publish(RECENT_SEARCHES, searches=[])

    def _save_searches(self) -> None:
        self.repository.save_recent_searches(self._recent_searches)
