# core/models/ui_state.py
"""
Состояния экрана погоды.

Idle -> Loading -> Success | Error. Idle возвращается только после очистки истории.
"""
from dataclasses import dataclass
from typing import List, Union

from core.models.weather_response import HourlyWeather, WeatherResponse


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class WeatherSuccess:
    weather: WeatherResponse


@dataclass(frozen=True)
class HourlyForecastSuccess:
    hourly_forecast: List[HourlyWeather]


@dataclass(frozen=True)
class Error:
    message: str


WeatherUiState = Union[Idle, Loading, WeatherSuccess, Error]
HourlyForecastUiState = Union[Idle, Loading, HourlyForecastSuccess, Error]

IDLE = Idle()
LOADING = Loading()
