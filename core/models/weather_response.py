# core/models/weather_response.py
"""
Схемы ответов OpenWeatherMap (эндпоинты /weather и /forecast).

Разбираются только те поля, которые показывает бот.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class Main:
    temp: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Main":
        return cls(temp=float(data["temp"]))


@dataclass(frozen=True)
class WeatherCondition:
    description: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeatherCondition":
        return cls(description=data.get("description", ""))


@dataclass(frozen=True)
class Sys:
    country: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sys":
        return cls(country=data.get("country", ""))


def _conditions(items) -> List[WeatherCondition]:
    return [WeatherCondition.from_dict(item) for item in items or []]


@dataclass(frozen=True)
class WeatherResponse:
    """Текущая погода в городе."""
    name: str
    sys: Sys
    main: Main
    weather: List[WeatherCondition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeatherResponse":
        return cls(
            name=data["name"],
            sys=Sys.from_dict(data.get("sys") or {}),
            main=Main.from_dict(data["main"]),
            weather=_conditions(data.get("weather"))
        )

    @property
    def country_code(self) -> str:
        return self.sys.country

    @property
    def temperature(self) -> float:
        return self.main.temp

    @property
    def description(self) -> str:
        return self.weather[0].description if self.weather else ""


@dataclass(frozen=True)
class HourlyWeather:
    """Одна точка прогноза (шаг 3 часа)."""
    dt: int
    main: Main
    weather: List[WeatherCondition]
    dt_txt: str  # "2024-05-10 18:00:00"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HourlyWeather":
        dt_txt = data["dt_txt"]
        if not isinstance(dt_txt, str):
            raise TypeError(f"dt_txt должен быть строкой, получено {type(dt_txt).__name__}")
        return cls(
            dt=int(data["dt"]),
            main=Main.from_dict(data["main"]),
            weather=_conditions(data.get("weather")),
            dt_txt=dt_txt
        )

    @property
    def temperature(self) -> float:
        return self.main.temp

    @property
    def description(self) -> str:
        return self.weather[0].description if self.weather else ""


@dataclass(frozen=True)
class HourlyForecastResponse:
    list: List[HourlyWeather]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HourlyForecastResponse":
        return cls(list=[HourlyWeather.from_dict(item) for item in data["list"]])
