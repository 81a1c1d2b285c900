# -*- coding: utf-8 -*-
"""
Форматирование экрана погоды: HTML-карточки (Jinja2) и график температуры.
"""

import logging
import os
from datetime import datetime
from typing import List, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from jinja2 import Template

from core.models.recent_search import RecentSearch
from core.models.weather_response import HourlyWeather, WeatherResponse
from core.utils.display_utils import (
    convert_unix_to_time,
    get_country_name,
    get_relative_time,
    round_temperature,
)

logger = logging.getLogger("formatter")

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "_io", "templates")

_templates = {}


def _get_template(name: str) -> Template:
    """Загружает шаблон из файла один раз."""
    if name not in _templates:
        with open(os.path.join(TEMPLATES_DIR, name), "r", encoding="utf-8") as f:
            _templates[name] = Template(f.read(), autoescape=True, trim_blocks=True)
    return _templates[name]


def format_current_weather(weather: WeatherResponse) -> str:
    return _get_template("current_weather.html.j2").render(
        temp=round_temperature(weather.temperature),
        city=weather.name,
        country=get_country_name(weather.country_code),
        description=weather.description
    ).strip()


def format_hourly_forecast(hourly_forecast: List[HourlyWeather]) -> str:
    items = [
        {
            "time": convert_unix_to_time(weather.dt),
            "temp": round_temperature(weather.temperature),
            "description": weather.description
        }
        for weather in hourly_forecast
    ]
    return _get_template("hourly_forecast.html.j2").render(items=items).strip()


def format_recent_searches(searches: List[RecentSearch], now: Optional[int] = None) -> str:
    """Карточка истории. searches уже в порядке показа (новые сверху)."""
    rows = [
        {
            "city": search.city,
            "country": get_country_name(search.country_code),
            "relative": get_relative_time(search.timestamp, now)
        }
        for search in searches
    ]
    return _get_template("recent_searches.html.j2").render(searches=rows).strip()


def build_hourly_chart(hourly_forecast: List[HourlyWeather], title: str = "Температура"):
    """
    График температуры по точкам прогноза.

    Returns:
        matplotlib.figure.Figure или None, если точек нет
    """
    if not hourly_forecast:
        return None

    times = [datetime.fromtimestamp(weather.dt) for weather in hourly_forecast]
    temps = [weather.temperature for weather in hourly_forecast]
    labels = [convert_unix_to_time(weather.dt) for weather in hourly_forecast]

    fig, ax = plt.subplots(figsize=(8, 3.5))
    ax.plot(times, temps, marker="o", color="tab:red")
    for x, y in zip(times, temps):
        ax.annotate(f"{round_temperature(y)}°", (x, y), textcoords="offset points", xytext=(0, 6), ha="center")
    ax.set_xticks(times)
    ax.set_xticklabels(labels)
    ax.set_ylabel("°C")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()

    logger.debug(f"📈 График построен: {len(times)} точек")
    return fig
