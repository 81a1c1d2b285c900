# -*- coding: utf-8 -*-
"""
Отбор точек прогноза на «сегодня».

Вечером (с 18:00 по локальному времени) к сегодняшним точкам добавляются
завтрашние, чтобы на экране не оставалось одной-двух записей.
Сравнивается только дата из dt_txt, часовые пояса не учитываются.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from core.models.weather_response import HourlyWeather

DATE_FORMAT = "%Y-%m-%d"
INCLUDE_TOMORROW_FROM_HOUR = 18


def get_next_date(current_date: str) -> str:
    """'2024-12-31' → '2025-01-01'."""
    day = datetime.strptime(current_date, DATE_FORMAT)
    return (day + timedelta(days=1)).strftime(DATE_FORMAT)


def filter_today_forecast(weather_list: List[HourlyWeather], now: Optional[datetime] = None) -> List[HourlyWeather]:
    if now is None:
        now = datetime.now()
    current_date = now.strftime(DATE_FORMAT)
    include_tomorrow = now.hour >= INCLUDE_TOMORROW_FROM_HOUR
    next_date = get_next_date(current_date)

    return [
        weather for weather in weather_list
        if weather.dt_txt.split(" ")[0] == current_date
        or (include_tomorrow and weather.dt_txt.split(" ")[0] == next_date)
    ]
