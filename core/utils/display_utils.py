# -*- coding: utf-8 -*-
"""
Форматирование значений для показа: страна, час, «сколько прошло».
"""

import math
import time
from datetime import datetime
from typing import Optional

import pycountry

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS


def get_country_name(country_code: str) -> str:
    """Полное название страны по ISO-коду ("GB" → "United Kingdom")."""
    if not country_code:
        return ""
    country = pycountry.countries.get(alpha_2=country_code.upper())
    if country is None:
        return country_code
    return getattr(country, "common_name", None) or country.name


def convert_unix_to_time(dt: int) -> str:
    """Unix-время → час в локальной зоне: 3PM, 12AM."""
    hour = datetime.fromtimestamp(dt).hour
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}{suffix}"


def _plural(n: int, one: str, few: str, many: str) -> str:
    if n % 10 == 1 and n % 100 != 11:
        return one
    if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
        return few
    return many


def get_relative_time(timestamp: int, now: Optional[int] = None) -> str:
    """
    Относительное время с точностью до минуты, timestamp в миллисекундах.
    Совсем свежие записи — «0 минут назад».
    """
    if now is None:
        now = int(time.time() * 1000)
    delta = now - timestamp
    future = delta < 0
    delta = abs(delta)

    if delta < HOUR_MS:
        n = delta // MINUTE_MS
        unit = _plural(n, "минуту", "минуты", "минут")
    elif delta < DAY_MS:
        n = delta // HOUR_MS
        unit = _plural(n, "час", "часа", "часов")
    else:
        n = delta // DAY_MS
        unit = _plural(n, "день", "дня", "дней")

    return f"через {n} {unit}" if future else f"{n} {unit} назад"


def round_temperature(temp: float) -> int:
    """Округление до целого, половины — вверх (2.5 → 3, -2.5 → -2)."""
    return math.floor(temp + 0.5)
