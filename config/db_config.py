# -*- coding: utf-8 -*-
"""
Конфигурация путей к локальным файлам проекта.
"""

from pathlib import Path

# === Корень проекта ===
PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# === Папка данных ===
DATA_DIR = PROJECT_ROOT / "data"
DATA_DIR.mkdir(exist_ok=True)

# === НАСТРОЙКИ (аналог SharedPreferences): история поиска ===
PREFERENCES_DB_PATH = DATA_DIR / "preferences.db"

# === Графики почасового прогноза ===
CHARTS_DIR = DATA_DIR / "charts"

# === ПАРАМЕТРЫ ПОДКЛЮЧЕНИЯ ===
DB_CONNECTION_TIMEOUT = 30  # секунд
