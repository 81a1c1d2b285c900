# -*- coding: utf-8 -*-
"""
Сохранение графиков на диск.

Имена файлов: `{prefix}_{timestamp}_{random_suffix}.png`
"""

import logging
import random
import string
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import matplotlib
matplotlib.use("Agg")  # бот работает без дисплея
import matplotlib.pyplot as plt

from config import db_config

logger = logging.getLogger("cache_manager")

KEEP_LAST_CHARTS = 50


def generate_unique_filename(prefix: str, ext: str) -> str:
    """
    Генерирует уникальное имя файла.

    Args:
        prefix (str): Префикс (например, "hourly_123")
        ext (str): Расширение (например, "png")
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    random_suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"{prefix}_{timestamp}_{random_suffix}.{ext}"


def save_plot(fig, prefix: str = "plot", directory: Optional[Path] = None) -> str:
    """
    Сохраняет matplotlib-график в PNG и закрывает фигуру.

    Returns:
        str: Путь к файлу
    """
    directory = Path(directory or db_config.CHARTS_DIR)
    directory.mkdir(parents=True, exist_ok=True)

    if not hasattr(fig, 'savefig'):
        raise ValueError(f"❌ Неизвестный тип данных для сохранения графика: {type(fig)}")

    full_path = directory / generate_unique_filename(prefix, "png")
    fig.savefig(full_path, bbox_inches="tight")
    plt.close(fig)

    logger.info(f"💾 График сохранён: {full_path}")
    return str(full_path)


def cleanup_old_files(directory: Optional[Path] = None, ext: str = "png", keep_last_n: int = KEEP_LAST_CHARTS) -> List[str]:
    """Удаляет старые файлы, оставляя keep_last_n самых свежих. Возвращает удалённые пути."""
    directory = Path(directory or db_config.CHARTS_DIR)
    if not directory.exists():
        return []

    files = sorted(directory.glob(f"*.{ext}"), key=lambda p: p.stat().st_mtime, reverse=True)
    removed = []
    for path in files[keep_last_n:]:
        try:
            path.unlink()
            removed.append(str(path))
        except OSError as e:
            logger.error(f"❌ Не удалось удалить {path}: {e}")

    if removed:
        logger.info(f"🧹 Удалено старых графиков: {len(removed)}")
    return removed
