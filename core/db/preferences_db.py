# -*- coding: utf-8 -*-
"""
Хранилище настроек «ключ → строка» (аналог SharedPreferences).
Использует SQLite в синхронном режиме.

Каждый экземпляр привязан к одному пространству имён (namespace),
например "recent_searches_prefs:<chat_id>".
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional

from config import db_config

logger = logging.getLogger("preferences_db")


class PreferencesDB:
    """
    Потокобезопасен за счёт локального подключения в каждом методе.
    """

    def __init__(self, namespace: str, db_path: Path = None):
        self.namespace = namespace
        self.db_path = Path(db_path or db_config.PREFERENCES_DB_PATH)
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Создаёт новое подключение к БД."""
        # check_same_thread=False безопасно, т.к. соединение локальное для метода
        conn = sqlite3.connect(
            self.db_path,
            timeout=db_config.DB_CONNECTION_TIMEOUT,
            check_same_thread=False
        )
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self):
        """Создаёт таблицу при первом запуске."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._get_connection()
        try:
            with conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS preferences (
                        namespace TEXT NOT NULL,
                        key TEXT NOT NULL,
                        value TEXT NOT NULL,
                        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                        PRIMARY KEY (namespace, key)
                    )
                """)
        finally:
            conn.close()

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        conn = self._get_connection()
        try:
            row = conn.execute(
                "SELECT value FROM preferences WHERE namespace = ? AND key = ?",
                (self.namespace, key)
            ).fetchone()
            return row["value"] if row else default
        finally:
            conn.close()

    def put_string(self, key: str, value: str) -> None:
        conn = self._get_connection()
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO preferences (namespace, key, value)
                    VALUES (?, ?, ?)
                    ON CONFLICT(namespace, key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (self.namespace, key, value)
                )
            logger.debug(f"💾 {self.namespace}/{key} сохранён ({len(value)} байт)")
        finally:
            conn.close()

    def remove(self, key: str) -> bool:
        """Удаляет ключ. Возвращает True, если ключ был."""
        conn = self._get_connection()
        try:
            with conn:
                cursor = conn.execute(
                    "DELETE FROM preferences WHERE namespace = ? AND key = ?",
                    (self.namespace, key)
                )
            return cursor.rowcount > 0
        finally:
            conn.close()

    def contains(self, key: str) -> bool:
        return self.get_string(key) is not None
