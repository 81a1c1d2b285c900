# -*- coding: utf-8 -*-
"""
Общие фикстуры: поддельный HTTP, временная БД настроек, поддельный Telegram-бот.
"""
import json
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
import requests

from config import db_config
from core import event_bus
from core.db.preferences_db import PreferencesDB
from core.utils.api_client import WeatherService
from scripts.weather._services.weather_repository import PREFS_NAME, WeatherRepository


def make_response(status_code: int = 200, body=None, reason: str = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason if reason is not None else ("OK" if status_code == 200 else "")
    if body is None:
        response._content = b""
    elif isinstance(body, (bytes, str)):
        response._content = body.encode() if isinstance(body, str) else body
    else:
        response._content = json.dumps(body).encode()
    return response


def weather_body(name="London", country="GB", temp=18.4, description="light rain"):
    return {
        "name": name,
        "sys": {"country": country},
        "main": {"temp": temp, "humidity": 70},
        "weather": [{"id": 500, "main": "Rain", "description": description}],
    }


def forecast_body(start: datetime, count: int = 16, step_hours: int = 3):
    items = []
    for i in range(count):
        moment = start + timedelta(hours=step_hours * i)
        items.append({
            "dt": int(moment.timestamp()),
            "main": {"temp": 10.0 + i},
            "weather": [{"description": "clear sky"}],
            "dt_txt": moment.strftime("%Y-%m-%d %H:%M:%S"),
        })
    return {"cod": "200", "cnt": count, "list": items}


class FakeSession:
    """Вместо requests.Session: ответы по последнему сегменту URL."""

    def __init__(self):
        self.responses = {}
        self.errors = {}
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        path = url.rstrip("/").rsplit("/", 1)[-1]
        self.calls.append((path, dict(params or {}), timeout))
        if path in self.errors:
            raise self.errors[path]
        return self.responses[path]

    def close(self):
        self.closed = True


class FakeBot:
    """Записывает всё, что экран отправил бы в Telegram."""

    def __init__(self):
        self.sent = []
        self._next_id = 1

    async def send_message(self, chat_id, text, **kwargs):
        self.sent.append(("message", chat_id, text))
        message_id = self._next_id
        self._next_id += 1
        return SimpleNamespace(message_id=message_id)

    async def send_chat_action(self, chat_id, action, **kwargs):
        self.sent.append(("action", chat_id, action))

    async def send_photo(self, chat_id, photo, caption=None, **kwargs):
        self.sent.append(("photo", chat_id, caption))

    async def edit_message_text(self, text, chat_id=None, message_id=None, **kwargs):
        self.sent.append(("edit", chat_id, text))

    def texts(self, kind="message"):
        return [item[2] for item in self.sent if item[0] == kind]


@pytest.fixture
def prefs_path(tmp_path, monkeypatch):
    path = tmp_path / "preferences.db"
    monkeypatch.setattr(db_config, "PREFERENCES_DB_PATH", path)
    monkeypatch.setattr(db_config, "CHARTS_DIR", tmp_path / "charts")
    return path


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def repository(prefs_path, fake_session):
    service = WeatherService(session=fake_session)
    preferences = PreferencesDB(namespace=f"{PREFS_NAME}:1", db_path=prefs_path)
    return WeatherRepository(service, preferences)


@pytest.fixture(autouse=True)
def clean_event_bus():
    yield
    event_bus.clear_all_handlers()


# === ЭКРАН ЦЕЛИКОМ ===
CHAT_ID = 777


class FakeCallbackQuery:
    def __init__(self, data):
        self.data = data
        self.answered = False

    async def answer(self, *args, **kwargs):
        self.answered = True


def make_update(text=None, callback_data=None, chat_id=CHAT_ID):
    """Минимальный Update: чат, текст сообщения или нажатая кнопка."""
    return SimpleNamespace(
        effective_chat=SimpleNamespace(id=chat_id),
        message=SimpleNamespace(text=text) if text is not None else None,
        callback_query=FakeCallbackQuery(callback_data) if callback_data is not None else None,
    )


def make_context(bot, args=None):
    return SimpleNamespace(bot=bot, args=args)


@pytest.fixture
def bot(prefs_path):
    """FakeBot с подписанными наблюдателями; HTTP идёт в bot.session."""
    from config.bot_config import BotConfig
    from process_manager import process_manager
    from scripts.weather import weather_handler

    process_manager.initialize_sync(
        config=BotConfig(telegram_token="token", weather_api_key="secret"),
        configure_logging=False
    )
    session = FakeSession()
    process_manager.weather_service = WeatherService(session=session)
    fake_bot = FakeBot()
    weather_handler.register_state_observers(fake_bot)
    fake_bot.session = session
    yield fake_bot
    process_manager.shutdown_sync()
    weather_handler._recent_cards.clear()
