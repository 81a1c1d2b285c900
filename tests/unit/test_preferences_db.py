# -*- coding: utf-8 -*-
"""
Тесты для core/db/preferences_db.py
"""
from core.db.preferences_db import PreferencesDB


def test_put_get_remove(tmp_path):
    db = PreferencesDB(namespace="prefs:1", db_path=tmp_path / "prefs.db")

    assert db.get_string("recent_searches") is None
    assert db.get_string("recent_searches", "[]") == "[]"
    assert db.contains("recent_searches") is False

    db.put_string("recent_searches", '[{"city": "Paris"}]')
    assert db.get_string("recent_searches") == '[{"city": "Paris"}]'
    assert db.contains("recent_searches") is True

    # перезапись того же ключа
    db.put_string("recent_searches", "[]")
    assert db.get_string("recent_searches") == "[]"

    assert db.remove("recent_searches") is True
    assert db.remove("recent_searches") is False
    assert db.get_string("recent_searches") is None


def test_namespaces_are_isolated(tmp_path):
    path = tmp_path / "prefs.db"
    first = PreferencesDB(namespace="prefs:1", db_path=path)
    second = PreferencesDB(namespace="prefs:2", db_path=path)

    first.put_string("key", "one")
    assert second.get_string("key") is None

    second.put_string("key", "two")
    assert first.get_string("key") == "one"


def test_survives_reopen(tmp_path):
    path = tmp_path / "prefs.db"
    PreferencesDB(namespace="prefs:1", db_path=path).put_string("key", "value")
    assert PreferencesDB(namespace="prefs:1", db_path=path).get_string("key") == "value"
