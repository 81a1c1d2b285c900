# -*- coding: utf-8 -*-
"""
Полная цепочка без сети: поиск города → view-model → event_bus → экран (FakeBot).
"""
from datetime import datetime

from conftest import CHAT_ID, forecast_body, make_response, weather_body
from process_manager import process_manager
from scripts.weather.weather_handler import run_search, send_recent_searches


async def test_search_shows_forecast_weather_and_history(bot):
    today = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
    bot.session.responses["forecast"] = make_response(200, forecast_body(today))
    bot.session.responses["weather"] = make_response(200, weather_body(name="London", country="GB", temp=18.4))

    await run_search(CHAT_ID, "London")

    # сначала прогноз (график), потом текущая погода
    kinds = [item[0] for item in bot.sent]
    assert kinds.index("photo") < kinds.index("message")
    assert "Почасовой прогноз" in bot.texts("photo")[0]
    assert "<b>18°C</b>" in bot.texts()[0]

    # успешный ответ добавил город в историю
    view_model = process_manager.get_view_model(CHAT_ID)
    assert [(s.city, s.country_code) for s in view_model.recent_searches] == [("London", "GB")]
    assert [p[0] for p in bot.session.calls] == ["forecast", "weather"]


async def test_repeated_search_does_not_duplicate_history(bot):
    bot.session.responses["forecast"] = make_response(200, {"list": []})
    bot.session.responses["weather"] = make_response(200, weather_body(name="Paris", country="FR"))

    await run_search(CHAT_ID, "Paris")
    await run_search(CHAT_ID, "paris")

    view_model = process_manager.get_view_model(CHAT_ID)
    assert len(view_model.recent_searches) == 1
    # пустой прогноз — текст без графика
    assert not bot.texts("photo")
    assert any("Нет данных на сегодня." in text for text in bot.texts())


async def test_error_is_shown_as_notification(bot):
    bot.session.responses["forecast"] = make_response(404, None, reason="Not Found")
    bot.session.responses["weather"] = make_response(404, None, reason="Not Found")

    await run_search(CHAT_ID, "Atlantis")

    # одно уведомление: ошибка прогноза только логируется
    assert bot.texts() == ["⚠️ Not Found"]
    assert process_manager.get_view_model(CHAT_ID).recent_searches == []


async def test_recent_card_is_redrawn_on_change(bot):
    bot.session.responses["forecast"] = make_response(200, {"list": []})
    bot.session.responses["weather"] = make_response(200, weather_body(name="Oslo", country="NO"))

    await send_recent_searches(bot, CHAT_ID)
    assert "Недавних запросов пока нет" in bot.texts()[0]

    await run_search(CHAT_ID, "Oslo")
    assert "Oslo, Norway" in bot.texts("edit")[-1]

    await process_manager.get_view_model(CHAT_ID).clear_searches()
    assert "Недавних запросов пока нет" in bot.texts("edit")[-1]
