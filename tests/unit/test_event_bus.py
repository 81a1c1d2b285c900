# -*- coding: utf-8 -*-
"""
Тесты для core/event_bus.py
"""
from core.event_bus import emit_event, subscribe_async, unsubscribe_async


async def test_event_bus():
    received_events = []

    async def handler(event):
        received_events.append(event)

    subscribe_async("test_event", handler)
    await emit_event("test_event", {"data": "ok", "chat_id": 123})

    assert len(received_events) == 1
    assert received_events[0]["data"] == "ok"
    assert received_events[0]["chat_id"] == 123


async def test_event_bus_multiple_handlers_in_order():
    received_events = []

    async def handler1(event):
        received_events.append(("h1", event["data"]))

    async def handler2(event):
        received_events.append(("h2", event["data"]))

    subscribe_async("multi_event", handler1)
    subscribe_async("multi_event", handler2)

    await emit_event("multi_event", {"data": "multi"})

    assert received_events == [("h1", "multi"), ("h2", "multi")]


async def test_failing_handler_does_not_stop_others():
    received_events = []

    async def broken(event):
        raise RuntimeError("boom")

    async def handler(event):
        received_events.append(event)

    subscribe_async("event", broken)
    subscribe_async("event", handler)

    await emit_event("event", {"data": 1})

    assert received_events == [{"data": 1}]


async def test_unsubscribe_and_none_handler():
    received_events = []

    async def handler(event):
        received_events.append(event)

    subscribe_async("event", None)
    subscribe_async("event", handler)
    unsubscribe_async("event", handler)
    unsubscribe_async("event", handler)

    await emit_event("event", {"data": 1})
    await emit_event("nobody_listens", {"data": 2})

    assert received_events == []
