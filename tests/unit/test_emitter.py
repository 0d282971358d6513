from __future__ import annotations

import logging

import pytest

from gemini_live.client.emitter import EventEmitter
from gemini_live.state.events import EventKind, LiveEvent


@pytest.mark.asyncio
async def test_handlers_run_in_subscription_order_and_filter_by_kind() -> None:
    emitter = EventEmitter()
    seen: list[str] = []

    emitter.on(EventKind.TEXT_DELTA, lambda e: seen.append(f"a:{e.data}"))
    emitter.on("text-delta", lambda e: seen.append(f"b:{e.data}"))
    emitter.on(EventKind.AUDIO_DELTA, lambda e: seen.append("audio"))

    await emitter.publish(LiveEvent(EventKind.TEXT_DELTA, "x"))

    assert seen == ["a:x", "b:x"]


@pytest.mark.asyncio
async def test_wildcard_and_async_handlers() -> None:
    emitter = EventEmitter()
    seen: list[EventKind] = []

    async def record(event: LiveEvent) -> None:
        seen.append(event.kind)

    emitter.on(None, record)
    await emitter.publish(LiveEvent(EventKind.CONNECTED))
    await emitter.publish(LiveEvent(EventKind.TURN_COMPLETE))

    assert seen == [EventKind.CONNECTED, EventKind.TURN_COMPLETE]


@pytest.mark.asyncio
async def test_unsubscribe_and_off() -> None:
    emitter = EventEmitter()
    seen: list[str] = []

    def first(event: LiveEvent) -> None:
        seen.append("first")

    def second(event: LiveEvent) -> None:
        seen.append("second")

    unsubscribe = emitter.on(EventKind.ERROR, first)
    emitter.on(EventKind.ERROR, second)
    unsubscribe()
    emitter.off(EventKind.ERROR, second)

    await emitter.publish(LiveEvent(EventKind.ERROR, {}))

    assert seen == []


@pytest.mark.asyncio
async def test_failing_handler_does_not_stop_others(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR)
    emitter = EventEmitter()
    seen: list[str] = []

    def broken(event: LiveEvent) -> None:
        raise RuntimeError("handler bug")

    emitter.on(EventKind.TEXT_DELTA, broken)
    emitter.on(EventKind.TEXT_DELTA, lambda e: seen.append(e.data))

    await emitter.publish(LiveEvent(EventKind.TEXT_DELTA, "still delivered"))

    assert seen == ["still delivered"]
    assert "Event handler failed" in caplog.text
