"""Publish/subscribe for normalized events."""

from __future__ import annotations

import inspect
import logging
from typing import Any
from collections.abc import Callable

from gemini_live.state.events import EventKind, LiveEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[LiveEvent], Any]


class EventEmitter:
    """Ordered fan-out of events to subscribers.

    Handlers may be plain callables or coroutine functions; they run in
    subscription order and a failing handler is logged without affecting the
    others. ``None`` as the kind subscribes to every event.
    """

    def __init__(self) -> None:
        self._handlers: list[tuple[EventKind | None, EventHandler]] = []

    def on(self, kind: EventKind | str | None, handler: EventHandler) -> Callable[[], None]:
        key = None if kind is None else EventKind(kind)
        entry = (key, handler)
        self._handlers.append(entry)

        def _unsubscribe() -> None:
            if entry in self._handlers:
                self._handlers.remove(entry)

        return _unsubscribe

    def off(self, kind: EventKind | str | None, handler: EventHandler) -> None:
        key = None if kind is None else EventKind(kind)
        self._handlers = [e for e in self._handlers if e != (key, handler)]

    def clear(self) -> None:
        self._handlers.clear()

    async def publish(self, event: LiveEvent) -> None:
        for kind, handler in list(self._handlers):
            if kind is not None and kind is not event.kind:
                continue
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Event handler failed for %s", event.kind.value)


__all__ = ["EventEmitter", "EventHandler"]
