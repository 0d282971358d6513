"""Relay admission control."""

from __future__ import annotations

import asyncio
from typing import Any


class SessionRegistry:
    """Bounded set of live relay sessions, keyed by their inbound socket."""

    def __init__(self, *, max_sessions: int) -> None:
        self._max = max(1, int(max_sessions))
        self._lock = asyncio.Lock()
        self._active: set[int] = set()

    @property
    def capacity(self) -> int:
        return self._max

    async def admit(self, ws: Any) -> bool:
        """Reserve a slot for ``ws`` (before it is accepted)."""
        async with self._lock:
            if len(self._active) >= self._max:
                return False
            self._active.add(id(ws))
            return True

    async def release(self, ws: Any) -> None:
        async with self._lock:
            self._active.discard(id(ws))

    def active_count(self) -> int:
        return len(self._active)


__all__ = ["SessionRegistry"]
