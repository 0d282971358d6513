"""Per-connection liveness monitor."""

from __future__ import annotations

import time
import asyncio
import logging
from typing import Any
from collections.abc import Callable, Awaitable

logger = logging.getLogger(__name__)


class Heartbeat:
    """Sends a probe when the peer has been silent for longer than ``interval_s``.

    ``touch()`` is called for every inbound frame. Each tick the monitor checks
    the silence since the last touch; when it exceeds the interval one probe is
    sent and the marker is reset, so a dead peer gets at most one probe per
    interval. ``stop()`` is synchronous so teardown never yields to a tick.
    """

    def __init__(
        self,
        send_probe: Callable[[], Awaitable[Any]],
        *,
        interval_s: float,
        name: str = "connection",
    ) -> None:
        self._send_probe = send_probe
        self._interval_s = float(interval_s)
        self._name = name
        self._last_activity = time.monotonic()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def touch(self) -> None:
        self._last_activity = time.monotonic()

    def seconds_since_activity(self) -> float:
        return time.monotonic() - self._last_activity

    def start(self) -> asyncio.Task | None:
        if self._interval_s <= 0:
            return None
        if self._task is None:
            self._last_activity = time.monotonic()
            self._task = asyncio.create_task(self._probe_loop())
        return self._task

    def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        self._task = None

    async def _probe_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self._interval_s)
                if self.seconds_since_activity() < self._interval_s:
                    continue
                logger.debug("%s: silent for %.1fs; sending probe", self._name, self.seconds_since_activity())
                await self._send_probe()
                self._last_activity = time.monotonic()
        except asyncio.CancelledError:
            return
        except Exception:
            logger.debug("%s: heartbeat exiting due to unexpected error", self._name, exc_info=True)


__all__ = ["Heartbeat"]
