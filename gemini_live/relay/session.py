"""One relayed session: an inbound peer bridged to one upstream stream."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections import deque
from collections.abc import Callable, Awaitable

from gemini_live.errors import TransportClosed
from gemini_live.transport import Transport
from gemini_live.liveness import Heartbeat, build_ping, build_pong, frame_probe_kind
from gemini_live.config.websocket import (
    WS_KEY_PING,
    WS_CLOSE_NORMAL_CODE,
    WS_RESERVED_CLOSE_CODES,
    WS_MAX_CLOSE_REASON_BYTES,
    WS_CLOSE_INTERNAL_ERROR_CODE,
    WS_CLOSE_UPSTREAM_FAILED_REASON,
)

from .upstream import redact_url

logger = logging.getLogger(__name__)

Connector = Callable[[str], Awaitable[Transport]]

INBOUND = "inbound"
UPSTREAM = "upstream"


def wire_close_code(code: int) -> int:
    """Map a received close code to one that may be sent on the wire."""
    code = WS_RESERVED_CLOSE_CODES.get(code, code)
    if code < 1000 or code > 4999:
        return WS_CLOSE_INTERNAL_ERROR_CODE
    return code


def wire_close_reason(reason: str) -> str:
    raw = (reason or "").encode("utf-8")
    if len(raw) <= WS_MAX_CLOSE_REASON_BYTES:
        return reason or ""
    return raw[:WS_MAX_CLOSE_REASON_BYTES].decode("utf-8", "ignore")


class RelaySession:
    """Forwards frames between ``inbound`` and the upstream at ``upstream_url``.

    Frames that arrive before the upstream leg is open are queued and flushed
    in order once it opens. Probe frames are answered on the leg they arrive
    on and never forwarded. When either leg closes the other is closed with
    the same code and reason.
    """

    def __init__(
        self,
        inbound: Transport,
        upstream_url: str,
        *,
        connector: Connector,
        connect_timeout_s: float,
        heartbeat_interval_s: float,
        session_id: str = "-",
    ) -> None:
        self._inbound = inbound
        self._upstream: Transport | None = None
        self._upstream_url = upstream_url
        self._connector = connector
        self._connect_timeout_s = float(connect_timeout_s)
        self._session_id = session_id

        self._pending: deque[str | bytes] = deque()
        self._upstream_open = False
        self._locks = {INBOUND: asyncio.Lock(), UPSTREAM: asyncio.Lock()}
        self._heartbeats = {
            INBOUND: Heartbeat(
                lambda: self._send(INBOUND, build_ping()),
                interval_s=heartbeat_interval_s,
                name=f"relay {session_id} {INBOUND}",
            ),
            UPSTREAM: Heartbeat(
                lambda: self._send(UPSTREAM, build_ping()),
                interval_s=heartbeat_interval_s,
                name=f"relay {session_id} {UPSTREAM}",
            ),
        }

        self._finished = asyncio.Event()
        self._close_code = WS_CLOSE_NORMAL_CODE
        self._close_reason = ""
        self._closed_by: str | None = None

    @property
    def upstream_open(self) -> bool:
        return self._upstream_open

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def close_code(self) -> int:
        return self._close_code

    async def run(self) -> None:
        """Relay until either leg closes, then close both."""
        self._heartbeats[INBOUND].start()
        tasks = [
            asyncio.create_task(self._pump_inbound()),
            asyncio.create_task(self._open_and_pump_upstream()),
        ]
        try:
            await self._finished.wait()
        finally:
            self._stop_heartbeats()
            for task in tasks:
                task.cancel()
            for task in tasks:
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            await self._close_legs()

    def _finish(self, origin: str, code: int, reason: str) -> None:
        if self._finished.is_set():
            return
        self._closed_by = origin
        self._close_code = wire_close_code(code)
        self._close_reason = wire_close_reason(reason)
        self._stop_heartbeats()
        self._finished.set()
        logger.info(
            "relay %s: %s leg closed (code=%s reason=%r)",
            self._session_id,
            origin,
            code,
            reason,
        )

    def _stop_heartbeats(self) -> None:
        for heartbeat in self._heartbeats.values():
            heartbeat.stop()

    async def _close_legs(self) -> None:
        code, reason = self._close_code, self._close_reason
        upstream, self._upstream = self._upstream, None
        self._upstream_open = False
        self._pending.clear()
        if upstream is not None:
            await upstream.close(code, reason)
        await self._inbound.close(code, reason)

    async def _send(self, leg: str, frame: str | bytes) -> bool:
        transport = self._inbound if leg == INBOUND else self._upstream
        if transport is None:
            return False
        async with self._locks[leg]:
            try:
                await transport.send(frame)
            except TransportClosed as exc:
                self._finish(leg, exc.code, exc.reason)
                return False
        return True

    async def _answer_probe(self, leg: str, frame: str | bytes) -> bool:
        kind = frame_probe_kind(frame)
        if kind is None:
            return False
        if kind == WS_KEY_PING:
            await self._send(leg, build_pong())
        return True

    async def _pump_inbound(self) -> None:
        try:
            while True:
                frame = await self._inbound.recv()
                self._heartbeats[INBOUND].touch()
                if await self._answer_probe(INBOUND, frame):
                    continue
                if not self._upstream_open:
                    self._pending.append(frame)
                    continue
                await self._send(UPSTREAM, frame)
        except TransportClosed as exc:
            self._finish(INBOUND, exc.code, exc.reason)
        except Exception:
            logger.exception("relay %s: inbound pump failed", self._session_id)
            self._finish(INBOUND, WS_CLOSE_INTERNAL_ERROR_CODE, "")

    async def _open_and_pump_upstream(self) -> None:
        target = redact_url(self._upstream_url)
        try:
            upstream = await asyncio.wait_for(self._connector(self._upstream_url), timeout=self._connect_timeout_s)
        except (TimeoutError, TransportClosed, OSError) as exc:
            logger.warning("relay %s: upstream %s unavailable: %s", self._session_id, target, str(exc) or "timeout")
            self._finish(UPSTREAM, WS_CLOSE_INTERNAL_ERROR_CODE, WS_CLOSE_UPSTREAM_FAILED_REASON)
            return

        self._upstream = upstream
        logger.info("relay %s: upstream %s open", self._session_id, target)
        try:
            async with self._locks[UPSTREAM]:
                while self._pending:
                    await upstream.send(self._pending.popleft())
                # Queue is empty and no await separates the check from the flip.
                self._upstream_open = True
            self._heartbeats[UPSTREAM].start()

            while True:
                frame = await upstream.recv()
                self._heartbeats[UPSTREAM].touch()
                if await self._answer_probe(UPSTREAM, frame):
                    continue
                await self._send(INBOUND, frame)
        except TransportClosed as exc:
            self._finish(UPSTREAM, exc.code, exc.reason)
        except Exception:
            logger.exception("relay %s: upstream pump failed", self._session_id)
            self._finish(UPSTREAM, WS_CLOSE_INTERNAL_ERROR_CODE, "")


__all__ = ["RelaySession", "wire_close_code", "wire_close_reason"]
