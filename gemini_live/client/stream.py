"""Live stream client: one logical duplex session with automatic reconnection."""

from __future__ import annotations

import base64
import asyncio
import logging
import functools
from typing import Any
from collections import deque
from urllib.parse import urlparse, urlencode
from collections.abc import Mapping, Callable, Awaitable

import orjson

from gemini_live.transport import Transport, open_websocket
from gemini_live.liveness import Heartbeat, BackoffState, build_ping, build_pong
from gemini_live.config.client import GEMINI_KEY_QUERY_PARAM
from gemini_live.config.models import DEFAULT_AUDIO_MIME_TYPE
from gemini_live.state.settings import SessionConfig, ClientSettings
from gemini_live.state.connection import ConnectionState, ConnectionSnapshot
from gemini_live.state.events import EventKind, LiveEvent, ConnectionFailure
from gemini_live.config.websocket import (
    WS_KEY_PING,
    WS_CLEAN_CLOSE_CODES,
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_ABNORMAL_CODE,
    WS_CLOSE_NORMAL_REASON,
)
from gemini_live.errors import TransportClosed, InvalidEndpointError, MissingCredentialError

from .emitter import EventEmitter, EventHandler
from .normalizer import decode_frame
from .composer import (
    setup_frame,
    user_text_frame,
    media_chunk_frame,
    tool_result_frame,
)

logger = logging.getLogger(__name__)

Connector = Callable[[str], Awaitable[Transport]]

_ACTIVE_STATES = frozenset({ConnectionState.OPEN, ConnectionState.CONNECTING})


def _dumps(payload: Mapping[str, Any]) -> str:
    return orjson.dumps(payload).decode("utf-8")


class LiveStreamClient:
    """Client for the bidirectional live API.

    ``connect()`` opens the stream and sends the setup frame; any frames queued
    with ``enqueue()`` follow it. Inbound frames are decoded into ``LiveEvent``
    values and published to subscribers registered with ``on()``. Abnormal
    closures are retried with exponential backoff; ``disconnect()`` stops
    everything and never reconnects.

    Transport failures never raise out of the public API: they show up as
    lifecycle events and a ``False`` return. Precondition failures (missing
    credential, malformed tool result) raise before any I/O.
    """

    def __init__(
        self,
        settings: ClientSettings,
        session: SessionConfig | Mapping[str, Any],
        *,
        connector: Connector | None = None,
    ) -> None:
        self._settings = settings
        config = session.to_payload() if isinstance(session, SessionConfig) else dict(session)
        self._setup_text = _dumps(setup_frame(config))
        self._connector: Connector = connector or functools.partial(
            open_websocket, max_size=settings.max_message_bytes
        )

        self._events = EventEmitter()
        self._backoff = BackoffState(settings.backoff)
        self._heartbeat = Heartbeat(
            self._send_probe,
            interval_s=settings.heartbeat.interval_s,
            name="live-client",
        )
        self._write_lock = asyncio.Lock()
        self._pending: deque[str] = deque()

        self._state = ConnectionState.IDLE
        self._transport: Transport | None = None
        self._connect_task: asyncio.Task[bool] | None = None
        self._receive_task: asyncio.Task[None] | None = None
        self._reconnect_task: asyncio.Task[None] | None = None
        self._cleanup_tasks: set[asyncio.Future[None]] = set()
        self._closed_by_user = False
        self._reconnect_failed_sent = False

    @property
    def state(self) -> ConnectionState:
        return self._state

    def is_connected(self) -> bool:
        return self._state is ConnectionState.OPEN

    def status(self) -> ConnectionSnapshot:
        return ConnectionSnapshot(
            state=self._state,
            reconnect_attempts=self._backoff.attempts,
            pending_messages=len(self._pending),
            seconds_since_activity=(
                self._heartbeat.seconds_since_activity() if self._state is ConnectionState.OPEN else None
            ),
        )

    def _set_state(self, state: ConnectionState) -> None:
        if state is not self._state:
            logger.debug("live-client: %s -> %s", self._state.value, state.value)
            self._state = state

    def on(self, kind: EventKind | str | None, handler: EventHandler) -> Callable[[], None]:
        return self._events.on(kind, handler)

    def off(self, kind: EventKind | str | None, handler: EventHandler) -> None:
        self._events.off(kind, handler)

    async def _publish(self, kind: EventKind, data: Any = None) -> None:
        await self._events.publish(LiveEvent(kind, data))

    def _build_url(self) -> str:
        base = self._settings.base_url.rstrip("/")
        if urlparse(base).scheme not in {"ws", "wss"}:
            raise InvalidEndpointError(f"base URL must use ws:// or wss://, got {base!r}")
        query = urlencode({GEMINI_KEY_QUERY_PARAM: self._settings.api_key})
        return f"{base}{self._settings.path}?{query}"

    async def connect(self) -> bool:
        """Open the stream; returns whether it is open afterwards."""
        if self._state is ConnectionState.OPEN:
            return True
        task = self._connect_task
        if task is not None and not task.done():
            return await self._join(task)

        if not self._settings.api_key:
            raise MissingCredentialError("an API key is required to open a live session")
        url = self._build_url()

        self._closed_by_user = False
        self._cancel_reconnect()
        task = asyncio.create_task(self._open(url, retry=False))
        self._connect_task = task
        return await self._join(task)

    @staticmethod
    async def _join(task: asyncio.Task[bool]) -> bool:
        # Waiting instead of awaiting keeps a cancelled caller from cancelling the attempt.
        await asyncio.wait({task})
        if task.cancelled():
            return False
        return task.result()

    async def _open(self, url: str, *, retry: bool) -> bool:
        self._set_state(ConnectionState.CONNECTING)
        await self._publish(EventKind.CONNECTING)
        if self._closed_by_user:
            return False
        timeout_s = self._settings.connect_timeout_s
        opening = asyncio.ensure_future(self._connector(url))
        try:
            done, _ = await asyncio.wait({opening}, timeout=timeout_s)
        except asyncio.CancelledError:
            self._discard_opening(opening)
            raise

        if not done:
            self._discard_opening(opening)
            failure = ConnectionFailure("timeout", f"stream did not open within {timeout_s:.1f}s")
        else:
            try:
                transport = opening.result()
            except (TransportClosed, OSError) as exc:
                failure = ConnectionFailure("transport", str(exc))
            else:
                return await self._on_open(transport, retry=retry)

        logger.warning(
            "live-client: connect to %s%s failed (%s): %s",
            self._settings.base_url,
            self._settings.path,
            failure.reason,
            failure.message,
        )
        self._set_state(ConnectionState.CLOSED)
        await self._publish(EventKind.ERROR, failure)
        if retry and not self._closed_by_user:
            await self._schedule_reconnect()
        return False

    def _discard_opening(self, opening: asyncio.Future[Transport]) -> None:
        """Abandon an open attempt; a transport it still produces is closed, not leaked."""
        opening.cancel()
        opening.add_done_callback(self._close_unclaimed)

    def _close_unclaimed(self, opening: asyncio.Future[Transport]) -> None:
        if opening.cancelled() or opening.exception() is not None:
            return
        task = asyncio.ensure_future(opening.result().close(WS_CLOSE_NORMAL_CODE, WS_CLOSE_NORMAL_REASON))
        self._cleanup_tasks.add(task)
        task.add_done_callback(self._cleanup_tasks.discard)

    async def _on_open(self, transport: Transport, *, retry: bool) -> bool:
        self._transport = transport
        self._set_state(ConnectionState.OPEN)
        self._backoff.reset()
        self._reconnect_failed_sent = False
        try:
            async with self._write_lock:
                await transport.send(self._setup_text)
                while self._pending:
                    await transport.send(self._pending.popleft())
        except TransportClosed as exc:
            logger.warning("live-client: stream closed during setup (code=%s)", exc.code)
            await self._handle_closure(transport, exc.code, exc.reason)
            return False

        self._heartbeat.start()
        self._receive_task = asyncio.create_task(self._receive_loop(transport))
        logger.info("live-client: stream open (%s)", "reconnected" if retry else "connected")
        await self._publish(EventKind.CONNECTED)
        if retry:
            await self._publish(EventKind.RECONNECTED)
        return True

    async def disconnect(self) -> None:
        """Close the stream for good. Safe to call repeatedly."""
        self._closed_by_user = True
        # Cancel everything before the first await so nothing can reopen the stream.
        current = asyncio.current_task()
        for task in (self._connect_task, self._reconnect_task, self._receive_task):
            if task is not None and task is not current:
                task.cancel()
        self._connect_task = None
        self._reconnect_task = None
        self._receive_task = None
        self._heartbeat.stop()
        self._pending.clear()

        was_active = self._state not in {ConnectionState.IDLE, ConnectionState.CLOSED}
        transport, self._transport = self._transport, None
        if transport is not None:
            self._set_state(ConnectionState.CLOSING)
            await transport.close(WS_CLOSE_NORMAL_CODE, WS_CLOSE_NORMAL_REASON)
        if self._state is not ConnectionState.IDLE:
            self._set_state(ConnectionState.CLOSED)
        if was_active:
            await self._publish(
                EventKind.DISCONNECTED,
                {"code": WS_CLOSE_NORMAL_CODE, "reason": WS_CLOSE_NORMAL_REASON},
            )

    async def __aenter__(self) -> LiveStreamClient:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.disconnect()

    async def _handle_closure(self, transport: Transport, code: int, reason: str) -> None:
        if self._transport is not transport:
            # Already torn down by disconnect().
            return
        self._transport = None
        self._heartbeat.stop()
        await transport.close(WS_CLOSE_NORMAL_CODE, WS_CLOSE_NORMAL_REASON)

        clean = code in WS_CLEAN_CLOSE_CODES
        if clean:
            self._pending.clear()
            logger.info("live-client: stream closed (code=%s)", code)
        else:
            logger.warning("live-client: stream dropped (code=%s reason=%r)", code, reason)
        self._set_state(ConnectionState.CLOSED)
        await self._publish(EventKind.DISCONNECTED, {"code": code, "reason": reason})

        if not clean and not self._closed_by_user:
            await self._schedule_reconnect()

    async def _schedule_reconnect(self) -> None:
        delay = self._backoff.next_delay()
        if delay is None:
            if not self._reconnect_failed_sent:
                self._reconnect_failed_sent = True
                logger.error("live-client: giving up after %d reconnect attempts", self._backoff.attempts)
                await self._publish(EventKind.RECONNECT_FAILED, {"attempts": self._backoff.attempts})
            return

        attempt = self._backoff.attempts
        self._set_state(ConnectionState.RECONNECTING)
        self._reconnect_task = asyncio.create_task(self._reconnect_after(delay))
        logger.info("live-client: reconnect attempt %d in %.2fs", attempt, delay)
        await self._publish(EventKind.RECONNECTING, {"attempt": attempt, "delay": delay})

    async def _reconnect_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        self._reconnect_task = None
        if self._closed_by_user or self._state in _ACTIVE_STATES:
            return
        self._connect_task = asyncio.create_task(self._open(self._build_url(), retry=True))

    def _cancel_reconnect(self) -> None:
        if self._reconnect_task is not None:
            self._reconnect_task.cancel()
            self._reconnect_task = None

    async def _receive_loop(self, transport: Transport) -> None:
        try:
            while True:
                frame = await transport.recv()
                self._heartbeat.touch()
                try:
                    decoded = decode_frame(frame)
                except Exception:
                    logger.exception("live-client: dropping frame that failed to decode")
                    continue
                if decoded.probe is not None:
                    if decoded.probe.kind == WS_KEY_PING:
                        await self._write(build_pong())
                    continue
                for event in decoded.events:
                    await self._events.publish(event)
        except TransportClosed as exc:
            code, reason = exc.code, exc.reason
        except OSError as exc:
            code, reason = WS_CLOSE_ABNORMAL_CODE, str(exc)
        await self._handle_closure(transport, code, reason)

    async def _write(self, text: str) -> bool:
        async with self._write_lock:
            transport = self._transport
            if transport is None or self._state is not ConnectionState.OPEN:
                return False
            try:
                await transport.send(text)
            except TransportClosed as exc:
                logger.debug("live-client: send failed (code=%s)", exc.code)
                return False
            return True

    async def _send_probe(self) -> None:
        await self._write(build_ping())

    async def enqueue(self, payload: Mapping[str, Any]) -> None:
        """Send a frame now if the stream is open, else right after the setup frame of the next open.

        Unlike the ``send_*`` methods this never opens the stream itself.
        """
        text = _dumps(payload)
        if self._state is ConnectionState.OPEN and await self._write(text):
            return
        self._pending.append(text)

    async def send_json(self, payload: Mapping[str, Any]) -> bool:
        if self._state is not ConnectionState.OPEN and not await self.connect():
            return False
        return await self._write(_dumps(payload))

    async def send_text(self, text: str, *, end_of_turn: bool = True) -> bool:
        return await self.send_json(user_text_frame(text, end_of_turn=end_of_turn))

    async def send_media_chunk(self, mime_type: str, data_b64: str) -> bool:
        return await self.send_json(media_chunk_frame(mime_type, data_b64))

    async def send_audio(self, pcm: bytes, *, mime_type: str = DEFAULT_AUDIO_MIME_TYPE) -> bool:
        return await self.send_media_chunk(mime_type, base64.b64encode(pcm).decode("ascii"))

    async def send_tool_result(
        self,
        call_id: str,
        *,
        output: Any = None,
        error: Any = None,
        name: str | None = None,
    ) -> bool:
        frame = tool_result_frame(call_id, output=output, error=error, name=name)
        return await self.send_json(frame)


__all__ = ["Connector", "LiveStreamClient"]
