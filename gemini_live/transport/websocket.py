"""Outbound WebSocket transport over the ``websockets`` client."""

from __future__ import annotations

import contextlib
from typing import Any

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from gemini_live.errors import TransportClosed
from gemini_live.config.websocket import WS_CLOSE_NORMAL_CODE, WS_CLOSE_ABNORMAL_CODE


def _closed_from(exc: ConnectionClosed) -> TransportClosed:
    frame = exc.rcvd
    if frame is None:
        return TransportClosed(WS_CLOSE_ABNORMAL_CODE, "")
    return TransportClosed(frame.code, frame.reason)


class WebSocketTransport:
    def __init__(self, ws: Any) -> None:
        self._ws = ws

    async def send(self, frame: str | bytes) -> None:
        try:
            await self._ws.send(frame)
        except ConnectionClosed as exc:
            raise _closed_from(exc) from exc

    async def recv(self) -> str | bytes:
        try:
            return await self._ws.recv()
        except ConnectionClosed as exc:
            raise _closed_from(exc) from exc

    async def close(self, code: int = WS_CLOSE_NORMAL_CODE, reason: str = "") -> None:
        with contextlib.suppress(ConnectionClosed, OSError):
            await self._ws.close(code=code, reason=reason)


async def open_websocket(url: str, *, max_size: int | None = None) -> WebSocketTransport:
    # Liveness is handled by our own probes, not protocol-level pings.
    try:
        ws = await websockets.connect(url, ping_interval=None, ping_timeout=None, max_size=max_size)
    except WebSocketException as exc:
        raise TransportClosed(WS_CLOSE_ABNORMAL_CODE, f"handshake failed: {exc}") from exc
    return WebSocketTransport(ws)


__all__ = ["WebSocketTransport", "open_websocket"]
