"""Inbound WebSocket transport over a FastAPI/Starlette ``WebSocket``."""

from __future__ import annotations

import contextlib

from fastapi import WebSocket, WebSocketDisconnect

from gemini_live.errors import TransportClosed
from gemini_live.config.websocket import (
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_ABNORMAL_CODE,
    WS_CLOSE_NO_STATUS_CODE,
)


class ServerTransport:
    def __init__(self, websocket: WebSocket) -> None:
        self._ws = websocket

    async def send(self, frame: str | bytes) -> None:
        try:
            if isinstance(frame, bytes):
                await self._ws.send_bytes(frame)
            else:
                await self._ws.send_text(frame)
        except WebSocketDisconnect as exc:
            raise TransportClosed(exc.code, exc.reason or "") from exc
        except (RuntimeError, OSError) as exc:
            raise TransportClosed(WS_CLOSE_ABNORMAL_CODE, "") from exc

    async def recv(self) -> str | bytes:
        try:
            message = await self._ws.receive()
        except (RuntimeError, OSError) as exc:
            raise TransportClosed(WS_CLOSE_ABNORMAL_CODE, "") from exc
        if message["type"] == "websocket.disconnect":
            raise TransportClosed(
                int(message.get("code") or WS_CLOSE_NO_STATUS_CODE),
                message.get("reason") or "",
            )
        text = message.get("text")
        if text is not None:
            return text
        return message.get("bytes") or b""

    async def close(self, code: int = WS_CLOSE_NORMAL_CODE, reason: str = "") -> None:
        with contextlib.suppress(RuntimeError, OSError, WebSocketDisconnect):
            await self._ws.close(code=code, reason=reason)


__all__ = ["ServerTransport"]
