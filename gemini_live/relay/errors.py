"""Error frames the relay sends on its own behalf."""

from __future__ import annotations

import logging
import contextlib
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


def build_error_payload(code: str, message: str, *, status: int | None = None) -> dict[str, Any]:
    # Same envelope as upstream errors so clients surface it as an error event.
    error: dict[str, Any] = {"code": code, "message": message}
    if status is not None:
        error["status"] = status
    return {"error": error}


async def reject_connection(
    ws: WebSocket,
    *,
    error_code: str,
    message: str,
    close_code: int,
) -> None:
    # Accept so we can send a structured error, then close.
    try:
        await ws.accept()
    except (RuntimeError, OSError):
        logger.debug("relay: accept failed while rejecting", exc_info=True)
        return
    try:
        await ws.send_text(orjson.dumps(build_error_payload(error_code, message, status=close_code)).decode("utf-8"))
    except (WebSocketDisconnect, RuntimeError, OSError):
        logger.debug("relay: rejection frame not delivered", exc_info=True)
    with contextlib.suppress(WebSocketDisconnect, RuntimeError, OSError):
        await ws.close(code=close_code, reason=message)


__all__ = ["build_error_payload", "reject_connection"]
