"""Relay WebSocket connection handling."""

from __future__ import annotations

import uuid
import logging

from fastapi import WebSocket

from gemini_live.state import RelayDeps
from gemini_live.transport import ServerTransport
from gemini_live.config.websocket import (
    WS_CLOSE_BUSY_REASON,
    WS_CLOSE_TRY_AGAIN_CODE,
    WS_ERROR_SERVER_AT_CAPACITY,
)

from .session import RelaySession
from .errors import reject_connection
from .upstream import redact_url, build_upstream_url

logger = logging.getLogger(__name__)


async def handle_relay_connection(ws: WebSocket, deps: RelayDeps) -> None:
    if not await deps.sessions.admit(ws):
        logger.warning("relay: at capacity (%s sessions); rejecting peer", deps.sessions.capacity)
        await reject_connection(
            ws,
            error_code=WS_ERROR_SERVER_AT_CAPACITY,
            message=WS_CLOSE_BUSY_REASON,
            close_code=WS_CLOSE_TRY_AGAIN_CODE,
        )
        return

    session_id = uuid.uuid4().hex[:8]
    try:
        target = build_upstream_url(
            deps.settings.upstream_url,
            ws.url.path,
            ws.url.query,
            api_key=deps.settings.api_key,
        )
        await ws.accept()
        logger.info(
            "relay %s: accepted -> %s. Active: %s",
            session_id,
            redact_url(target),
            deps.sessions.active_count(),
        )
        session = RelaySession(
            ServerTransport(ws),
            target,
            connector=deps.connector,
            connect_timeout_s=deps.settings.connect_timeout_s,
            heartbeat_interval_s=deps.settings.heartbeat.interval_s,
            session_id=session_id,
        )
        await session.run()
    finally:
        await deps.sessions.release(ws)
        logger.info("relay %s: finished. Active: %s", session_id, deps.sessions.active_count())


__all__ = ["handle_relay_connection"]
