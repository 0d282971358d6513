"""Relay dependency construction (settings + admission control + upstream connector)."""

from __future__ import annotations

import logging
import functools

from gemini_live.state import RelayDeps
from gemini_live.transport import open_websocket
from gemini_live.relay.session import Connector
from gemini_live.state.settings import RelaySettings
from gemini_live.relay.registry import SessionRegistry

from .settings_loader import load_relay_settings

logger = logging.getLogger(__name__)


def build_relay_deps(
    settings: RelaySettings | None = None,
    *,
    connector: Connector | None = None,
) -> RelayDeps:
    settings = settings or load_relay_settings()
    if connector is None:
        connector = functools.partial(open_websocket, max_size=settings.max_message_bytes)
    if not settings.api_key:
        logger.info("runtime: no relay API key configured; peers must send their own key")
    return RelayDeps(
        settings=settings,
        sessions=SessionRegistry(max_sessions=settings.max_connections),
        connector=connector,
    )


__all__ = ["RelayDeps", "build_relay_deps"]
