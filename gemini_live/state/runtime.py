"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from gemini_live.state.settings import RelaySettings
    from gemini_live.relay.session import Connector
    from gemini_live.relay.registry import SessionRegistry


@dataclass(slots=True)
class RelayDeps:
    settings: RelaySettings
    sessions: SessionRegistry
    connector: Connector

    async def shutdown(self) -> None:
        active = self.sessions.active_count()
        if active:
            logger.info("runtime: shutting down with %s relay sessions still open", active)


__all__ = ["RelayDeps"]
