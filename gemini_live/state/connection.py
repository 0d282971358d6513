"""Connection lifecycle states."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ConnectionState(str, enum.Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"
    RECONNECTING = "reconnecting"


@dataclass(frozen=True, slots=True)
class ConnectionSnapshot:
    state: ConnectionState
    reconnect_attempts: int
    pending_messages: int
    seconds_since_activity: float | None


__all__ = ["ConnectionState", "ConnectionSnapshot"]
