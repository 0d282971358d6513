from .runtime import RelayDeps
from .events import EventKind, LiveEvent, ConnectionFailure
from .settings import (
    RelaySettings,
    SessionConfig,
    ClientSettings,
    BackoffSettings,
    HeartbeatSettings,
)
from .connection import ConnectionState, ConnectionSnapshot

__all__ = [
    "BackoffSettings",
    "ClientSettings",
    "ConnectionFailure",
    "ConnectionSnapshot",
    "ConnectionState",
    "EventKind",
    "HeartbeatSettings",
    "LiveEvent",
    "RelayDeps",
    "RelaySettings",
    "SessionConfig",
]
