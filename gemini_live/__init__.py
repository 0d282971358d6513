"""Bidirectional live streaming client and relay."""

from .client import LiveStreamClient
from .state import (
    EventKind,
    LiveEvent,
    SessionConfig,
    ClientSettings,
    ConnectionState,
)
from .errors import (
    ToolResultError,
    TransportClosed,
    PreconditionError,
    MissingCredentialError,
)
from .runtime.settings_loader import load_session_config, load_client_settings

__all__ = [
    "ClientSettings",
    "ConnectionState",
    "EventKind",
    "LiveEvent",
    "LiveStreamClient",
    "MissingCredentialError",
    "PreconditionError",
    "SessionConfig",
    "ToolResultError",
    "TransportClosed",
    "load_client_settings",
    "load_session_config",
]
