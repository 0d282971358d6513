"""Normalized event model shared by the decoder and subscribers."""

from __future__ import annotations

import enum
from typing import Any
from dataclasses import field, dataclass


class EventKind(str, enum.Enum):
    # Content (decoded from inbound frames)
    TEXT_DELTA = "text-delta"
    TRANSCRIPTION = "transcription"
    AUDIO_DELTA = "audio-delta"
    TURN_COMPLETE = "turn-complete"
    INTERRUPTED = "interrupted"
    TOOL_CALL = "tool-call"
    TOOL_CALL_CANCELLED = "tool-call-cancelled"
    SETUP_COMPLETE = "setup-complete"
    ERROR = "error"
    # Lifecycle
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    RECONNECTING = "reconnecting"
    RECONNECTED = "reconnected"
    RECONNECT_FAILED = "reconnect-failed"


@dataclass(frozen=True, slots=True)
class LiveEvent:
    kind: EventKind
    data: Any = None


@dataclass(frozen=True, slots=True)
class ConnectionFailure:
    """Payload of a lifecycle ``error`` event raised by the transport, not the peer."""

    reason: str
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)


__all__ = ["EventKind", "LiveEvent", "ConnectionFailure"]
