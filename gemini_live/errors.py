"""Shared error types for the live stream client and relay."""

from __future__ import annotations

from gemini_live.config.websocket import WS_CLOSE_ABNORMAL_CODE


class PreconditionError(ValueError):
    """Raised before any I/O when a call cannot possibly succeed."""


class MissingCredentialError(PreconditionError):
    """Raised by ``connect()`` when no API key is configured."""


class InvalidEndpointError(PreconditionError):
    """Raised when the configured base URL is not a ws:// or wss:// URL."""


class ToolResultError(PreconditionError):
    """Raised for a tool result without an id or with both/neither output and error."""


class TransportClosed(Exception):
    """Raised by a transport once the underlying socket is gone.

    ``code`` is the close code received from the peer, or 1006 when the socket
    dropped without a close frame.
    """

    def __init__(self, code: int = WS_CLOSE_ABNORMAL_CODE, reason: str = "") -> None:
        super().__init__(f"transport closed: code={code} reason={reason!r}")
        self.code = code
        self.reason = reason


__all__ = [
    "PreconditionError",
    "MissingCredentialError",
    "InvalidEndpointError",
    "ToolResultError",
    "TransportClosed",
]
