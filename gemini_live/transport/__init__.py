from gemini_live.errors import TransportClosed

from .base import Transport
from .server import ServerTransport
from .websocket import WebSocketTransport, open_websocket

__all__ = [
    "ServerTransport",
    "Transport",
    "TransportClosed",
    "WebSocketTransport",
    "open_websocket",
]
