"""Test utilities.

Focused modules:
- transport.py: in-memory transports and a scripted connector
- events.py: event recorder with awaitable waits
- settings.py: settings builders with short test timings
"""

from __future__ import annotations

from .events import EventRecorder
from .settings import make_client_settings, make_relay_settings
from .transport import HANG, EchoTransport, FakeConnector, FakeTransport, wait_until

__all__ = [
    "HANG",
    "EchoTransport",
    "EventRecorder",
    "FakeConnector",
    "FakeTransport",
    "make_client_settings",
    "make_relay_settings",
    "wait_until",
]
