"""Transport interface shared by the client and both relay legs."""

from __future__ import annotations

from typing import Protocol

from gemini_live.config.websocket import WS_CLOSE_NORMAL_CODE


class Transport(Protocol):
    """One duplex frame stream.

    ``recv()`` and ``send()`` raise ``TransportClosed`` once the peer is gone;
    ``close()`` never raises.
    """

    async def send(self, frame: str | bytes) -> None: ...

    async def recv(self) -> str | bytes: ...

    async def close(self, code: int = WS_CLOSE_NORMAL_CODE, reason: str = "") -> None: ...


__all__ = ["Transport"]
