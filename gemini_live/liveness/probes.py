"""Liveness probe frames (``{"ping": ms}`` / ``{"pong": ms}``)."""

from __future__ import annotations

import time
from typing import Any
from collections.abc import Mapping

import orjson

from gemini_live.config.websocket import WS_KEY_PING, WS_KEY_PONG

# Probes are tiny; anything larger is data and is never parsed on the relay path.
PROBE_MAX_BYTES = 64


def now_ms() -> int:
    return int(time.time() * 1000)


def build_ping() -> str:
    return orjson.dumps({WS_KEY_PING: now_ms()}).decode("utf-8")


def build_pong() -> str:
    return orjson.dumps({WS_KEY_PONG: now_ms()}).decode("utf-8")


def probe_kind(message: Mapping[str, Any]) -> str | None:
    if WS_KEY_PING in message:
        return WS_KEY_PING
    if WS_KEY_PONG in message:
        return WS_KEY_PONG
    return None


def frame_probe_kind(frame: str | bytes) -> str | None:
    """Classify a raw frame as a probe without decoding data frames."""
    if len(frame) > PROBE_MAX_BYTES:
        return None
    try:
        message = orjson.loads(frame)
    except orjson.JSONDecodeError:
        return None
    if not isinstance(message, dict):
        return None
    return probe_kind(message)


__all__ = [
    "PROBE_MAX_BYTES",
    "now_ms",
    "build_ping",
    "build_pong",
    "probe_kind",
    "frame_probe_kind",
]
