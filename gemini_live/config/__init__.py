"""Configuration module exports (env names and defaults only)."""

from .websocket import (
    WS_CLEAN_CLOSE_CODES,
    WS_CLOSE_NORMAL_CODE,
)

__all__ = [
    "WS_CLEAN_CLOSE_CODES",
    "WS_CLOSE_NORMAL_CODE",
]
