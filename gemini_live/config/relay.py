"""Relay server configuration."""

from __future__ import annotations

ENV_RELAY_UPSTREAM_URL = "RELAY_UPSTREAM_URL"
ENV_RELAY_MAX_CONNECTIONS = "RELAY_MAX_CONNECTIONS"
ENV_RELAY_CONNECT_TIMEOUT_S = "RELAY_CONNECT_TIMEOUT_S"
ENV_RELAY_HOST = "RELAY_HOST"
ENV_RELAY_PORT = "RELAY_PORT"

DEFAULT_RELAY_UPSTREAM_URL = "wss://generativelanguage.googleapis.com"
DEFAULT_RELAY_MAX_CONNECTIONS = 64
DEFAULT_RELAY_CONNECT_TIMEOUT_S = 10.0
DEFAULT_RELAY_HOST = "0.0.0.0"
DEFAULT_RELAY_PORT = 8000

RELAY_APP_IMPORT_PATH = "gemini_live.server:app"

__all__ = [
    "ENV_RELAY_UPSTREAM_URL",
    "ENV_RELAY_MAX_CONNECTIONS",
    "ENV_RELAY_CONNECT_TIMEOUT_S",
    "ENV_RELAY_HOST",
    "ENV_RELAY_PORT",
    "DEFAULT_RELAY_UPSTREAM_URL",
    "DEFAULT_RELAY_MAX_CONNECTIONS",
    "DEFAULT_RELAY_CONNECT_TIMEOUT_S",
    "DEFAULT_RELAY_HOST",
    "DEFAULT_RELAY_PORT",
    "RELAY_APP_IMPORT_PATH",
]
