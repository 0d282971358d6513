"""Stream client connection configuration."""

from __future__ import annotations

# Endpoint
ENV_GEMINI_WS_URL = "GEMINI_WS_URL"
ENV_GEMINI_WS_PATH = "GEMINI_WS_PATH"
DEFAULT_GEMINI_WS_URL = "wss://generativelanguage.googleapis.com"
DEFAULT_GEMINI_WS_PATH = "/ws/google.ai.generativelanguage.v1beta.GenerativeService.BidiGenerateContent"
GEMINI_KEY_QUERY_PARAM = "key"

# Connect
ENV_LIVE_CONNECT_TIMEOUT_S = "LIVE_CONNECT_TIMEOUT_S"
ENV_LIVE_MAX_MESSAGE_BYTES = "LIVE_MAX_MESSAGE_BYTES"
DEFAULT_LIVE_CONNECT_TIMEOUT_S = 10.0
DEFAULT_LIVE_MAX_MESSAGE_BYTES = 16 * 1024 * 1024

# Reconnect backoff
ENV_LIVE_RECONNECT_BASE_S = "LIVE_RECONNECT_BASE_S"
ENV_LIVE_RECONNECT_GROWTH = "LIVE_RECONNECT_GROWTH"
ENV_LIVE_RECONNECT_CAP_S = "LIVE_RECONNECT_CAP_S"
ENV_LIVE_MAX_RECONNECT_ATTEMPTS = "LIVE_MAX_RECONNECT_ATTEMPTS"
DEFAULT_LIVE_RECONNECT_BASE_S = 1.0
DEFAULT_LIVE_RECONNECT_GROWTH = 1.5
DEFAULT_LIVE_RECONNECT_CAP_S = 30.0
DEFAULT_LIVE_MAX_RECONNECT_ATTEMPTS = 5

# Heartbeat
ENV_LIVE_HEARTBEAT_INTERVAL_S = "LIVE_HEARTBEAT_INTERVAL_S"
DEFAULT_LIVE_HEARTBEAT_INTERVAL_S = 30.0

__all__ = [
    "ENV_GEMINI_WS_URL",
    "ENV_GEMINI_WS_PATH",
    "DEFAULT_GEMINI_WS_URL",
    "DEFAULT_GEMINI_WS_PATH",
    "GEMINI_KEY_QUERY_PARAM",
    "ENV_LIVE_CONNECT_TIMEOUT_S",
    "ENV_LIVE_MAX_MESSAGE_BYTES",
    "DEFAULT_LIVE_CONNECT_TIMEOUT_S",
    "DEFAULT_LIVE_MAX_MESSAGE_BYTES",
    "ENV_LIVE_RECONNECT_BASE_S",
    "ENV_LIVE_RECONNECT_GROWTH",
    "ENV_LIVE_RECONNECT_CAP_S",
    "ENV_LIVE_MAX_RECONNECT_ATTEMPTS",
    "DEFAULT_LIVE_RECONNECT_BASE_S",
    "DEFAULT_LIVE_RECONNECT_GROWTH",
    "DEFAULT_LIVE_RECONNECT_CAP_S",
    "DEFAULT_LIVE_MAX_RECONNECT_ATTEMPTS",
    "ENV_LIVE_HEARTBEAT_INTERVAL_S",
    "DEFAULT_LIVE_HEARTBEAT_INTERVAL_S",
]
