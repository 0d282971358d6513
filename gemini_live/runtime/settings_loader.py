"""Environment parsing for client, relay and session settings."""

from __future__ import annotations

import os

from gemini_live.config.secrets import ENV_RELAY_API_KEY, ENV_GEMINI_API_KEY
from gemini_live.state.settings import (
    RelaySettings,
    SessionConfig,
    ClientSettings,
    BackoffSettings,
    HeartbeatSettings,
)
from gemini_live.config.relay import (
    ENV_RELAY_HOST,
    ENV_RELAY_PORT,
    DEFAULT_RELAY_HOST,
    DEFAULT_RELAY_PORT,
    ENV_RELAY_UPSTREAM_URL,
    ENV_RELAY_MAX_CONNECTIONS,
    DEFAULT_RELAY_UPSTREAM_URL,
    ENV_RELAY_CONNECT_TIMEOUT_S,
    DEFAULT_RELAY_MAX_CONNECTIONS,
    DEFAULT_RELAY_CONNECT_TIMEOUT_S,
)
from gemini_live.config.models import (
    ENV_GEMINI_MODEL,
    ENV_GEMINI_TOP_K,
    ENV_GEMINI_TOP_P,
    ENV_GEMINI_VOICE,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_GEMINI_TOP_K,
    DEFAULT_GEMINI_TOP_P,
    DEFAULT_GEMINI_VOICE,
    ENV_GEMINI_TEMPERATURE,
    DEFAULT_GEMINI_TEMPERATURE,
    ENV_GEMINI_SYSTEM_INSTRUCTION,
    ENV_GEMINI_RESPONSE_MODALITIES,
    DEFAULT_GEMINI_SYSTEM_INSTRUCTION,
    DEFAULT_GEMINI_RESPONSE_MODALITIES,
)
from gemini_live.config.client import (
    ENV_GEMINI_WS_URL,
    ENV_GEMINI_WS_PATH,
    DEFAULT_GEMINI_WS_URL,
    DEFAULT_GEMINI_WS_PATH,
    ENV_LIVE_RECONNECT_CAP_S,
    ENV_LIVE_RECONNECT_BASE_S,
    ENV_LIVE_CONNECT_TIMEOUT_S,
    ENV_LIVE_MAX_MESSAGE_BYTES,
    ENV_LIVE_RECONNECT_GROWTH,
    DEFAULT_LIVE_RECONNECT_CAP_S,
    DEFAULT_LIVE_RECONNECT_BASE_S,
    ENV_LIVE_HEARTBEAT_INTERVAL_S,
    DEFAULT_LIVE_CONNECT_TIMEOUT_S,
    DEFAULT_LIVE_MAX_MESSAGE_BYTES,
    DEFAULT_LIVE_RECONNECT_GROWTH,
    ENV_LIVE_MAX_RECONNECT_ATTEMPTS,
    DEFAULT_LIVE_HEARTBEAT_INTERVAL_S,
    DEFAULT_LIVE_MAX_RECONNECT_ATTEMPTS,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _load_backoff_settings() -> BackoffSettings:
    return BackoffSettings(
        base_delay_s=max(0.0, _float_env(ENV_LIVE_RECONNECT_BASE_S, DEFAULT_LIVE_RECONNECT_BASE_S)),
        growth=max(1.0, _float_env(ENV_LIVE_RECONNECT_GROWTH, DEFAULT_LIVE_RECONNECT_GROWTH)),
        cap_s=max(0.0, _float_env(ENV_LIVE_RECONNECT_CAP_S, DEFAULT_LIVE_RECONNECT_CAP_S)),
        max_attempts=max(0, _int_env(ENV_LIVE_MAX_RECONNECT_ATTEMPTS, DEFAULT_LIVE_MAX_RECONNECT_ATTEMPTS)),
    )


def _load_heartbeat_settings() -> HeartbeatSettings:
    return HeartbeatSettings(
        interval_s=_float_env(ENV_LIVE_HEARTBEAT_INTERVAL_S, DEFAULT_LIVE_HEARTBEAT_INTERVAL_S),
    )


def load_client_settings() -> ClientSettings:
    return ClientSettings(
        api_key=_str_env(ENV_GEMINI_API_KEY, ""),
        base_url=_str_env(ENV_GEMINI_WS_URL, DEFAULT_GEMINI_WS_URL),
        path=_str_env(ENV_GEMINI_WS_PATH, DEFAULT_GEMINI_WS_PATH),
        connect_timeout_s=_float_env(ENV_LIVE_CONNECT_TIMEOUT_S, DEFAULT_LIVE_CONNECT_TIMEOUT_S),
        max_message_bytes=_int_env(ENV_LIVE_MAX_MESSAGE_BYTES, DEFAULT_LIVE_MAX_MESSAGE_BYTES),
        backoff=_load_backoff_settings(),
        heartbeat=_load_heartbeat_settings(),
    )


def load_relay_settings() -> RelaySettings:
    return RelaySettings(
        upstream_url=_str_env(ENV_RELAY_UPSTREAM_URL, DEFAULT_RELAY_UPSTREAM_URL),
        api_key=_str_env(ENV_RELAY_API_KEY, ""),
        max_connections=max(1, _int_env(ENV_RELAY_MAX_CONNECTIONS, DEFAULT_RELAY_MAX_CONNECTIONS)),
        connect_timeout_s=_float_env(ENV_RELAY_CONNECT_TIMEOUT_S, DEFAULT_RELAY_CONNECT_TIMEOUT_S),
        max_message_bytes=_int_env(ENV_LIVE_MAX_MESSAGE_BYTES, DEFAULT_LIVE_MAX_MESSAGE_BYTES),
        host=_str_env(ENV_RELAY_HOST, DEFAULT_RELAY_HOST),
        port=_int_env(ENV_RELAY_PORT, DEFAULT_RELAY_PORT),
        heartbeat=_load_heartbeat_settings(),
    )


def load_session_config() -> SessionConfig:
    return SessionConfig(
        model=_str_env(ENV_GEMINI_MODEL, DEFAULT_GEMINI_MODEL),
        voice=_str_env(ENV_GEMINI_VOICE, DEFAULT_GEMINI_VOICE),
        temperature=_float_env(ENV_GEMINI_TEMPERATURE, DEFAULT_GEMINI_TEMPERATURE),
        top_p=_float_env(ENV_GEMINI_TOP_P, DEFAULT_GEMINI_TOP_P),
        top_k=_int_env(ENV_GEMINI_TOP_K, DEFAULT_GEMINI_TOP_K),
        response_modalities=_str_env(ENV_GEMINI_RESPONSE_MODALITIES, DEFAULT_GEMINI_RESPONSE_MODALITIES),
        system_instruction=_str_env(ENV_GEMINI_SYSTEM_INSTRUCTION, DEFAULT_GEMINI_SYSTEM_INSTRUCTION),
    )


__all__ = ["load_client_settings", "load_relay_settings", "load_session_config"]
