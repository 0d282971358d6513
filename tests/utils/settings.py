"""Settings builders with test-friendly timings."""

from __future__ import annotations

from gemini_live.state.settings import (
    RelaySettings,
    ClientSettings,
    BackoffSettings,
    HeartbeatSettings,
)


def make_client_settings(
    *,
    api_key: str = "test-key",
    base_url: str = "wss://live.test",
    path: str = "/ws/live",
    connect_timeout_s: float = 1.0,
    base_delay_s: float = 0.01,
    growth: float = 1.5,
    cap_s: float = 1.0,
    max_attempts: int = 5,
    heartbeat_interval_s: float = 0.0,
) -> ClientSettings:
    return ClientSettings(
        api_key=api_key,
        base_url=base_url,
        path=path,
        connect_timeout_s=connect_timeout_s,
        max_message_bytes=1024 * 1024,
        backoff=BackoffSettings(
            base_delay_s=base_delay_s,
            growth=growth,
            cap_s=cap_s,
            max_attempts=max_attempts,
        ),
        heartbeat=HeartbeatSettings(interval_s=heartbeat_interval_s),
    )


def make_relay_settings(
    *,
    upstream_url: str = "wss://upstream.test",
    api_key: str = "",
    max_connections: int = 8,
    connect_timeout_s: float = 1.0,
    heartbeat_interval_s: float = 0.0,
) -> RelaySettings:
    return RelaySettings(
        upstream_url=upstream_url,
        api_key=api_key,
        max_connections=max_connections,
        connect_timeout_s=connect_timeout_s,
        max_message_bytes=1024 * 1024,
        host="127.0.0.1",
        port=0,
        heartbeat=HeartbeatSettings(interval_s=heartbeat_interval_s),
    )


__all__ = ["make_client_settings", "make_relay_settings"]
