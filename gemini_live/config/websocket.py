"""WebSocket protocol configuration and constants."""

from __future__ import annotations

# Probe keys
WS_KEY_PING = "ping"
WS_KEY_PONG = "pong"
WS_KEY_ERROR = "error"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_GOING_AWAY_CODE = 1001
WS_CLOSE_NO_STATUS_CODE = 1005
WS_CLOSE_ABNORMAL_CODE = 1006
WS_CLOSE_INTERNAL_ERROR_CODE = 1011
WS_CLOSE_TRY_AGAIN_CODE = 1013
WS_CLOSE_TLS_HANDSHAKE_CODE = 1015

WS_CLEAN_CLOSE_CODES = frozenset({WS_CLOSE_NORMAL_CODE, WS_CLOSE_GOING_AWAY_CODE})

# Codes a peer may receive but never put on the wire
WS_RESERVED_CLOSE_CODES = {
    WS_CLOSE_NO_STATUS_CODE: WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_ABNORMAL_CODE: WS_CLOSE_INTERNAL_ERROR_CODE,
    WS_CLOSE_TLS_HANDSHAKE_CODE: WS_CLOSE_INTERNAL_ERROR_CODE,
}

WS_CLOSE_NORMAL_REASON = "Normal closure"
WS_CLOSE_UPSTREAM_FAILED_REASON = "Upstream connection failed"
WS_CLOSE_BUSY_REASON = "Server at capacity"
WS_MAX_CLOSE_REASON_BYTES = 123

# Errors (error.code values sent by the relay)
WS_ERROR_SERVER_AT_CAPACITY = "server_at_capacity"

# Plain HTTP requests on relay paths
WS_EXPECTED_UPGRADE_MESSAGE = "Expected WebSocket connection"

__all__ = [
    "WS_KEY_PING",
    "WS_KEY_PONG",
    "WS_KEY_ERROR",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_GOING_AWAY_CODE",
    "WS_CLOSE_NO_STATUS_CODE",
    "WS_CLOSE_ABNORMAL_CODE",
    "WS_CLOSE_INTERNAL_ERROR_CODE",
    "WS_CLOSE_TRY_AGAIN_CODE",
    "WS_CLOSE_TLS_HANDSHAKE_CODE",
    "WS_CLEAN_CLOSE_CODES",
    "WS_RESERVED_CLOSE_CODES",
    "WS_CLOSE_NORMAL_REASON",
    "WS_CLOSE_UPSTREAM_FAILED_REASON",
    "WS_CLOSE_BUSY_REASON",
    "WS_MAX_CLOSE_REASON_BYTES",
    "WS_ERROR_SERVER_AT_CAPACITY",
    "WS_EXPECTED_UPGRADE_MESSAGE",
]
