from .registry import SessionRegistry
from .session import RelaySession
from .manager import handle_relay_connection
from .upstream import redact_url, build_upstream_url

__all__ = [
    "RelaySession",
    "SessionRegistry",
    "build_upstream_url",
    "handle_relay_connection",
    "redact_url",
]
