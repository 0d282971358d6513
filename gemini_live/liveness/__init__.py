from .probes import build_ping, build_pong, probe_kind, frame_probe_kind
from .backoff import BackoffState
from .heartbeat import Heartbeat

__all__ = [
    "BackoffState",
    "Heartbeat",
    "build_ping",
    "build_pong",
    "frame_probe_kind",
    "probe_kind",
]
