from .stream import Connector, LiveStreamClient
from .emitter import EventEmitter
from .normalizer import Decoded, decode_frame
from .composer import (
    setup_frame,
    user_text_frame,
    media_chunk_frame,
    tool_result_frame,
)

__all__ = [
    "Connector",
    "Decoded",
    "EventEmitter",
    "LiveStreamClient",
    "decode_frame",
    "media_chunk_frame",
    "setup_frame",
    "tool_result_frame",
    "user_text_frame",
]
