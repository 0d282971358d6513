"""Inbound frame decoding into normalized events.

Every frame from the service is one JSON object in one of several shapes. The
shapes are tried in a fixed order and the first match decides the frame's
meaning; the result is a (possibly empty) list of ``LiveEvent`` values in the
order the application should see them. Probe frames decode to a ``Probe``
marker so the caller can answer them without surfacing anything.
"""

from __future__ import annotations

import base64
import logging
import binascii
from typing import Any
from dataclasses import dataclass
from collections.abc import Callable

import orjson

from gemini_live.state.events import EventKind, LiveEvent
from gemini_live.config.websocket import WS_KEY_PING, WS_KEY_PONG, WS_KEY_ERROR

logger = logging.getLogger(__name__)

AUDIO_MIME_PREFIX = "audio/"

FINISH_REASON_UNSPECIFIED = "FINISH_REASON_UNSPECIFIED"
# Finish reasons that do not mark the candidate text as final.
NON_FINAL_FINISH_REASONS = frozenset({FINISH_REASON_UNSPECIFIED, "MAX_TOKENS"})


@dataclass(frozen=True, slots=True)
class Probe:
    kind: str
    value: Any = None


@dataclass(frozen=True, slots=True)
class Decoded:
    events: list[LiveEvent]
    probe: Probe | None = None


def _decode_error(message: dict[str, Any]) -> Decoded:
    return Decoded([LiveEvent(EventKind.ERROR, message)])


def _decode_probe(message: dict[str, Any]) -> Decoded:
    kind = WS_KEY_PING if WS_KEY_PING in message else WS_KEY_PONG
    return Decoded([], probe=Probe(kind, message.get(kind)))


def _decode_audio_part(part: dict[str, Any]) -> LiveEvent | None:
    if "audioContent" in part:
        return _decode_audio_data(part["audioContent"])
    inline = part.get("inlineData")
    if not isinstance(inline, dict):
        return None
    mime_type = inline.get("mimeType")
    if not isinstance(mime_type, str) or not mime_type.startswith(AUDIO_MIME_PREFIX):
        return None
    return _decode_audio_data(inline.get("data"), mime_type)


def _decode_audio_data(data: Any, mime_type: str | None = None) -> LiveEvent | None:
    if not isinstance(data, str):
        return None
    try:
        pcm = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Dropping audio part with invalid base64 payload (%d chars)", len(data))
        return None
    return LiveEvent(EventKind.AUDIO_DELTA, {"audio": pcm, "mime_type": mime_type})


def _decode_parts(parts: Any, text_kind: EventKind) -> list[LiveEvent]:
    """Text parts become one event at the first text position; audio parts stay in order."""
    events: list[LiveEvent] = []
    texts: list[str] = []
    text_slot: int | None = None
    for part in parts if isinstance(parts, list) else []:
        if not isinstance(part, dict):
            continue
        text = part.get("text")
        if isinstance(text, str) and text:
            if text_slot is None:
                text_slot = len(events)
            texts.append(text)
        audio = _decode_audio_part(part)
        if audio is not None:
            events.append(audio)
    if text_slot is not None:
        events.insert(text_slot, LiveEvent(text_kind, "".join(texts)))
    return events


def _decode_server_content(message: dict[str, Any]) -> Decoded:
    content = message.get("serverContent")
    if not isinstance(content, dict):
        return Decoded([])
    turn = content.get("modelTurn")
    if not isinstance(turn, dict):
        turn = content.get("turn")
    if not isinstance(turn, dict):
        turn = {}

    events = _decode_parts(turn.get("parts"), EventKind.TEXT_DELTA)
    if content.get("interrupted"):
        events.append(LiveEvent(EventKind.INTERRUPTED))
    if content.get("turnComplete") or turn.get("turnComplete"):
        events.append(LiveEvent(EventKind.TURN_COMPLETE))
    return Decoded(events)


def _decode_candidates(message: dict[str, Any]) -> Decoded:
    candidates = message.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        logger.warning("Received candidates frame without any candidate")
        return Decoded([])
    candidate = candidates[0]
    if not isinstance(candidate, dict):
        return Decoded([])

    content = candidate.get("content")
    finish_reason = candidate.get("finishReason")
    if not isinstance(finish_reason, str):
        finish_reason = None
    # A finish reason other than "unspecified"/"max tokens" means the text is final.
    final = finish_reason is not None and finish_reason not in NON_FINAL_FINISH_REASONS
    text_kind = EventKind.TEXT_DELTA if final else EventKind.TRANSCRIPTION

    events = _decode_parts(content.get("parts") if isinstance(content, dict) else None, text_kind)
    if finish_reason is not None and finish_reason != FINISH_REASON_UNSPECIFIED:
        events.append(LiveEvent(EventKind.TURN_COMPLETE))
    return Decoded(events)


def _decode_plain_text(message: dict[str, Any]) -> Decoded:
    text = message.get("text")
    events = [LiveEvent(EventKind.TEXT_DELTA, text)] if isinstance(text, str) and text else []
    events.append(LiveEvent(EventKind.TURN_COMPLETE))
    return Decoded(events)


def _decode_setup_complete(message: dict[str, Any]) -> Decoded:
    return Decoded([LiveEvent(EventKind.SETUP_COMPLETE, message.get("setupComplete"))])


def _decode_tool_call(message: dict[str, Any]) -> Decoded:
    return Decoded([LiveEvent(EventKind.TOOL_CALL, message.get("toolCall"))])


def _decode_tool_call_cancellation(message: dict[str, Any]) -> Decoded:
    return Decoded([LiveEvent(EventKind.TOOL_CALL_CANCELLED, message.get("toolCallCancellation"))])


# First match wins; matching is on key presence only.
SHAPES: tuple[tuple[Callable[[dict[str, Any]], bool], Callable[[dict[str, Any]], Decoded]], ...] = (
    (lambda m: WS_KEY_ERROR in m, _decode_error),
    (lambda m: WS_KEY_PING in m or WS_KEY_PONG in m, _decode_probe),
    (lambda m: "serverContent" in m, _decode_server_content),
    (lambda m: "candidates" in m, _decode_candidates),
    (lambda m: "text" in m, _decode_plain_text),
    (lambda m: "setupComplete" in m, _decode_setup_complete),
    (lambda m: "toolCall" in m, _decode_tool_call),
    (lambda m: "toolCallCancellation" in m, _decode_tool_call_cancellation),
)


def decode_message(message: Any) -> Decoded:
    if not isinstance(message, dict):
        logger.warning("Ignoring non-object frame of type %s", type(message).__name__)
        return Decoded([])
    for matches, decode in SHAPES:
        if matches(message):
            return decode(message)
    logger.warning("Ignoring unrecognized frame with keys %s", sorted(message)[:8])
    return Decoded([])


def decode_frame(frame: str | bytes) -> Decoded:
    """Decode one raw frame; binary frames carry UTF-8 JSON text."""
    try:
        message = orjson.loads(frame)
    except orjson.JSONDecodeError:
        logger.warning("Dropping undecodable %s frame (%d bytes)", type(frame).__name__, len(frame))
        return Decoded([])
    return decode_message(message)


__all__ = [
    "Decoded",
    "Probe",
    "SHAPES",
    "decode_frame",
    "decode_message",
]
