"""Outbound frame builders."""

from __future__ import annotations

from typing import Any
from collections.abc import Mapping

from gemini_live.errors import ToolResultError


def setup_frame(config: Mapping[str, Any]) -> dict[str, Any]:
    return {"setup": dict(config)}


def user_text_frame(text: str, *, end_of_turn: bool = True) -> dict[str, Any]:
    return {
        "clientContent": {
            "turns": [{"role": "user", "parts": [{"text": text}]}],
            "turnComplete": bool(end_of_turn),
        }
    }


def media_chunk_frame(mime_type: str, data_b64: str) -> dict[str, Any]:
    return {"realtimeInput": {"mediaChunks": [{"mimeType": mime_type, "data": data_b64}]}}


def tool_result_frame(
    call_id: str,
    *,
    output: Any = None,
    error: Any = None,
    name: str | None = None,
) -> dict[str, Any]:
    """Build a tool response carrying exactly one of ``output`` or ``error``."""
    if not call_id:
        raise ToolResultError("tool result requires the id of the originating call")
    if (output is None) == (error is None):
        raise ToolResultError("tool result requires exactly one of output or error")

    response: dict[str, Any] = {"output": output} if error is None else {"error": error}
    function_response: dict[str, Any] = {"id": call_id}
    if name:
        function_response["name"] = name
    function_response["response"] = response
    return {"toolResponse": {"functionResponses": [function_response]}}


__all__ = [
    "setup_frame",
    "user_text_frame",
    "media_chunk_frame",
    "tool_result_frame",
]
