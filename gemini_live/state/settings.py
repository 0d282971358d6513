"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class BackoffSettings:
    base_delay_s: float
    growth: float
    cap_s: float
    max_attempts: int


@dataclass(frozen=True, slots=True)
class HeartbeatSettings:
    interval_s: float


@dataclass(frozen=True, slots=True)
class ClientSettings:
    api_key: str
    base_url: str
    path: str
    connect_timeout_s: float
    max_message_bytes: int
    backoff: BackoffSettings
    heartbeat: HeartbeatSettings


@dataclass(frozen=True, slots=True)
class RelaySettings:
    upstream_url: str
    api_key: str
    max_connections: int
    connect_timeout_s: float
    max_message_bytes: int
    host: str
    port: int
    heartbeat: HeartbeatSettings


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Setup frame contents, sent verbatim as the first frame of every connection."""

    model: str
    voice: str | None = None
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    response_modalities: str | None = None
    system_instruction: str | None = None
    tools: tuple[dict[str, Any], ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, Any]:
        generation: dict[str, Any] = {}
        if self.temperature is not None:
            generation["temperature"] = self.temperature
        if self.top_p is not None:
            generation["top_p"] = self.top_p
        if self.top_k is not None:
            generation["top_k"] = self.top_k
        if self.response_modalities:
            generation["responseModalities"] = self.response_modalities
        if self.voice:
            generation["speechConfig"] = {
                "voiceConfig": {"prebuiltVoiceConfig": {"voiceName": self.voice}},
            }

        payload: dict[str, Any] = {"model": self.model}
        if generation:
            payload["generationConfig"] = generation
        if self.system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": self.system_instruction}]}
        if self.tools:
            payload["tools"] = [dict(tool) for tool in self.tools]
        return payload


__all__ = [
    "BackoffSettings",
    "HeartbeatSettings",
    "ClientSettings",
    "RelaySettings",
    "SessionConfig",
]
