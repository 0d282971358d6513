"""Default live session (setup frame) configuration."""

from __future__ import annotations

ENV_GEMINI_MODEL = "GEMINI_MODEL"
ENV_GEMINI_VOICE = "GEMINI_VOICE"
ENV_GEMINI_TEMPERATURE = "GEMINI_TEMPERATURE"
ENV_GEMINI_TOP_P = "GEMINI_TOP_P"
ENV_GEMINI_TOP_K = "GEMINI_TOP_K"
ENV_GEMINI_RESPONSE_MODALITIES = "GEMINI_RESPONSE_MODALITIES"
ENV_GEMINI_SYSTEM_INSTRUCTION = "GEMINI_SYSTEM_INSTRUCTION"

DEFAULT_GEMINI_MODEL = "models/gemini-2.0-flash-exp"
DEFAULT_GEMINI_VOICE = "Aoede"
DEFAULT_GEMINI_TEMPERATURE = 1.8
DEFAULT_GEMINI_TOP_P = 0.95
DEFAULT_GEMINI_TOP_K = 65
DEFAULT_GEMINI_RESPONSE_MODALITIES = "audio"
DEFAULT_GEMINI_SYSTEM_INSTRUCTION = "You are a helpful assistant."

# Raw PCM sent through the audio convenience sender
DEFAULT_AUDIO_MIME_TYPE = "audio/pcm"

__all__ = [
    "ENV_GEMINI_MODEL",
    "ENV_GEMINI_VOICE",
    "ENV_GEMINI_TEMPERATURE",
    "ENV_GEMINI_TOP_P",
    "ENV_GEMINI_TOP_K",
    "ENV_GEMINI_RESPONSE_MODALITIES",
    "ENV_GEMINI_SYSTEM_INSTRUCTION",
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_GEMINI_VOICE",
    "DEFAULT_GEMINI_TEMPERATURE",
    "DEFAULT_GEMINI_TOP_P",
    "DEFAULT_GEMINI_TOP_K",
    "DEFAULT_GEMINI_RESPONSE_MODALITIES",
    "DEFAULT_GEMINI_SYSTEM_INSTRUCTION",
    "DEFAULT_AUDIO_MIME_TYPE",
]
