"""
Speech-to-Text service exports.

Clean interface for the orchestrator to import STT components.
"""

from .base import (
    AUDIO_MIME_TYPES,
    SUPPORTED_EXTENSIONS,
    AudioPayload,
    audio_extension,
    is_supported_format,
    mime_type_for,
)
from .whisper import HuggingFaceWhisperClient
from .gemini_audio import GeminiAudioClient, TRANSCRIPTION_INSTRUCTION

__all__ = [
    "AUDIO_MIME_TYPES",
    "SUPPORTED_EXTENSIONS",
    "AudioPayload",
    "audio_extension",
    "is_supported_format",
    "mime_type_for",
    "HuggingFaceWhisperClient",
    "GeminiAudioClient",
    "TRANSCRIPTION_INSTRUCTION",
]
