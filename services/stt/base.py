"""
Speech-to-Text (STT) shared types.

Role: Audio → text transformation only.

Rules:
- Audio is fully buffered (immutable bytes), so every provider in the
  chain can read it
- The filename extension decides both the format gate and the MIME type
- Format checks happen before any provider is contacted
"""

import os
from dataclasses import dataclass

# Extension → MIME type sent to providers
AUDIO_MIME_TYPES = {
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".m4a": "audio/mp4",
    ".ogg": "audio/ogg",
}

SUPPORTED_EXTENSIONS = frozenset(AUDIO_MIME_TYPES)


def audio_extension(filename: str) -> str:
    """Lower-cased extension including the dot ("" when absent)."""
    return os.path.splitext(filename or "")[1].lower()


def is_supported_format(filename: str) -> bool:
    return audio_extension(filename) in SUPPORTED_EXTENSIONS


def mime_type_for(filename: str) -> str:
    return AUDIO_MIME_TYPES.get(audio_extension(filename), "audio/mpeg")


@dataclass(frozen=True)
class AudioPayload:
    """Speech-to-Text request payload."""

    data: bytes
    filename: str

    @property
    def extension(self) -> str:
        return audio_extension(self.filename)

    @property
    def mime_type(self) -> str:
        return mime_type_for(self.filename)

    @property
    def size(self) -> int:
        return len(self.data)
