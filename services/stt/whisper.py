"""
Hosted Whisper STT backend (Hugging Face Inference API).

Dedicated transcription provider, first in the audio fallback chain.

Wire format:
  POST {base_url}/models/{whisper_model}
  Authorization: Bearer <api key>
  multipart/form-data, field "file" = (filename, audio bytes, MIME type)

Response text lives at the top-level "text" field.
"""

import logging

from inference.base import AudioProviderClient
from inference.huggingface import bearer_headers, build_model_url
from inference.types import AttemptOutcome

from .base import AudioPayload

logger = logging.getLogger(__name__)


class HuggingFaceWhisperClient(AudioProviderClient):
    """Whisper transcription through the Hugging Face Inference API."""

    async def _send(self, audio: AudioPayload) -> AttemptOutcome:
        logger.info(f"Sending {audio.size} bytes to Whisper ({self.descriptor.model})")
        return await self._post(
            build_model_url(self.descriptor.base_url, self.descriptor.model),
            files={"file": (audio.filename, audio.data, audio.mime_type)},
            headers=bearer_headers(self.descriptor.api_key or ""),
        )
