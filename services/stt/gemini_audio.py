"""
Gemini multimodal transcription backend.

A general-purpose generative model repurposed for transcription; second
in the audio fallback chain. Audio travels base64-encoded inline next to
an instruction part. Response shape is the same as Gemini text.
"""

import base64
from typing import Any, Dict

from inference.base import AudioProviderClient
from inference.gemini import build_generate_url
from inference.types import AttemptOutcome

from .base import AudioPayload

TRANSCRIPTION_INSTRUCTION = "Transcribe este audio a texto:"


class GeminiAudioClient(AudioProviderClient):

    def build_payload(self, audio: AudioPayload) -> Dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [
                        {"text": TRANSCRIPTION_INSTRUCTION},
                        {
                            "inline_data": {
                                "mime_type": audio.mime_type,
                                "data": base64.b64encode(audio.data).decode("ascii"),
                            }
                        },
                    ]
                }
            ]
        }

    async def _send(self, audio: AudioPayload) -> AttemptOutcome:
        return await self._post(
            build_generate_url(self.descriptor.base_url, self.descriptor.model),
            json=self.build_payload(audio),
            params={"key": self.descriptor.api_key or ""},
        )
