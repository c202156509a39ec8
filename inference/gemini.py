"""
Gemini text backend (Google Generative Language REST API).

Wire format:
  POST {base_url}/models/{model}:generateContent?key=<api key>
  {"contents": [{"parts": [{"text": <prompt>}]}]}

Response text lives at candidates[0].content.parts[0].text.
"""

from typing import Any, Dict

from .base import TextProviderClient
from .types import AttemptOutcome

GEMINI_PLACEHOLDER_KEY = "your-gemini-api-key-here"


def build_generate_url(base_url: str, model: str) -> str:
    return f"{base_url.rstrip('/')}/models/{model}:generateContent"


class GeminiTextClient(TextProviderClient):
    """Text provider A: first link of the text fallback chain."""

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    async def _send(self, prompt: str) -> AttemptOutcome:
        return await self._post(
            build_generate_url(self.descriptor.base_url, self.descriptor.model),
            json=self.build_payload(prompt),
            params={"key": self.descriptor.api_key or ""},
        )
