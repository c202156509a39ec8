"""
Hugging Face Inference API text-generation backend.

Wire format:
  POST {base_url}/models/{model}
  Authorization: Bearer <api key>
  {"inputs": <prompt>, "parameters": {...}}

Response text lives at [0].generated_text.
"""

from typing import Any, Dict

from .base import TextProviderClient
from .types import AttemptOutcome

HUGGINGFACE_PLACEHOLDER_KEY = "your-huggingface-api-key-here"

DEFAULT_GENERATION_PARAMETERS: Dict[str, Any] = {
    "max_new_tokens": 250,
    "temperature": 0.7,
    "top_p": 0.95,
    "do_sample": True,
}


def build_model_url(base_url: str, model: str) -> str:
    return f"{base_url.rstrip('/')}/models/{model}"


def bearer_headers(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}


class HuggingFaceTextClient(TextProviderClient):
    """Text provider B: used only after Gemini has exhausted its retries."""

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {"inputs": prompt, "parameters": dict(DEFAULT_GENERATION_PARAMETERS)}

    async def _send(self, prompt: str) -> AttemptOutcome:
        return await self._post(
            build_model_url(self.descriptor.base_url, self.descriptor.model),
            json=self.build_payload(prompt),
            headers=bearer_headers(self.descriptor.api_key or ""),
        )
