"""
Provider boundary layer for text completion.

This package provides the provider clients the fallback chain drives,
keeping the orchestrator agnostic of each provider's wire format.

Supported providers:
- GeminiTextClient: Google Gemini generateContent (text provider A)
- HuggingFaceTextClient: Hugging Face text-generation (text provider B)
- StubProviderClient: Deterministic fake provider (CI/tests/offline)

Example usage:
    from inference import StubProviderClient

    client = StubProviderClient(script=["Hola"])
    outcome = await client.attempt("¿Qué repaso?")
    assert outcome.text == "Hola"
"""

from .types import (
    AttemptOutcome,
    AttemptStatus,
    Capability,
    ProviderDescriptor,
    ProviderKind,
)
from .extraction import extract_text
from .base import ProviderClient, TextProviderClient, AudioProviderClient
from .gemini import GeminiTextClient, GEMINI_PLACEHOLDER_KEY
from .huggingface import HuggingFaceTextClient, HUGGINGFACE_PLACEHOLDER_KEY
from .stub import StubProviderClient

__all__ = [
    "AttemptOutcome",
    "AttemptStatus",
    "Capability",
    "ProviderDescriptor",
    "ProviderKind",
    "extract_text",
    "ProviderClient",
    "TextProviderClient",
    "AudioProviderClient",
    "GeminiTextClient",
    "GEMINI_PLACEHOLDER_KEY",
    "HuggingFaceTextClient",
    "HUGGINGFACE_PLACEHOLDER_KEY",
    "StubProviderClient",
]
