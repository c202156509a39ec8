"""
Infrastructure configuration system.

Environment-based provider construction with sensible defaults.
Credentials and endpoints are captured once here and injected into each
provider client; the orchestrator never reads the environment itself.
"""

import os
from typing import List, Literal, Optional
from dataclasses import dataclass

from inference import (
    Capability,
    GeminiTextClient,
    HuggingFaceTextClient,
    ProviderClient,
    ProviderDescriptor,
    ProviderKind,
    StubProviderClient,
    GEMINI_PLACEHOLDER_KEY,
    HUGGINGFACE_PLACEHOLDER_KEY,
)
from services.stt import GeminiAudioClient, HuggingFaceWhisperClient
from agent.orchestrator import AIRequestOrchestrator
from agent.retry import worst_case_seconds


AIBackendType = Literal["remote", "stub"]

# Providers per remote chain (Gemini → HF text, Whisper → Gemini audio)
REMOTE_CHAIN_LENGTH = 2


@dataclass
class InfraConfig:
    """Infrastructure configuration from environment."""

    ai_backend: AIBackendType

    # Gemini
    gemini_base_url: str
    gemini_model: str
    gemini_audio_model: str
    gemini_api_key: Optional[str]

    # Hugging Face
    huggingface_base_url: str
    huggingface_text_model: str
    huggingface_whisper_model: str
    huggingface_api_key: Optional[str]

    # Timeouts
    provider_timeout_s: float
    request_timeout_s: float

    def __post_init__(self):
        if self.ai_backend == "remote" and self.request_timeout_s < self.minimum_request_timeout_s():
            raise ValueError(
                f"AI_REQUEST_TIMEOUT_S={self.request_timeout_s:g} cannot reach the last provider: "
                f"with PROVIDER_TIMEOUT_S={self.provider_timeout_s:g} it must be at least "
                f"{self.minimum_request_timeout_s():g}"
            )

    def minimum_request_timeout_s(self) -> float:
        """
        Smallest per-call deadline that still lets the last provider in a
        chain make one full attempt after every earlier provider has spent
        its whole retry budget on timeouts.
        """
        earlier = REMOTE_CHAIN_LENGTH - 1
        return earlier * worst_case_seconds(self.provider_timeout_s) + self.provider_timeout_s

    @classmethod
    def from_env(cls) -> "InfraConfig":
        """
        Load configuration from environment variables.

        Defaults target the public Gemini and Hugging Face endpoints;
        AI_BACKEND=stub swaps in offline providers.
        """
        return cls(
            ai_backend=os.getenv("AI_BACKEND", "remote"),  # type: ignore

            gemini_base_url=os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
            gemini_audio_model=os.getenv("GEMINI_AUDIO_MODEL", "gemini-1.5-flash"),
            gemini_api_key=os.getenv("GEMINI_API_KEY"),

            huggingface_base_url=os.getenv("HUGGINGFACE_BASE_URL", "https://api-inference.huggingface.co"),
            huggingface_text_model=os.getenv("HUGGINGFACE_TEXT_MODEL", "mistralai/Mistral-7B-Instruct-v0.2"),
            huggingface_whisper_model=os.getenv("HUGGINGFACE_WHISPER_MODEL", "openai/whisper-large-v3"),
            huggingface_api_key=os.getenv("HUGGINGFACE_API_KEY"),

            provider_timeout_s=float(os.getenv("PROVIDER_TIMEOUT_S", "8")),
            request_timeout_s=float(os.getenv("AI_REQUEST_TIMEOUT_S", "60")),
        )

    # ── Descriptors ────────────────────────────────────────────

    def gemini_descriptor(self, audio: bool = False) -> ProviderDescriptor:
        return ProviderDescriptor(
            name="gemini_audio" if audio else "gemini",
            kind=ProviderKind.GEMINI,
            capabilities=frozenset({Capability.TEXT_COMPLETION, Capability.AUDIO_TRANSCRIPTION}),
            base_url=self.gemini_base_url,
            model=self.gemini_audio_model if audio else self.gemini_model,
            api_key=self.gemini_api_key,
            placeholder=GEMINI_PLACEHOLDER_KEY,
        )

    def huggingface_text_descriptor(self) -> ProviderDescriptor:
        return ProviderDescriptor(
            name="huggingface",
            kind=ProviderKind.HUGGINGFACE_TEXT,
            capabilities=frozenset({Capability.TEXT_COMPLETION}),
            base_url=self.huggingface_base_url,
            model=self.huggingface_text_model,
            api_key=self.huggingface_api_key,
            placeholder=HUGGINGFACE_PLACEHOLDER_KEY,
        )

    def whisper_descriptor(self) -> ProviderDescriptor:
        return ProviderDescriptor(
            name="whisper",
            kind=ProviderKind.HUGGINGFACE_WHISPER,
            capabilities=frozenset({Capability.AUDIO_TRANSCRIPTION}),
            base_url=self.huggingface_base_url,
            model=self.huggingface_whisper_model,
            api_key=self.huggingface_api_key,
            placeholder=HUGGINGFACE_PLACEHOLDER_KEY,
        )

    # ── Factories ──────────────────────────────────────────────

    def create_text_clients(self) -> List[ProviderClient]:
        """Text chain in priority order: Gemini, then Hugging Face."""
        if self.ai_backend == "stub":
            return [StubProviderClient(name="stub_text")]

        return [
            GeminiTextClient(self.gemini_descriptor(), timeout_s=self.provider_timeout_s),
            HuggingFaceTextClient(self.huggingface_text_descriptor(), timeout_s=self.provider_timeout_s),
        ]

    def create_audio_clients(self) -> List[ProviderClient]:
        """Audio chain in priority order: Whisper, then Gemini multimodal."""
        if self.ai_backend == "stub":
            return [StubProviderClient(name="stub_audio", capability=Capability.AUDIO_TRANSCRIPTION)]

        return [
            HuggingFaceWhisperClient(self.whisper_descriptor(), timeout_s=self.provider_timeout_s),
            GeminiAudioClient(self.gemini_descriptor(audio=True), timeout_s=self.provider_timeout_s),
        ]

    def create_orchestrator(self) -> AIRequestOrchestrator:
        return AIRequestOrchestrator(
            text_clients=self.create_text_clients(),
            audio_clients=self.create_audio_clients(),
            request_timeout_s=self.request_timeout_s,
        )

    def provider_status(self) -> dict:
        """Which providers have usable credentials (no network calls)."""
        if self.ai_backend == "stub":
            return {"stub": True}
        return {
            "gemini": self.gemini_descriptor().is_configured,
            "huggingface": self.huggingface_text_descriptor().is_configured,
        }


def get_config() -> InfraConfig:
    """Get infrastructure configuration from the current environment."""
    return InfraConfig.from_env()
