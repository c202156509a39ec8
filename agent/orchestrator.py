"""
AI Request Orchestrator

Main entry point for the assistant's AI operations. This module is the
public API the HTTP layer calls:

  ask(prompt)                         → str
  ask_with_context(prompt, context)   → str
  transcribe(audio, filename)         → str

Per-call flow:
  Validating → Chaining(provider, attempt) → Succeeded | Exhausted
  Exhausted → Canned → Returned

Only Validating can fail (InvalidInputError). Every other path returns a
string. No state survives between calls: a fresh chain and fresh retry
counters are built for each one.
"""

import asyncio
import logging
from typing import Any, Optional, Sequence

from inference.base import ProviderClient
from inference.types import Capability
from services.stt.base import SUPPORTED_EXTENSIONS, AudioPayload, is_supported_format

from .canned_responses import canned_answer, canned_transcription
from .errors import InvalidInputError
from .fallback_chain import ChainResult, FallbackChain
from .retry import DEFAULT_MAX_ATTEMPTS, SleepFn

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT_S = 60.0


def build_prompt(prompt: str, context: Optional[str] = None) -> str:
    """Combine context and question into the single string sent to providers."""
    if context is None or not context.strip():
        return prompt
    return f"Context: {context}\n\nQuestion: {prompt}"


class AIRequestOrchestrator:
    """
    Answers prompts and transcribes audio through ordered provider chains.

    Text chain:  Gemini → Hugging Face
    Audio chain: Whisper → Gemini (multimodal)
    """

    def __init__(
        self,
        text_clients: Sequence[ProviderClient],
        audio_clients: Sequence[ProviderClient],
        request_timeout_s: Optional[float] = DEFAULT_REQUEST_TIMEOUT_S,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep: Optional[SleepFn] = None,
    ):
        """
        Args:
            text_clients: Text providers in priority order
            audio_clients: Transcription providers in priority order
            request_timeout_s: Ceiling for a whole call (None disables it)
            max_attempts: Attempts per provider
            sleep: Backoff sleep (asyncio.sleep by default)
        """
        self.text_clients = tuple(text_clients)
        self.audio_clients = tuple(audio_clients)
        self.request_timeout_s = request_timeout_s
        self.max_attempts = max_attempts
        self._sleep = sleep

    async def ask(self, prompt: str) -> str:
        self._validate_prompt(prompt)
        logger.info(f"Sending question to AI providers: {prompt[:100]}")
        return await self._answer(prompt, prompt)

    async def ask_with_context(self, prompt: str, context: Optional[str]) -> str:
        """
        Same as ask() but dispatches the context-prefixed prompt.

        The canned fallback still keys off the original prompt so the bucket
        stays on the question's topic.
        """
        self._validate_prompt(prompt)
        logger.info("Sending question with context to AI providers")
        return await self._answer(build_prompt(prompt, context), prompt)

    async def transcribe(self, audio: bytes, filename: str) -> str:
        if not audio:
            logger.warning("Received empty audio payload")
            raise InvalidInputError("No se proporcionó ningún archivo de audio.", field="audio")

        if not is_supported_format(filename):
            logger.warning(f"Unsupported audio format: {filename}")
            supported = ", ".join(sorted(SUPPORTED_EXTENSIONS))
            raise InvalidInputError(
                f"Formato de audio no soportado. Use {supported}.", field="filename"
            )

        payload = AudioPayload(data=bytes(audio), filename=filename)
        logger.info(f"Starting transcription: {filename}, size: {payload.size} bytes")

        result = await self._run_chain(Capability.AUDIO_TRANSCRIPTION, self.audio_clients, payload)
        if not result.exhausted:
            logger.info(f"Transcription by {result.provider}: {len(result.text)} characters")
            return result.text  # type: ignore[return-value]

        logger.warning(f"Using canned transcription for: {filename}")
        return canned_transcription(filename)

    # ── Internals ──────────────────────────────────────────────

    async def _answer(self, dispatched: str, original: str) -> str:
        result = await self._run_chain(Capability.TEXT_COMPLETION, self.text_clients, dispatched)
        if not result.exhausted:
            logger.info(f"Answer provided by {result.provider}")
            return result.text  # type: ignore[return-value]

        logger.warning("Using canned answer (all providers exhausted)")
        return canned_answer(original)

    async def _run_chain(
        self,
        capability: Capability,
        clients: Sequence[ProviderClient],
        payload: Any,
    ) -> ChainResult:
        chain = FallbackChain(capability, clients, self.max_attempts, sleep=self._sleep)
        try:
            return await asyncio.wait_for(chain.run(payload), timeout=self.request_timeout_s)
        except asyncio.TimeoutError:
            logger.error(
                f"[{capability.value}] request deadline of {self.request_timeout_s}s exceeded"
            )
            return ChainResult()

    @staticmethod
    def _validate_prompt(prompt: Optional[str]) -> None:
        if prompt is None or not prompt.strip():
            logger.warning("Received an empty prompt")
            raise InvalidInputError("Por favor, proporciona una pregunta válida.")
