import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from .extraction import extract_text
from .types import AttemptOutcome, Capability, ProviderDescriptor

logger = logging.getLogger(__name__)

# "Temporarily unavailable" is the only status class worth retrying
RETRYABLE_STATUS_CODES = frozenset({503})


class ProviderClient(ABC):
    """
    Abstract provider boundary.

    One call to attempt() performs exactly one request against one provider
    and always resolves to exactly one AttemptOutcome. Never raises for
    HTTP or transport failures.
    """

    capability: Capability

    def __init__(self, descriptor: ProviderDescriptor, timeout_s: float = 30.0):
        if not descriptor.supports(self.capability):
            raise ValueError(
                f"Provider {descriptor.name} does not support {self.capability.value}"
            )
        self.descriptor = descriptor
        self.timeout_s = timeout_s

    @property
    def name(self) -> str:
        return self.descriptor.name

    async def attempt(self, payload: Any) -> AttemptOutcome:
        """
        Run one attempt and extract the text from a successful response.

        Args:
            payload: Combined prompt (text) or AudioPayload (transcription)

        Returns:
            AttemptOutcome; on success `text` holds the extracted text
        """
        if not self.descriptor.is_configured:
            logger.warning(f"{self.name}: API key not configured, skipping")
            return AttemptOutcome.permanent(
                self.name, "missing_credential", "missing credential"
            )

        outcome = await self._send(payload)
        if not outcome.ok:
            return outcome

        text = extract_text(self.descriptor.kind, outcome.raw)
        if text is None:
            logger.warning(f"{self.name}: could not extract text from response")
            return AttemptOutcome.permanent(
                self.name, "malformed_response", "malformed response"
            )

        outcome.text = text
        return outcome

    @abstractmethod
    async def _send(self, payload: Any) -> AttemptOutcome:
        """Issue the provider-specific request."""
        raise NotImplementedError

    async def _post(
        self,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> AttemptOutcome:
        """
        POST and classify the result. Credentials go in params/headers, never in logs.

        httpx timeouts apply per phase (connect, read, ...), so the whole
        request is also capped at timeout_s wall-clock. One attempt never
        outlives timeout_s, which keeps chain deadlines computable.
        """
        logger.info(f"{self.name}: POST {url}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                response = await asyncio.wait_for(
                    client.post(url, json=json, files=files, params=params, headers=headers),
                    timeout=self.timeout_s,
                )
        except (httpx.TimeoutException, asyncio.TimeoutError):
            logger.warning(f"{self.name}: request timed out after {self.timeout_s}s")
            return AttemptOutcome.transient(self.name, "timeout", "request timed out")
        except httpx.TransportError as e:
            logger.warning(f"{self.name}: transport error: {type(e).__name__}")
            return AttemptOutcome.transient(self.name, "transport_error", str(e)[:200])

        return self._classify(response)

    def _classify(self, response: httpx.Response) -> AttemptOutcome:
        status_code = response.status_code

        if status_code in RETRYABLE_STATUS_CODES:
            logger.warning(f"{self.name}: service unavailable ({status_code})")
            return AttemptOutcome.transient(
                self.name, "service_unavailable", "service temporarily unavailable",
                status_code=status_code,
            )

        if not 200 <= status_code < 300:
            body = response.text[:200]
            logger.error(f"{self.name}: HTTP {status_code}, response: {body}")
            return AttemptOutcome.permanent(
                self.name, "http_error", f"HTTP {status_code}", status_code=status_code
            )

        try:
            data = response.json()
        except ValueError:
            logger.warning(f"{self.name}: response body is not JSON")
            return AttemptOutcome.permanent(
                self.name, "malformed_response", "malformed response",
                status_code=status_code,
            )

        return AttemptOutcome.success(self.name, raw=data)


class TextProviderClient(ProviderClient):
    """Provider client for the text-completion capability. Payload is the combined prompt."""

    capability = Capability.TEXT_COMPLETION


class AudioProviderClient(ProviderClient):
    """Provider client for the transcription capability. Payload is an AudioPayload."""

    capability = Capability.AUDIO_TRANSCRIPTION
