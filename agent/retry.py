"""
Bounded exponential-backoff retry around a single provider attempt.

Behavior per attempt (1-based, max 3):
- success            → return immediately
- fatal_error        → return immediately (no retry)
- recoverable_error  → wait 2**attempt seconds, retry while attempt < max
- unexpected raise   → treated as recoverable_error

State is local to one run(); nothing carries over between providers.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from inference.types import AttemptOutcome

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3

AttemptFn = Callable[[], Awaitable[AttemptOutcome]]
SleepFn = Callable[[float], Awaitable[Any]]


def backoff_seconds(attempt: int) -> float:
    """2s, 4s, 8s for attempts 1, 2, 3."""
    return float(2 ** attempt)


def worst_case_seconds(attempt_timeout_s: float, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> float:
    """Longest one provider can hold the chain: every attempt times out, plus backoff waits."""
    waits = sum(backoff_seconds(attempt) for attempt in range(1, max_attempts))
    return max_attempts * attempt_timeout_s + waits


class RetryPolicy:

    def __init__(
        self,
        provider: str,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep: Optional[SleepFn] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.provider = provider
        self.max_attempts = max_attempts
        self._sleep = sleep or asyncio.sleep
        self.attempts = 0

    async def run(self, attempt_fn: AttemptFn) -> AttemptOutcome:
        """
        Drive attempt_fn until it succeeds, fails permanently or the
        attempt budget is spent.

        Returns:
            The final AttemptOutcome (the last failure on exhaustion)
        """
        outcome: Optional[AttemptOutcome] = None

        for attempt in range(1, self.max_attempts + 1):
            self.attempts = attempt
            logger.info(f"{self.provider}: attempt {attempt}/{self.max_attempts}")

            try:
                outcome = await attempt_fn()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(
                    f"{self.provider}: unexpected error on attempt {attempt}: {e}",
                    exc_info=True,
                )
                outcome = AttemptOutcome.transient(
                    self.provider, "unexpected_error", f"{type(e).__name__}: {e}"[:200]
                )

            if outcome.ok:
                logger.info(f"{self.provider}: success on attempt {attempt}")
                return outcome

            if not outcome.retryable:
                logger.warning(
                    f"{self.provider}: permanent failure ({outcome.error_type}), not retrying"
                )
                return outcome

            if attempt < self.max_attempts:
                wait = backoff_seconds(attempt)
                logger.warning(
                    f"{self.provider}: transient failure ({outcome.error_type}), "
                    f"retrying in {wait:.0f} seconds..."
                )
                await self._sleep(wait)

        logger.error(f"{self.provider}: retries exhausted after {self.max_attempts} attempts")
        return outcome  # type: ignore[return-value]
