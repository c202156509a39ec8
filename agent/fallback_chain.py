"""
Ordered provider fallback for one capability.

Providers are tried strictly in order, one at a time; a provider is only
contacted once the previous provider's retry policy has finished. The
chain never raises for provider failures: total exhaustion is reported
through ChainResult.exhausted and the canned answer is the caller's call.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from inference.base import ProviderClient
from inference.types import AttemptOutcome, Capability

from .retry import DEFAULT_MAX_ATTEMPTS, RetryPolicy, SleepFn

logger = logging.getLogger(__name__)


@dataclass
class ChainResult:
    text: Optional[str] = None
    provider: Optional[str] = None
    outcomes: List[AttemptOutcome] = field(default_factory=list)
    attempts: List[int] = field(default_factory=list)  # per provider, chain order

    @property
    def exhausted(self) -> bool:
        return self.text is None


class FallbackChain:

    def __init__(
        self,
        capability: Capability,
        clients: Sequence[ProviderClient],
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep: Optional[SleepFn] = None,
    ):
        for client in clients:
            if client.capability != capability:
                raise ValueError(
                    f"{client.name} does not serve {capability.value}"
                )
        self.capability = capability
        self.clients = list(clients)
        self.max_attempts = max_attempts
        self._sleep = sleep

    async def run(self, payload: Any) -> ChainResult:
        result = ChainResult()

        for index, client in enumerate(self.clients, start=1):
            logger.info(
                f"[{self.capability.value}] trying provider {index}/{len(self.clients)}: {client.name}"
            )
            policy = RetryPolicy(client.name, self.max_attempts, sleep=self._sleep)
            outcome = await policy.run(lambda c=client: c.attempt(payload))

            result.outcomes.append(outcome)
            result.attempts.append(policy.attempts)

            if outcome.ok:
                result.text = outcome.text
                result.provider = client.name
                return result

            logger.warning(
                f"[{self.capability.value}] {client.name} failed: "
                f"{outcome.error_type} ({outcome.reason})"
            )

        logger.error(f"[{self.capability.value}] all providers exhausted")
        return result
