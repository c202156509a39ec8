from collections import deque
from typing import Any, Iterable, Optional, Union

from .base import ProviderClient
from .types import AttemptOutcome, Capability, ProviderDescriptor, ProviderKind

ScriptStep = Union[str, AttemptOutcome, BaseException, None]


class StubProviderClient(ProviderClient):
    """
    Deterministic fake provider for testing, CI and offline development.

    Steps are consumed one per attempt:
    - str: success with that text
    - AttemptOutcome: returned as-is
    - exception instance: raised (simulates an unexpected client error)
    - None / exhausted script: deterministic default text

    Never touches the network.
    """

    def __init__(
        self,
        name: str = "stub",
        capability: Capability = Capability.TEXT_COMPLETION,
        script: Optional[Iterable[ScriptStep]] = None,
        api_key: Optional[str] = "stub-key",
    ):
        self.capability = capability
        descriptor = ProviderDescriptor(
            name=name,
            kind=ProviderKind.STUB,
            capabilities=frozenset({capability}),
            base_url="stub://local",
            model="stub",
            api_key=api_key,
        )
        super().__init__(descriptor, timeout_s=0.0)
        self._script = deque(script or [])
        self.calls = 0
        self.payloads: deque = deque(maxlen=100)

    async def _send(self, payload: Any) -> AttemptOutcome:
        self.calls += 1
        self.payloads.append(payload)

        step = self._script.popleft() if self._script else None

        if isinstance(step, BaseException):
            raise step
        if isinstance(step, AttemptOutcome):
            return step

        text = step if isinstance(step, str) else self._default_text(payload)
        return AttemptOutcome.success(self.name, raw={"text": text})

    def _default_text(self, payload: Any) -> str:
        filename = getattr(payload, "filename", None)
        if filename is not None:
            return f"Stub transcription of {filename}"
        return f"Stub response for: {str(payload)[:80]}"
