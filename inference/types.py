from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, FrozenSet, Literal

AttemptStatus = Literal["success", "recoverable_error", "fatal_error"]


class Capability(str, Enum):
    TEXT_COMPLETION = "text_completion"
    AUDIO_TRANSCRIPTION = "audio_transcription"


class ProviderKind(str, Enum):
    """Response shape a provider produces; selects the extraction path."""

    GEMINI = "gemini"
    HUGGINGFACE_TEXT = "huggingface_text"
    HUGGINGFACE_WHISPER = "huggingface_whisper"
    STUB = "stub"


# Sentinel-style prefixes used by sample .env files
_PLACEHOLDER_PREFIXES = ("your-", "your_")


@dataclass(frozen=True)
class ProviderDescriptor:
    name: str                      # e.g. "gemini", "huggingface"
    kind: ProviderKind
    capabilities: FrozenSet[Capability]
    base_url: str
    model: str
    api_key: Optional[str] = None
    placeholder: Optional[str] = None  # documented "not configured" value

    @property
    def is_configured(self) -> bool:
        key = (self.api_key or "").strip()
        if not key:
            return False
        if self.placeholder and key == self.placeholder:
            return False
        return not key.startswith(_PLACEHOLDER_PREFIXES)

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities


@dataclass
class AttemptOutcome:
    status: AttemptStatus
    provider: str
    text: Optional[str] = None
    raw: Optional[Any] = None
    error_type: Optional[str] = None   # missing_credential | service_unavailable | http_error | timeout | transport_error | malformed_response | unexpected_error
    reason: Optional[str] = None
    status_code: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def retryable(self) -> bool:
        return self.status == "recoverable_error"

    @classmethod
    def success(cls, provider: str, raw: Any, text: Optional[str] = None) -> "AttemptOutcome":
        return cls(status="success", provider=provider, raw=raw, text=text)

    @classmethod
    def transient(
        cls,
        provider: str,
        error_type: str,
        reason: str,
        status_code: Optional[int] = None,
    ) -> "AttemptOutcome":
        return cls(
            status="recoverable_error",
            provider=provider,
            error_type=error_type,
            reason=reason,
            status_code=status_code,
        )

    @classmethod
    def permanent(
        cls,
        provider: str,
        error_type: str,
        reason: str,
        status_code: Optional[int] = None,
    ) -> "AttemptOutcome":
        return cls(
            status="fatal_error",
            provider=provider,
            error_type=error_type,
            reason=reason,
            status_code=status_code,
        )
