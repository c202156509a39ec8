"""
Response extraction for every supported provider shape.

Each ProviderKind has one fixed path into the raw JSON body:

  GEMINI               candidates[0].content.parts[0].text
  HUGGINGFACE_TEXT     [0].generated_text
  HUGGINGFACE_WHISPER  text
  STUB                 text

Rules:
- Pure function, no I/O
- Null-safe at every navigation step (wrong type == missing)
- Empty or whitespace-only text counts as "no usable text"
"""

from typing import Any, Callable, Dict, Optional

from .types import ProviderKind


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _field(value: Any, key: str) -> Any:
    if isinstance(value, dict):
        return value.get(key)
    return None


def _usable(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _extract_gemini(raw: Any) -> Optional[str]:
    candidate = _first(_field(raw, "candidates"))
    part = _first(_field(_field(candidate, "content"), "parts"))
    return _usable(_field(part, "text"))


def _extract_generated_text(raw: Any) -> Optional[str]:
    return _usable(_field(_first(raw), "generated_text"))


def _extract_top_level_text(raw: Any) -> Optional[str]:
    return _usable(_field(raw, "text"))


_EXTRACTORS: Dict[ProviderKind, Callable[[Any], Optional[str]]] = {
    ProviderKind.GEMINI: _extract_gemini,
    ProviderKind.HUGGINGFACE_TEXT: _extract_generated_text,
    ProviderKind.HUGGINGFACE_WHISPER: _extract_top_level_text,
    ProviderKind.STUB: _extract_top_level_text,
}


def extract_text(kind: ProviderKind, raw: Any) -> Optional[str]:
    """
    Pull the human-readable text out of a provider response.

    Args:
        kind: Shape of the response (which provider produced it)
        raw: Decoded JSON body

    Returns:
        The text, or None when the expected path is absent
    """
    return _EXTRACTORS[kind](raw)
