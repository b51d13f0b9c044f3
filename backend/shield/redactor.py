from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RedactionPattern:
    """A named PII regex and the token that replaces its matches."""

    name: str
    regex: re.Pattern[str]

    @property
    def token(self) -> str:
        return f"[REDACTED_{self.name}]"


# ---------------------------------------------------------------------------
# Compiled PII patterns, applied in this order
# ---------------------------------------------------------------------------
# re.ASCII keeps \d and \b to ASCII digits/word characters so that
# non-Latin digits are never redacted.

REDACTION_PATTERNS: tuple[RedactionPattern, ...] = (
    RedactionPattern(
        name="em",
        regex=re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}", re.ASCII),
    ),
    RedactionPattern(
        name="ph",
        regex=re.compile(r"(\+\d{1,3}[-.]?)?\(?\d{3}\)?[-.]?\d{3}[-.]?\d{4}", re.ASCII),
    ),
    RedactionPattern(
        name="ip",
        regex=re.compile(r"(\d{1,3}\.){3}\d{1,3}", re.ASCII),
    ),
    RedactionPattern(
        name="id",
        regex=re.compile(r"\b\d{3}[-.]?\d{2}[-.]?\d{4}\b", re.ASCII),
    ),
)


# ---------------------------------------------------------------------------
# Redaction
# ---------------------------------------------------------------------------


def redact_text(text: str) -> str:
    """Replace every PII match in *text* with its redaction token.

    Each pattern scans the output of the previous one, so an earlier
    pattern wins wherever two patterns would match the same characters.
    """
    for pattern in REDACTION_PATTERNS:
        text = pattern.regex.sub(pattern.token, text)
    return text


def redact(value: Any) -> Any:
    """Return a structurally identical copy of *value* with PII redacted.

    Only string leaves change. Dict keys are kept verbatim; numbers,
    booleans and ``None`` come back as the same objects.
    """
    if not value:
        return value
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, (list, tuple)):
        return [redact(item) for item in value]
    if isinstance(value, dict):
        return {key: redact(item) for key, item in value.items()}
    return value


def redact_envelope(data: Any, sys: bool = False) -> dict[str, Any]:
    """Build the ``{"data": ...}`` response envelope.

    Trusted internal callers set *sys* to skip redaction entirely.
    """
    if sys:
        return {"data": data}
    return {"data": redact(data)}
