"""
Pattern-based string scrubbing for scrublog.

Rewrites a single string by replacing recognizable secret shapes with
masked equivalents. Passes run in a fixed order and each pass operates on
the output of the previous one:

1. Bearer tokens          -> "Bearer ***"
2. key=value secrets      -> "<key>=***"
3. Labeled numeric codes  -> "<label>******"
4. Long hex runs (32+)    -> "***"
5. Long base64 runs (20+) -> "***"
6. Email addresses        -> "u***@example.com"

Bearer tokens must be handled before the hex/base64 passes so the
placeholder is never re-masked, and emails go last so already-masked
tokens are not mistaken for domains.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

# Placeholder used for fully masked values
MASK = "***"

# Fixed-width mask for labeled numeric codes (2FA, OTP, ...)
CODE_MASK = "******"

_EMAIL_RE = re.compile(r"([A-Za-z0-9._%+-])[^@\s]*(@[A-Za-z0-9.-]+\.[A-Za-z]{2,})")


@dataclass(frozen=True)
class ScrubPattern:
    """A single ordered scrub pass."""

    name: str
    regex: re.Pattern[str]
    replacement: str | Callable[[re.Match[str]], str]

    def apply(self, text: str) -> str:
        """Apply this pass to ``text``."""
        return self.regex.sub(self.replacement, text)


def _mask_email_match(match: re.Match[str]) -> str:
    return f"{match.group(1)}{MASK}{match.group(2)}"


def _mask_key_value_match(match: re.Match[str]) -> str:
    # Quoted values keep their quotes: password='hunter2' -> password='***'
    value = match.group("value")
    quote = value[0] if value[0] in "'\"" else ""
    return f"{match.group(1)}={quote}{MASK}{quote}"


DEFAULT_PATTERNS: tuple[ScrubPattern, ...] = (
    ScrubPattern(
        name="bearer",
        regex=re.compile(r"bearer\s+[^\s\"']+", re.IGNORECASE),
        replacement=f"Bearer {MASK}",
    ),
    ScrubPattern(
        name="key_value",
        regex=re.compile(
            r"(password|pass|pwd|secret|token|auth|authorization|key)\s*[:=]\s*"
            r"(?P<value>'[^']*'|\"[^\"]*\"|[^\s&\"']+)",
            re.IGNORECASE,
        ),
        replacement=_mask_key_value_match,
    ),
    ScrubPattern(
        name="labeled_code",
        regex=re.compile(r"((?:code|2fa|two[-\s]?factor|otp)\s*[:=\s]+)(\d{4,8})", re.IGNORECASE),
        replacement=rf"\1{CODE_MASK}",
    ),
    ScrubPattern(
        name="hex",
        regex=re.compile(r"[a-f0-9]{32,}", re.IGNORECASE),
        replacement=MASK,
    ),
    ScrubPattern(
        name="base64",
        regex=re.compile(r"[A-Za-z0-9+/]{20,}={0,2}"),
        replacement=MASK,
    ),
    ScrubPattern(
        name="email",
        regex=_EMAIL_RE,
        replacement=_mask_email_match,
    ),
)


class Scrubber:
    """Applies an immutable, ordered list of scrub patterns to strings."""

    def __init__(self, patterns: Iterable[ScrubPattern] = DEFAULT_PATTERNS) -> None:
        self._patterns: tuple[ScrubPattern, ...] = tuple(patterns)
        for pattern in self._patterns:
            if not isinstance(pattern, ScrubPattern):
                raise TypeError("patterns must contain ScrubPattern instances.")

    @property
    def patterns(self) -> tuple[ScrubPattern, ...]:
        """The ordered scrub passes."""
        return self._patterns

    def __call__(self, text: Any) -> Any:
        return self.scrub(text)

    def scrub(self, text: Any) -> Any:
        """Scrub secret-shaped substrings out of ``text``.

        Non-string input is returned unchanged.
        """
        if not isinstance(text, str) or not text:
            return text
        result = text
        for pattern in self._patterns:
            result = pattern.apply(result)
        return result


_default_scrubber = Scrubber()


def scrub(text: str) -> str:
    """Scrub ``text`` with the default pattern list.

    Example:
        >>> scrub("Bearer abc123def456")
        'Bearer ***'
    """
    return _default_scrubber.scrub(text)


def mask_email(text: str) -> str:
    """Mask email addresses, keeping the first character and the domain.

    "user@example.com" becomes "u***@example.com".
    """
    return _EMAIL_RE.sub(_mask_email_match, text)


def partial_mask(value: str) -> str:
    """Email-style partial mask, whether or not ``value`` looks like an email."""
    if not value:
        return MASK
    # Only a value that is exactly one address keeps its domain
    match = _EMAIL_RE.fullmatch(value)
    if match:
        return _mask_email_match(match)
    return f"{value[0]}{MASK}"


def get_default_scrubber() -> Scrubber:
    """Return the shared default scrubber."""
    return _default_scrubber
