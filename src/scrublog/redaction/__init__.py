"""
Redaction engine for scrublog.

The engine combines:
1. Pattern scrubbing of individual strings
2. Key-based rules applied at mapping properties
3. Cycle-safe structural traversal that rebuilds sanitized values
"""

from scrublog.redaction.patterns import (
    CODE_MASK,
    DEFAULT_PATTERNS,
    MASK,
    ScrubPattern,
    Scrubber,
    mask_email,
    partial_mask,
    scrub,
)
from scrublog.redaction.rules import (
    CODE_KEYS,
    DEFAULT_RULES,
    IDENTIFIER_KEYS,
    NUMERIC_CODE_KEYS,
    SECRET_KEYS,
    RedactionAction,
    RedactionRule,
    build_rules,
)
from scrublog.redaction.sanitizer import (
    Sanitizer,
    get_default_sanitizer,
    redact_log_data,
    sanitize_args,
    sanitize_top,
)

__all__ = [
    # Patterns
    "CODE_MASK",
    "DEFAULT_PATTERNS",
    "MASK",
    "ScrubPattern",
    "Scrubber",
    "mask_email",
    "partial_mask",
    "scrub",
    # Rules
    "CODE_KEYS",
    "DEFAULT_RULES",
    "IDENTIFIER_KEYS",
    "NUMERIC_CODE_KEYS",
    "SECRET_KEYS",
    "RedactionAction",
    "RedactionRule",
    "build_rules",
    # Sanitizer
    "Sanitizer",
    "get_default_sanitizer",
    "redact_log_data",
    "sanitize_args",
    "sanitize_top",
]
