"""scrublog package."""

from .logging import (
    LoggerConfig,
    RedactingFilter,
    SafeLogger,
    get_logger,
    install_redacting_filter,
)
from .redaction import (
    MASK,
    RedactionAction,
    RedactionRule,
    Sanitizer,
    ScrubPattern,
    Scrubber,
    build_rules,
    mask_email,
    redact_log_data,
    sanitize_args,
    sanitize_top,
    scrub,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "MASK",
    "LoggerConfig",
    "RedactingFilter",
    "RedactionAction",
    "RedactionRule",
    "SafeLogger",
    "Sanitizer",
    "ScrubPattern",
    "Scrubber",
    "build_rules",
    "get_logger",
    "install_redacting_filter",
    "mask_email",
    "redact_log_data",
    "sanitize_args",
    "sanitize_top",
    "scrub",
]
