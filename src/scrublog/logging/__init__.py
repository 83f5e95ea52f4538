"""
Secret-safe logging for scrublog.

Wraps the standard ``logging`` module so that messages and their arguments
pass through the redaction engine before reaching any handler.
"""

from scrublog.logging.filters import RedactingFilter, install_redacting_filter
from scrublog.logging.logger import (
    DEFAULT_LOGGER_NAME,
    LoggerConfig,
    SafeLogger,
    get_logger,
)

__all__ = [
    "DEFAULT_LOGGER_NAME",
    "LoggerConfig",
    "RedactingFilter",
    "SafeLogger",
    "get_logger",
    "install_redacting_filter",
]
