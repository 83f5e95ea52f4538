"""
Redacting logger wrapper.

SafeLogger mirrors a small console-style API on top of the standard
``logging`` module:

- ``log``/``debug`` only emit when verbose logging is enabled
- ``warn``/``error`` always emit
- every message is prefixed, scrubbed and its arguments sanitized before
  anything reaches a handler
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from threading import RLock
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from scrublog.config.settings import LoggingConfig, is_verbose_enabled
from scrublog.redaction.rules import build_rules
from scrublog.redaction.sanitizer import Sanitizer, get_default_sanitizer

DEFAULT_LOGGER_NAME = "scrublog"

_log = logging.getLogger(__name__)


class LoggerConfig(BaseModel):
    """Configuration for a SafeLogger."""

    model_config = ConfigDict(frozen=True)

    prefix: str = Field(
        default="",
        description="Prefix added to every message",
    )
    enable_redaction: bool = Field(
        default=True,
        description="Scrub messages and sanitize arguments before emitting",
    )
    is_verbose_enabled: Callable[[], bool] | None = Field(
        default=None,
        description="Verbosity check for log/debug; defaults to the configured preferences",
    )


def _render(value: Any, redact: bool, sanitizer: Sanitizer) -> str:
    if isinstance(value, str):
        return value
    text = repr(value)
    if redact:
        # Opaque objects, nested or not, were passed through untouched.
        return sanitizer.scrub(text)
    return text


class SafeLogger:
    """Logger that redacts sensitive data before it reaches any handler.

    Example:
        ```python
        from scrublog import get_logger

        logger = get_logger()
        logger.log("User logged in", {"user_id": 123, "email": "user@example.com"})
        # (if verbose) User logged in {'user_id': 123, 'email': 'u***@example.com'}

        auth_logger = logger.child("[Auth]")
        auth_logger.error("Authentication failed", {"password": "secret123"})
        # [Auth] Authentication failed {'password': '***'}
        ```
    """

    _instance: ClassVar[SafeLogger | None] = None
    _instance_lock: ClassVar[RLock] = RLock()

    def __init__(
        self,
        config: LoggerConfig | None = None,
        *,
        name: str = DEFAULT_LOGGER_NAME,
        sanitizer: Sanitizer | None = None,
    ) -> None:
        """Initialize the logger.

        Args:
            config: Prefix, redaction toggle and verbosity check.
            name: Name of the underlying ``logging.Logger``.
            sanitizer: Redaction engine (default rules if None).
        """
        self.config = config or LoggerConfig()
        self._logger = logging.getLogger(name)
        self._sanitizer = sanitizer or get_default_sanitizer()
        self._is_verbose: Callable[[], bool] = self.config.is_verbose_enabled or is_verbose_enabled

    @classmethod
    def get_instance(cls) -> SafeLogger:
        """Get or create the process-wide default logger.

        The instance is built once, on first use, from the LoggingConfig
        preferences. Later calls return the same object until ``reset``.
        """
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls._from_preferences()
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the default logger (for testing)."""
        with cls._instance_lock:
            cls._instance = None

    @classmethod
    def _from_preferences(cls) -> SafeLogger:
        preferences = LoggingConfig.get_instance()
        try:
            rules = build_rules(preferences.extra_keys)
        except ValueError:
            _log.error("Invalid extra_keys in logging preferences; using defaults", exc_info=True)
            sanitizer = get_default_sanitizer()
        else:
            sanitizer = Sanitizer(rules=rules)
        config = LoggerConfig(
            prefix=preferences.prefix,
            enable_redaction=preferences.enable_redaction,
        )
        return cls(config, sanitizer=sanitizer)

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def sanitizer(self) -> Sanitizer:
        return self._sanitizer

    def format_message(self, message: str) -> str:
        """Add the configured prefix to ``message``."""
        if self.config.prefix:
            return f"{self.config.prefix} {message}"
        return message

    def process_log_data(self, message: str, args: tuple[Any, ...]) -> tuple[str, list[Any]]:
        """Prefix the message and, if enabled, redact message and arguments."""
        formatted = self.format_message(message)
        if not self.config.enable_redaction:
            return formatted, list(args)
        return self._sanitizer.redact_log_data(formatted, args)

    def is_verbose(self) -> bool:
        return bool(self._is_verbose())

    def log(self, message: str, *args: Any) -> None:
        """Log at INFO if verbose logging is enabled."""
        if self.is_verbose():
            self._emit(logging.INFO, message, args)

    def debug(self, message: str, *args: Any) -> None:
        """Log at DEBUG if verbose logging is enabled."""
        if self.is_verbose():
            self._emit(logging.DEBUG, message, args)

    def warn(self, message: str, *args: Any) -> None:
        """Log a warning (always shown regardless of verbose setting)."""
        self._emit(logging.WARNING, message, args)

    warning = warn

    def error(self, message: str, *args: Any) -> None:
        """Log an error (always shown regardless of verbose setting)."""
        self._emit(logging.ERROR, message, args)

    def child(self, prefix: str) -> SafeLogger:
        """Create a logger that adds ``prefix`` after this logger's prefix.

        Example:
            ```python
            auth_logger = logger.child("[Auth]")
            auth_logger.log("Login attempt")  # [Auth] Login attempt
            ```
        """
        child_prefix = f"{self.config.prefix} {prefix}" if self.config.prefix else prefix
        return SafeLogger(
            self.config.model_copy(update={"prefix": child_prefix}),
            name=self._logger.name,
            sanitizer=self._sanitizer,
        )

    def _emit(self, level: int, message: str, args: tuple[Any, ...]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        processed_message, processed_args = self.process_log_data(message, args)
        redact = self.config.enable_redaction
        parts = [processed_message]
        parts.extend(_render(arg, redact, self._sanitizer) for arg in processed_args)
        # Pre-rendered text; no %-formatting args are passed to logging.
        self._logger.log(level, " ".join(parts), stacklevel=3)


def get_logger(prefix: str | None = None) -> SafeLogger:
    """Return the default logger, or a child of it when ``prefix`` is given."""
    instance = SafeLogger.get_instance()
    if prefix:
        return instance.child(prefix)
    return instance
