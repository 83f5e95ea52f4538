"""Logging filters that redact records from ordinary ``logging`` loggers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from scrublog.redaction.patterns import MASK
from scrublog.redaction.sanitizer import Sanitizer, get_default_sanitizer


class RedactingFilter(logging.Filter):
    """Sanitize record arguments and scrub the rendered message.

    Arguments are sanitized structurally first so key-based rules see them,
    then the message is rendered and scrubbed as a whole. The record leaves
    the filter with its final text in ``msg`` and no ``args``.
    """

    def __init__(self, name: str = "", sanitizer: Sanitizer | None = None) -> None:
        super().__init__(name)
        self._sanitizer = sanitizer or get_default_sanitizer()

    def filter(self, record: logging.LogRecord) -> bool:
        if not super().filter(record):
            return False
        try:
            if record.args:
                if isinstance(record.args, Mapping):
                    record.args = self._sanitizer.sanitize_top(dict(record.args))
                else:
                    record.args = tuple(self._sanitizer.sanitize_args(record.args))
            record.msg = self._sanitizer.scrub(record.getMessage())
        except Exception:
            # Unformattable record: keep only a scrubbed template
            record.msg = self._sanitizer.scrub(record.msg) if isinstance(record.msg, str) else MASK
        record.args = ()
        return True


def _has_redacting_filter(filterer: logging.Filterer) -> bool:
    return any(isinstance(f, RedactingFilter) for f in filterer.filters)


def install_redacting_filter(
    logger_names: Iterable[str] | None = None,
    sanitizer: Sanitizer | None = None,
) -> RedactingFilter:
    """Attach a RedactingFilter to the named loggers and their handlers.

    Logger filters only see records created on that logger, so the filter is
    also added to each logger's current handlers to cover records propagated
    from child loggers. Installing twice is a no-op per logger/handler.

    Args:
        logger_names: Logger names (defaults to the root logger).
        sanitizer: Redaction engine (default rules if None).

    Returns:
        The filter instance that was installed.
    """
    redacting_filter = RedactingFilter(sanitizer=sanitizer)
    for name in logger_names or [""]:
        target = logging.getLogger(name)
        if not _has_redacting_filter(target):
            target.addFilter(redacting_filter)
        for handler in target.handlers:
            if not _has_redacting_filter(handler):
                handler.addFilter(redacting_filter)
    return redacting_filter
