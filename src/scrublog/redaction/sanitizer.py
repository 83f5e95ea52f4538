"""
Structural sanitization for scrublog.

Walks an arbitrary value (scalar, mapping, sequence or a cyclic graph of
them), applies key-based rules at each mapping property, falls back to the
pattern scrubber for string leaves and rebuilds an equivalent value with
sensitive data removed.

Termination is guaranteed by a visited-set of container identities that
lives for exactly one top-level call. A container is only "visited" while
its own subtree is being walked, so the same node appearing in two sibling
branches is sanitized twice rather than reported as a cycle.

SECURITY NOTE: any failure while rebuilding a container degrades to the
full-mask placeholder, never to the original value.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from scrublog.redaction.patterns import MASK, Scrubber, get_default_scrubber
from scrublog.redaction.rules import DEFAULT_RULES, RedactionRule, find_rule

logger = logging.getLogger(__name__)

# Containers the sanitizer decomposes; anything else is opaque
SEQUENCE_TYPES = (list, tuple, set, frozenset)


def _empty_like(node: Any) -> Any:
    """Empty container of the same kind, used to truncate cycles."""
    if isinstance(node, Mapping):
        return {}
    if isinstance(node, tuple):
        return ()
    if isinstance(node, frozenset):
        return frozenset()
    if isinstance(node, set):
        return set()
    return []


class Sanitizer:
    """Recursive, cycle-safe redaction of arbitrary values.

    The rule table and scrubber are fixed at construction; a Sanitizer holds
    no other state and is safe to share between threads.

    Example:
        ```python
        sanitizer = Sanitizer()
        sanitizer.sanitize_top({"password": "hunter2", "note": "Bearer abc"})
        # {"password": "***", "note": "Bearer ***"}
        ```
    """

    def __init__(
        self,
        rules: Iterable[RedactionRule] = DEFAULT_RULES,
        scrubber: Scrubber | None = None,
    ) -> None:
        """Initialize the sanitizer.

        Args:
            rules: Key-based rules, checked in order (first match wins).
            scrubber: Pattern scrubber for string leaves (default patterns if None).
        """
        self._rules: tuple[RedactionRule, ...] = tuple(rules)
        for rule in self._rules:
            if not isinstance(rule, RedactionRule):
                raise TypeError("rules must contain RedactionRule instances.")
        self._scrubber = scrubber or get_default_scrubber()

    @property
    def rules(self) -> tuple[RedactionRule, ...]:
        return self._rules

    @property
    def scrubber(self) -> Scrubber:
        return self._scrubber

    def scrub(self, text: str) -> str:
        """Scrub a single string with this sanitizer's patterns."""
        return self._scrubber.scrub(text)

    def sanitize_top(self, value: Any) -> Any:
        """Sanitize ``value`` with a fresh visited-set."""
        return self.sanitize(value, set())

    def sanitize_args(self, args: Iterable[Any]) -> list[Any]:
        """Sanitize each auxiliary log argument independently."""
        return [self.sanitize_top(arg) for arg in args]

    def redact_log_data(self, message: str, args: Iterable[Any]) -> tuple[str, list[Any]]:
        """Scrub a log message and sanitize its arguments."""
        return self.scrub(message), self.sanitize_args(args)

    def sanitize(self, value: Any, visited: set[int]) -> Any:
        """Sanitize ``value``.

        Args:
            value: Any value.
            visited: Identities of the containers currently being walked.

        Returns:
            A redacted copy for strings and containers, ``value`` itself for
            scalars and opaque objects.
        """
        if value is None or isinstance(value, (bool, int, float)):
            return value
        if isinstance(value, str):
            return self._scrubber.scrub(value)
        if isinstance(value, Mapping):
            return self._guarded(value, visited, self._sanitize_mapping)
        if isinstance(value, SEQUENCE_TYPES):
            return self._guarded(value, visited, self._sanitize_sequence)
        # Opaque objects pass through without reflection
        return value

    def _guarded(
        self,
        node: Any,
        visited: set[int],
        rebuild: Callable[[Any, set[int]], Any],
    ) -> Any:
        node_id = id(node)
        if node_id in visited:
            return _empty_like(node)
        visited.add(node_id)
        try:
            return rebuild(node, visited)
        except Exception as exc:
            # The exception text may embed the raw value; log the type only.
            logger.debug(
                "Failed to sanitize %s (%s); masking subtree.",
                type(node).__name__,
                type(exc).__name__,
            )
            return MASK
        finally:
            visited.discard(node_id)

    def _sanitize_mapping(self, node: Mapping[Any, Any], visited: set[int]) -> dict[Any, Any]:
        result: dict[Any, Any] = {}
        for key, value in node.items():
            rule = find_rule(self._rules, key, value)
            if rule is not None:
                result[key] = rule.apply(value, self._scrubber)
            else:
                result[key] = self.sanitize(value, visited)
        return result

    def _sanitize_sequence(self, node: Any, visited: set[int]) -> Any:
        items = [self.sanitize(item, visited) for item in node]
        if isinstance(node, list):
            return items
        if isinstance(node, tuple):
            if hasattr(node, "_fields"):  # namedtuple
                return type(node)(*items)
            return tuple(items)
        if isinstance(node, frozenset):
            return frozenset(items)
        return set(items)


_default_sanitizer = Sanitizer()


def get_default_sanitizer() -> Sanitizer:
    """Return the shared sanitizer built from the default rules."""
    return _default_sanitizer


def sanitize_top(value: Any) -> Any:
    """Sanitize ``value`` with the default rules and patterns."""
    return _default_sanitizer.sanitize_top(value)


def sanitize_args(args: Iterable[Any]) -> list[Any]:
    """Sanitize a list of log arguments with the default rules and patterns."""
    return _default_sanitizer.sanitize_args(args)


def redact_log_data(message: str, args: Iterable[Any]) -> tuple[str, list[Any]]:
    """Scrub ``message`` and sanitize ``args`` with the default sanitizer."""
    return _default_sanitizer.redact_log_data(message, args)
