"""
Key-based redaction rules.

A rule pairs a set of sensitive property names with a transform. Keys are
matched case-insensitively and exactly, so ``Password`` matches but
``password_hint`` does not. The first rule whose keys and value kind both
match decides the outcome. Full-mask rules also take containers, so
``{"password": ["hunter2"]}`` is masked whole instead of walked; any other
matched key holding a container (for example a nested mapping under
``user``) falls through to ordinary traversal.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from scrublog.redaction.patterns import MASK, Scrubber, partial_mask

ValueKind = Literal["string", "number", "container"]

# Kinds a rule can be declared for; containers are only taken by full-mask rules
RULE_KINDS = ("string", "number")
CONTAINER_TYPES = (Mapping, list, tuple, set, frozenset)


class RedactionAction(str, Enum):
    """Transforms a rule can apply to a matched value."""

    FULL_MASK = "full_mask"  # Replace with "***"
    ZERO = "zero"  # Replace a number with 0
    PARTIAL_MASK = "partial_mask"  # u***@example.com
    SCRUB = "scrub"  # Delegate to the pattern scrubber


# Sensitive key classes
SECRET_KEYS = frozenset(
    {"password", "pass", "pwd", "secret", "token", "auth", "authorization", "applepassword"}
)
CODE_KEYS = frozenset({"code", "otp", "2fa", "twofactor", "two_factor"})
NUMERIC_CODE_KEYS = frozenset({"code", "otp", "2fa"})
IDENTIFIER_KEYS = frozenset({"email", "username", "user", "appleid", "apple_id"})


def value_kind(value: Any) -> ValueKind | None:
    """Classify a value for rule matching."""
    if isinstance(value, str):
        return "string"
    # bool is an int subclass but is never treated as a code
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return "number"
    if isinstance(value, CONTAINER_TYPES):
        return "container"
    return None


@dataclass(frozen=True)
class RedactionRule:
    """A (key predicate, transform) pair."""

    name: str
    keys: frozenset[str]
    action: RedactionAction
    applies_to: ValueKind = "string"

    def __post_init__(self) -> None:
        if not isinstance(self.action, RedactionAction):
            raise TypeError("action must be a RedactionAction.")
        if self.applies_to not in RULE_KINDS:
            raise ValueError(f"Unsupported value kind '{self.applies_to}'.")
        normalized = frozenset(str(k).strip().lower() for k in self.keys)
        if not normalized or "" in normalized:
            raise ValueError(f"Rule '{self.name}' needs at least one non-empty key.")
        object.__setattr__(self, "keys", normalized)

    def matches(self, key: Any, value: Any) -> bool:
        """Check whether this rule handles ``value`` stored under ``key``."""
        if not isinstance(key, str):
            return False
        if key.lower() not in self.keys:
            return False
        kind = value_kind(value)
        if kind == "container":
            return self.action == RedactionAction.FULL_MASK
        return kind == self.applies_to

    def apply(self, value: Any, scrubber: Scrubber) -> Any:
        """Transform a matched value."""
        if self.action == RedactionAction.FULL_MASK:
            return MASK
        if self.action == RedactionAction.ZERO:
            return 0
        if self.action == RedactionAction.PARTIAL_MASK:
            return partial_mask(value)
        return scrubber.scrub(value)


DEFAULT_RULES: tuple[RedactionRule, ...] = (
    RedactionRule("secret", SECRET_KEYS, RedactionAction.FULL_MASK),
    # String codes get the full mask while numeric codes are zeroed; the
    # two shapes are intentionally not unified.
    RedactionRule("code", CODE_KEYS, RedactionAction.FULL_MASK),
    RedactionRule("numeric_code", NUMERIC_CODE_KEYS, RedactionAction.ZERO, applies_to="number"),
    RedactionRule("identifier", IDENTIFIER_KEYS, RedactionAction.PARTIAL_MASK),
)


def build_rules(
    extra_keys: Mapping[str, Iterable[str]] | None = None,
) -> tuple[RedactionRule, ...]:
    """Build the default rule table extended with extra key aliases.

    Args:
        extra_keys: Mapping of rule name ("secret", "code", "numeric_code",
            "identifier") to additional key names for that rule.

    Returns:
        A new immutable rule tuple.
    """
    if not extra_keys:
        return DEFAULT_RULES

    known = {rule.name for rule in DEFAULT_RULES}
    unknown = set(extra_keys) - known
    if unknown:
        raise ValueError(
            f"Unknown rule name(s): {', '.join(sorted(unknown))}. "
            f"Available: [{', '.join(sorted(known))}]"
        )

    rules = []
    for rule in DEFAULT_RULES:
        aliases = extra_keys.get(rule.name)
        if isinstance(aliases, str):
            aliases = [aliases]
        if aliases:
            rule = RedactionRule(
                rule.name, rule.keys | frozenset(aliases), rule.action, rule.applies_to
            )
        rules.append(rule)
    return tuple(rules)


def find_rule(
    rules: Iterable[RedactionRule], key: Any, value: Any
) -> RedactionRule | None:
    """Return the first rule that handles ``value`` under ``key``."""
    for rule in rules:
        if rule.matches(key, value):
            return rule
    return None
