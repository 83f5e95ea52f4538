"""
Logging preferences for scrublog.

Preferences come from an optional YAML file, then environment overrides.

Config file (~/.config/scrublog/config.yaml):
    verbose_logging: true
    enable_redaction: true
    prefix: "[MyApp]"
    extra_keys:
      secret: [api_key, client_secret]
      identifier: [account_id]

Environment Variables:
    SCRUBLOG_VERBOSE: Show verbose `log` output ("1", "true", "yes", "on")
    SCRUBLOG_REDACTION: Set to "0"/"false" to turn redaction off
    SCRUBLOG_PREFIX: Prefix for the default logger
    SCRUBLOG_CONFIG: Alternate config file path
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from threading import RLock
from typing import Any, ClassVar

import yaml

logger = logging.getLogger(__name__)

# Environment variable names
ENV_VERBOSE = "SCRUBLOG_VERBOSE"
ENV_REDACTION = "SCRUBLOG_REDACTION"
ENV_PREFIX = "SCRUBLOG_PREFIX"
ENV_CONFIG = "SCRUBLOG_CONFIG"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def get_config_file() -> Path:
    """Get the config file path. Computed at runtime for test compatibility."""
    override = os.environ.get(ENV_CONFIG)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "scrublog" / "config.yaml"


def parse_bool(value: str) -> bool:
    """Parse a boolean environment value.

    Raises:
        ValueError: If the value is not a recognized boolean.
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value '{value}'")


class LoggingConfig:
    """Process-wide logging preferences."""

    _instance: ClassVar[LoggingConfig | None] = None
    _instance_lock: ClassVar[RLock] = RLock()

    def __init__(self, config_file: Path | None = None) -> None:
        self._config_file = config_file or get_config_file()
        self._verbose_logging = False
        self._enable_redaction = True
        self._prefix = ""
        self._extra_keys: dict[str, list[str]] = {}
        self._load_from_file()
        self._load_from_env()

    @classmethod
    def get_instance(cls) -> LoggingConfig:
        """Get or create the singleton instance."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (for testing)."""
        with cls._instance_lock:
            cls._instance = None

    def _load_from_file(self) -> None:
        """Load preferences from the YAML config file if it exists."""
        if not self._config_file.exists():
            return

        try:
            loaded = yaml.safe_load(self._config_file.read_text()) or {}
        except (yaml.YAMLError, OSError):
            logger.error(
                "Failed to read logging preferences from %s", self._config_file, exc_info=True
            )
            return

        if not isinstance(loaded, dict):
            logger.error("Ignoring %s: expected a mapping at the top level", self._config_file)
            return

        self._apply(loaded)

    def _apply(self, data: dict[str, Any]) -> None:
        bool_keys = {
            "verbose_logging": "_verbose_logging",
            "enable_redaction": "_enable_redaction",
        }
        for key, attr in bool_keys.items():
            if key not in data:
                continue
            value = data[key]
            try:
                setattr(self, attr, parse_bool(value) if isinstance(value, str) else bool(value))
            except ValueError:
                logger.error(
                    "Ignoring %s in %s: %r is not a boolean", key, self._config_file, value
                )
        if data.get("prefix") is not None:
            self._prefix = str(data["prefix"])

        extra_keys = data.get("extra_keys")
        if extra_keys is None:
            return
        if not isinstance(extra_keys, dict):
            logger.error("Ignoring extra_keys in %s: expected a mapping", self._config_file)
            return
        for rule_name, keys in extra_keys.items():
            if isinstance(keys, str):
                keys = [keys]
            if not isinstance(keys, list):
                logger.error("Ignoring extra_keys.%s: expected a list of key names", rule_name)
                continue
            self._extra_keys[str(rule_name)] = [str(k) for k in keys if str(k).strip()]

    def _load_from_env(self) -> None:
        """Apply environment variable overrides."""
        bool_overrides = {
            ENV_VERBOSE: "_verbose_logging",
            ENV_REDACTION: "_enable_redaction",
        }
        for env_var, attr in bool_overrides.items():
            value = os.environ.get(env_var)
            if value is None:
                continue
            try:
                setattr(self, attr, parse_bool(value))
            except ValueError:
                logger.error("Ignoring %s: %r is not a boolean", env_var, value)

        prefix = os.environ.get(ENV_PREFIX)
        if prefix is not None:
            self._prefix = prefix.strip()

    @property
    def config_file(self) -> Path:
        return self._config_file

    @property
    def verbose_logging(self) -> bool:
        return self._verbose_logging

    @property
    def enable_redaction(self) -> bool:
        return self._enable_redaction

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def extra_keys(self) -> dict[str, list[str]]:
        """Additional key aliases per redaction rule name."""
        return {name: list(keys) for name, keys in self._extra_keys.items()}


def is_verbose_enabled() -> bool:
    """Check whether verbose logging is enabled.

    Convenience function that uses the singleton LoggingConfig. Any failure
    while reading preferences counts as "not verbose".
    """
    try:
        return LoggingConfig.get_instance().verbose_logging
    except Exception:
        logger.error("Failed to read preferences for verbose logging", exc_info=True)
        return False
