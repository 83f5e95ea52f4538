"""Configuration module for scrublog."""

from scrublog.config.settings import (
    ENV_CONFIG,
    ENV_PREFIX,
    ENV_REDACTION,
    ENV_VERBOSE,
    LoggingConfig,
    get_config_file,
    is_verbose_enabled,
    parse_bool,
)

__all__ = [
    "ENV_CONFIG",
    "ENV_PREFIX",
    "ENV_REDACTION",
    "ENV_VERBOSE",
    "LoggingConfig",
    "get_config_file",
    "is_verbose_enabled",
    "parse_bool",
]
