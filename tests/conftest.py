"""Pytest configuration and shared fixtures for scrublog tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from scrublog.config import ENV_CONFIG, ENV_PREFIX, ENV_REDACTION, ENV_VERBOSE, LoggingConfig
from scrublog.logging import LoggerConfig, SafeLogger
from scrublog.redaction import Sanitizer


@pytest.fixture(autouse=True)
def isolated_preferences(tmp_path, monkeypatch):
    """Keep tests away from the real config file, environment and singletons."""
    for env_var in (ENV_CONFIG, ENV_PREFIX, ENV_REDACTION, ENV_VERBOSE):
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    LoggingConfig.reset()
    SafeLogger.reset()
    yield
    LoggingConfig.reset()
    SafeLogger.reset()


@pytest.fixture
def sanitizer() -> Sanitizer:
    """Create a sanitizer with the default rules."""
    return Sanitizer()


@pytest.fixture
def config_file(tmp_path) -> Callable[[str], Path]:
    """Write a scrublog config file into the isolated home directory."""

    def _write(content: str) -> Path:
        path = tmp_path / ".config" / "scrublog" / "config.yaml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def verbose_logger() -> SafeLogger:
    """Create a logger that always treats verbose logging as enabled."""
    return SafeLogger(LoggerConfig(is_verbose_enabled=lambda: True))
