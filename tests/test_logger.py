"""Tests for the redacting logger wrapper."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pytest

from scrublog import get_logger
from scrublog.logging import LoggerConfig, SafeLogger
from scrublog.redaction import Sanitizer


@dataclass
class Cfg:
    password: str


@pytest.fixture(autouse=True)
def capture_scrublog(caplog):
    """Capture everything the scrublog logger emits."""
    caplog.set_level(logging.DEBUG, logger="scrublog")
    return caplog


def _messages(caplog) -> list[str]:
    return [record.getMessage() for record in caplog.records if record.name == "scrublog"]


class TestLogLevels:
    """Tests for verbose gating and levels."""

    def test_log_redacts_arguments(self, verbose_logger, caplog):
        """Test log output has sanitized arguments."""
        verbose_logger.log("User logged in", {"user_id": 123, "email": "user@example.com"})

        assert _messages(caplog) == [
            "User logged in {'user_id': 123, 'email': 'u***@example.com'}"
        ]
        assert caplog.records[-1].levelno == logging.INFO

    def test_log_silent_when_not_verbose(self, caplog):
        """Test log is suppressed without verbose logging."""
        logger = SafeLogger(LoggerConfig(is_verbose_enabled=lambda: False))
        logger.log("hidden")
        logger.debug("hidden too")

        assert _messages(caplog) == []

    def test_debug_when_verbose(self, verbose_logger, caplog):
        """Test debug emits at DEBUG when verbose."""
        verbose_logger.debug("details", [1, 2])

        assert _messages(caplog) == ["details [1, 2]"]
        assert caplog.records[-1].levelno == logging.DEBUG

    def test_error_always_shown(self, caplog):
        """Test error ignores the verbose setting."""
        logger = SafeLogger(LoggerConfig(is_verbose_enabled=lambda: False))
        logger.error("Authentication failed", {"password": "secret123"})

        assert _messages(caplog) == ["Authentication failed {'password': '***'}"]
        assert caplog.records[-1].levelno == logging.ERROR

    def test_warn_always_shown(self, caplog):
        """Test warn ignores the verbose setting."""
        logger = SafeLogger(LoggerConfig(is_verbose_enabled=lambda: False))
        logger.warn("API rate limit approaching", {"remaining": 10})
        logger.warning("again")

        assert _messages(caplog) == ["API rate limit approaching {'remaining': 10}", "again"]
        assert all(record.levelno == logging.WARNING for record in caplog.records)


class TestRedaction:
    """Tests for message and argument redaction."""

    def test_message_scrubbed(self, verbose_logger, caplog):
        """Test secrets inside the message are scrubbed."""
        verbose_logger.error("token=abc123 for user@example.com")

        assert _messages(caplog) == ["token=*** for u***@example.com"]

    def test_string_arguments_scrubbed(self, verbose_logger, caplog):
        """Test string arguments are rendered scrubbed and unquoted."""
        verbose_logger.error("request", "Bearer abc123")

        assert _messages(caplog) == ["request Bearer ***"]

    def test_opaque_argument_rendering_scrubbed(self, verbose_logger, caplog):
        """Test opaque objects are rendered and then scrubbed."""
        verbose_logger.error("failed", ValueError("password=hunter2"))

        assert _messages(caplog) == ["failed ValueError('password=***')"]

    def test_dataclass_argument_scrubbed(self, verbose_logger, caplog):
        """Test dataclass reprs are scrubbed, nested in containers or not."""
        verbose_logger.error("cfg", {"cfg": Cfg("hunter2")})
        verbose_logger.error("cfg", Cfg("hunter2"))
        verbose_logger.error("cfg", [Cfg("hunter2")])

        assert _messages(caplog) == [
            "cfg {'cfg': Cfg(password='***')}",
            "cfg Cfg(password='***')",
            "cfg [Cfg(password='***')]",
        ]

    def test_redaction_disabled(self, caplog):
        """Test redaction can be turned off."""
        logger = SafeLogger(LoggerConfig(enable_redaction=False))
        logger.error("password=abc", {"password": "x"})

        assert _messages(caplog) == ["password=abc {'password': 'x'}"]

    def test_percent_signs_are_literal(self, verbose_logger, caplog):
        """Test messages are not %-formatted a second time."""
        verbose_logger.error("100% done", "%s")

        assert _messages(caplog) == ["100% done %s"]

    def test_custom_sanitizer(self, caplog):
        """Test a logger uses the sanitizer it was given."""
        logger = SafeLogger(sanitizer=Sanitizer(rules=[]))
        logger.error("payload", {"password": "x"})

        assert _messages(caplog) == ["payload {'password': 'x'}"]


class TestPrefixes:
    """Tests for prefixes and child loggers."""

    def test_prefix(self, caplog):
        """Test the prefix is added to every message."""
        SafeLogger(LoggerConfig(prefix="[App]")).error("boom")

        assert _messages(caplog) == ["[App] boom"]

    def test_child_composes_prefix(self, caplog):
        """Test child prefixes follow the parent prefix."""
        parent = SafeLogger(LoggerConfig(prefix="[App]"))
        child = parent.child("[Auth]")
        child.error("Login attempt")

        assert child.config.prefix == "[App] [Auth]"
        assert parent.config.prefix == "[App]"
        assert _messages(caplog) == ["[App] [Auth] Login attempt"]

    def test_child_without_parent_prefix(self):
        """Test a child of an unprefixed logger uses its own prefix."""
        assert SafeLogger().child("[Auth]").config.prefix == "[Auth]"

    def test_child_keeps_settings(self):
        """Test children share redaction settings and the sanitizer."""
        parent = SafeLogger(LoggerConfig(enable_redaction=False))
        child = parent.child("[X]")

        assert child.config.enable_redaction is False
        assert child.sanitizer is parent.sanitizer
        assert child.name == parent.name


class TestDefaultLogger:
    """Tests for the process-wide default logger."""

    def test_singleton(self):
        """Test the default logger is created once."""
        assert SafeLogger.get_instance() is SafeLogger.get_instance()
        assert get_logger() is SafeLogger.get_instance()

    def test_reset(self):
        """Test reset drops the default logger."""
        first = SafeLogger.get_instance()
        SafeLogger.reset()
        assert SafeLogger.get_instance() is not first

    def test_get_logger_with_prefix(self):
        """Test get_logger returns a prefixed child."""
        assert get_logger("[Sync]").config.prefix == "[Sync]"

    def test_verbose_from_environment(self, monkeypatch, caplog):
        """Test the default verbosity check reads preferences."""
        get_logger().log("hidden")
        assert _messages(caplog) == []

        monkeypatch.setenv("SCRUBLOG_VERBOSE", "true")
        from scrublog.config import LoggingConfig

        LoggingConfig.reset()
        get_logger().log("shown")
        assert _messages(caplog) == ["shown"]

    def test_preferences_from_config_file(self, config_file, caplog):
        """Test prefix and extra keys come from the config file."""
        config_file(
            "verbose_logging: true\n"
            "prefix: '[Cfg]'\n"
            "extra_keys:\n"
            "  secret: [api_key]\n"
        )
        logger = get_logger()
        logger.log("payload", {"api_key": "abc", "password": "x"})

        assert _messages(caplog) == ["[Cfg] payload {'api_key': '***', 'password': '***'}"]

    def test_invalid_extra_keys_fall_back_to_defaults(self, config_file, caplog):
        """Test unknown rule names in the config do not break the logger."""
        config_file("extra_keys:\n  nope: [x]\n")
        logger = get_logger()
        logger.error("payload", {"password": "x"})

        assert "Invalid extra_keys" in caplog.text
        assert _messages(caplog)[-1] == "payload {'password': '***'}"
