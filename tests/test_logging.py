"""Tests for botman.logging (BotmanLogging, level/format from config)."""

import logging

from botman.config import LoggingConfig
from botman.logging import DEFAULT_FORMAT, DEFAULT_LEVEL, LEVELS, BotmanLogging, _resolve_level


class TestResolveLevel:
    """_resolve_level maps level names to logging constants."""

    def test_known_levels(self) -> None:
        for name, value in LEVELS.items():
            assert _resolve_level(name) == value

    def test_case_and_whitespace_normalized(self) -> None:
        assert _resolve_level(" debug ") == logging.DEBUG
        assert _resolve_level("Error") == logging.ERROR

    def test_unknown_level_returns_info(self) -> None:
        """TRACE and empty names fall back to INFO (the default)."""
        assert DEFAULT_LEVEL == "INFO"
        assert _resolve_level("TRACE") == logging.INFO
        assert _resolve_level("") == logging.INFO


class TestBotmanLogging:
    """BotmanLogging applies LoggingConfig to the root logger."""

    def test_setup_sets_root_level_from_config(self) -> None:
        for level_name, expected in LEVELS.items():
            BotmanLogging(LoggingConfig(level=level_name, format="%(message)s")).setup()
            assert logging.root.level == expected

    def test_setup_applies_format(self) -> None:
        custom = "%(levelname)s | %(name)s | %(message)s"
        BotmanLogging(LoggingConfig(level="INFO", format=custom)).setup()
        assert logging.root.handlers
        assert logging.root.handlers[0].formatter._fmt == custom

    def test_empty_format_uses_default(self) -> None:
        BotmanLogging(LoggingConfig(level="INFO", format="")).setup()
        assert logging.root.handlers[0].formatter._fmt == DEFAULT_FORMAT

    def test_urllib3_kept_at_warning_unless_debugging(self) -> None:
        BotmanLogging(LoggingConfig(level="INFO")).setup()
        assert logging.getLogger("urllib3").level == logging.WARNING
        BotmanLogging(LoggingConfig(level="ERROR")).setup()
        assert logging.getLogger("urllib3").level == logging.ERROR
        BotmanLogging(LoggingConfig(level="DEBUG")).setup()
        assert logging.getLogger("urllib3").level == logging.DEBUG

    def test_get_logger_returns_named_logger(self) -> None:
        log = BotmanLogging(LoggingConfig()).get_logger("botman.test")
        assert isinstance(log, logging.Logger)
        assert log.name == "botman.test"
