"""
Tests for logging utilities.

This module tests logger setup, configuration, and logging functions.
"""

import logging

import pytest

from sectionconf.core.utils.config import LibraryConfig, LoggingConfig, set_config
from sectionconf.core.utils.logger import (
    get_logger,
    log_configuration_change,
    log_debug,
    log_error,
    log_file_operation,
    log_info,
    log_warning,
    reset_logging,
    setup_logging,
)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_sets_up_logger_with_defaults(self):
        """Test that logger is set up with default values."""
        logger = setup_logging()

        assert logger.name == "sectionconf"
        assert logger.level == logging.INFO

    def test_sets_custom_log_level(self):
        logger = setup_logging(level="debug")

        assert logger.level == logging.DEBUG

    def test_sets_up_file_logging(self, tmp_path):
        """Test that file logging is set up when log_file is provided."""
        log_file = tmp_path / "test.log"
        logger = setup_logging(log_file=str(log_file))

        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1

    def test_repeated_setup_replaces_handlers(self):
        logger1 = setup_logging()
        logger2 = setup_logging()

        assert logger1 is logger2
        assert len(logger2.handlers) == 1

    def test_uses_custom_format(self):
        custom_format = "%(levelname)s - %(message)s"
        logger = setup_logging(format_string=custom_format)

        assert logger.handlers[0].formatter._fmt == custom_format


class TestGetLogger:
    """Tests for get_logger function."""

    def test_creates_logger_from_library_config(self, tmp_path):
        """Test that an uninitialized logger is built from the library configuration."""
        log_file = tmp_path / "lib.log"
        config = LibraryConfig()
        config.logging = LoggingConfig(level="WARNING", file=str(log_file))
        set_config(config)

        logger = get_logger()

        assert logger.level == logging.WARNING
        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)

    def test_returns_same_logger_once_set_up(self):
        assert get_logger() is get_logger()


class TestLogFunctions:
    """Tests for the module-prefixed log helpers."""

    def test_log_error_with_context_and_exception(self, tmp_path):
        log_file = tmp_path / "test.log"
        setup_logging(level="ERROR", log_file=str(log_file))

        log_error("document", "Failed to load", context="app.xml", exception=ValueError("boom"))

        content = log_file.read_text(encoding="utf-8")
        assert "[DOCUMENT] Failed to load | Context: app.xml" in content
        assert "ValueError: boom" in content

    def test_log_warning_and_info(self, tmp_path):
        log_file = tmp_path / "test.log"
        setup_logging(level="INFO", log_file=str(log_file))

        log_warning("collection", "Careful")
        log_info("document", "Loaded")

        content = log_file.read_text(encoding="utf-8")
        assert "[COLLECTION] Careful" in content
        assert "[DOCUMENT] Loaded" in content
        assert "Context" not in content

    def test_log_debug_respects_level(self, tmp_path):
        log_file = tmp_path / "test.log"
        setup_logging(level="INFO", log_file=str(log_file))

        log_debug("collection", "Hidden")
        log_configuration_change("CustomSection1.maxUsers", 1, 2)

        assert log_file.read_text(encoding="utf-8") == ""

    def test_log_configuration_change_at_debug(self, tmp_path):
        log_file = tmp_path / "test.log"
        setup_logging(level="DEBUG", log_file=str(log_file))

        log_configuration_change("CustomSection1.maxUsers", 1000, 5)

        assert "Configuration changed: CustomSection1.maxUsers = 1000 -> 5" in log_file.read_text(
            encoding="utf-8"
        )

    def test_log_file_operation(self, tmp_path):
        log_file = tmp_path / "test.log"
        setup_logging(level="INFO", log_file=str(log_file))

        log_file_operation("write", "out.xml", success=True)
        log_file_operation("read", "in.xml", success=False, error="missing")

        content = log_file.read_text(encoding="utf-8")
        assert "File write: out.xml" in content
        assert "File read failed: in.xml - missing" in content


class TestDocumentLogging:
    """Tests that document operations report through the package logger."""

    def test_failed_load_is_logged(self, tmp_path, sample_registry):
        from sectionconf.core.config import ConfigDocument, ParseError

        log_file = tmp_path / "test.log"
        setup_logging(level="DEBUG", log_file=str(log_file))
        with pytest.raises(ParseError):
            ConfigDocument.from_string("<nope", sample_registry)

        assert "[DOCUMENT] Failed to load configuration" in log_file.read_text(encoding="utf-8")

    def test_successful_load_is_logged(self, tmp_path, sample_config_path, sample_registry):
        from sectionconf.core.config import ConfigDocument

        log_file = tmp_path / "test.log"
        setup_logging(level="INFO", log_file=str(log_file))
        ConfigDocument.from_file(sample_config_path, sample_registry)

        content = log_file.read_text(encoding="utf-8")
        assert "[DOCUMENT] Loaded configuration with 3 section(s)" in content
        assert str(sample_config_path) in content


class TestResetLogging:
    """Tests for reset_logging function."""

    def test_reset_drops_handlers(self):
        logger = setup_logging()
        reset_logging()

        assert logger.handlers == []
