"""
Tests for logging configuration (sdk_catalog/logging_config.py).
"""

import logging
import sys

import pytest

from sdk_catalog import logging_config
from sdk_catalog.common import vlog
from sdk_catalog.logging_config import (
    LOGGER_NAME,
    ColoredFormatter,
    get_logger,
    setup_logging,
)


def console_handlers(logger):
    return [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]


class TestSetupLogging:
    """Test logging setup and configuration."""

    def test_setup_logging_default(self):
        """Test default logging setup."""
        logger = setup_logging()
        assert logger.name == LOGGER_NAME == "sdk_catalog"
        assert logger.level == logging.INFO
        assert logger.propagate is False

    def test_console_goes_to_stderr(self):
        """Test stdout stays free for tables and JSON."""
        handlers = console_handlers(setup_logging())
        assert len(handlers) == 1
        assert handlers[0].stream is sys.stderr

    def test_setup_logging_verbose(self):
        """Test verbose logging enables DEBUG level."""
        assert setup_logging(verbose=True).level == logging.DEBUG

    def test_setup_logging_quiet(self):
        """Test quiet mode drops the console handler."""
        logger = setup_logging(quiet=True)
        assert logger.level == logging.WARNING
        assert console_handlers(logger) == []

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(console_handlers(logger)) == 1

    def test_setup_logging_with_file(self, tmp_path):
        """Test logging to a file in a directory that does not exist yet."""
        log_file = tmp_path / "logs" / "sdk.log"
        logger = setup_logging(log_file=str(log_file), quiet=True)
        logger.warning("Written to file")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "Written to file" in content
        assert "[WARNING] sdk_catalog" in content

    def test_file_receives_debug_when_console_is_quiet(self, tmp_path):
        log_file = tmp_path / "sdk.log"
        logger = setup_logging(log_file=str(log_file))
        logger.debug("Only in the file")
        for handler in logger.handlers:
            handler.flush()

        assert "Only in the file" in log_file.read_text(encoding="utf-8")
        assert console_handlers(logger)[0].level == logging.INFO

    def test_module_loggers_are_children(self):
        """Test module loggers inherit the package configuration."""
        setup_logging(verbose=True)
        child = logging.getLogger("sdk_catalog.remote")
        assert child.getEffectiveLevel() == logging.DEBUG


class TestGetLogger:
    def test_initializes_once(self):
        first = get_logger()
        assert get_logger() is first
        assert logging_config._logger is first


class TestColoredFormatter:
    """Tests for the console formatter."""

    def make_record(self, level=logging.WARNING, name="sdk_catalog.local"):
        return logging.LogRecord(name, level, __file__, 1, "hello", None, None)

    @pytest.mark.parametrize("level,expected", [
        (logging.INFO, "hello"),
        (logging.WARNING, "⚠ hello"),
        (logging.ERROR, "✗ hello"),
        (logging.CRITICAL, "✗ hello"),
        (logging.DEBUG, "[sdk_catalog.local] hello"),
    ])
    def test_plain_markers(self, level, expected):
        """Test the markers match the CLI's own stderr lines."""
        formatter = ColoredFormatter(use_colors=False)
        assert formatter.format(self.make_record(level)) == expected

    def test_colored_marker(self):
        formatter = ColoredFormatter(use_colors=True)
        output = formatter.format(self.make_record(logging.ERROR))
        assert output == "\033[31m✗\033[0m hello"

    def test_info_never_colored(self):
        formatter = ColoredFormatter(use_colors=True)
        assert formatter.format(self.make_record(logging.INFO)) == "hello"

    def test_console_handler_output(self, capsys):
        """Test setup_logging wires the formatter onto stderr."""
        logger = setup_logging()
        logging.getLogger("sdk_catalog.remote").error("Server error: 503")
        assert "✗ Server error: 503" in capsys.readouterr().err
        assert isinstance(console_handlers(logger)[0].formatter, ColoredFormatter)


class TestVlog:
    """Tests for verbose progress messages."""

    def test_silent_by_default(self, monkeypatch, caplog):
        monkeypatch.delenv("SDK_CATALOG_DEBUG", raising=False)
        setup_logging(propagate=True)
        vlog("not shown")
        assert "not shown" not in caplog.text

    def test_verbose(self, caplog):
        setup_logging(propagate=True)
        vlog("progress message", verbose=True)
        assert "progress message" in caplog.text

    def test_debug_env(self, monkeypatch, caplog):
        monkeypatch.setenv("SDK_CATALOG_DEBUG", "1")
        setup_logging(propagate=True)
        vlog("debug env message")
        assert "debug env message" in caplog.text
