"""
Centralized logging configuration for sdk_catalog.

Console output goes through a colour-aware formatter; an optional log file
always receives DEBUG records.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAME = "sdk_catalog"

# Global logger instance
_logger: Optional[logging.Logger] = None


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
    propagate: bool = False,
) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        verbose: Enable verbose (DEBUG) output
        quiet: Suppress console output (file only)
        propagate: Allow log propagation (useful for testing)

    Returns:
        Configured logger instance
    """
    global _logger

    if verbose:
        effective_level = "DEBUG"
    elif quiet:
        effective_level = "WARNING"
    else:
        effective_level = level.upper()

    logger = logging.getLogger(LOGGER_NAME)
    # The log file gets DEBUG even when the console is quieter
    logger.setLevel(logging.DEBUG if log_file else getattr(logging, effective_level))
    logger.handlers.clear()

    if not quiet:
        # stderr keeps stdout clean for tables and --json output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, effective_level))
        console_handler.setFormatter(ColoredFormatter(use_colors=sys.stderr.isatty()))
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)

    logger.propagate = propagate

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Return the package logger, configuring console defaults on first use."""
    global _logger
    if _logger is None:
        _logger = setup_logging()
    return _logger


class ColoredFormatter(logging.Formatter):
    """
    Console formatter matching the CLI's stderr lines.

    Warnings are prefixed with "⚠" and errors with "✗", the same markers the
    commands print for their own failures. Debug lines carry the logger name
    so module output can be told apart under --verbose. With use_colors the
    marker is coloured by level.

    The rendered prefix is exposed to format strings as %(status)s.
    """

    MARKERS = {
        logging.WARNING: "⚠",
        logging.ERROR: "✗",
        logging.CRITICAL: "✗",
    }
    COLORS = {
        logging.DEBUG: "\033[2m",     # Dim
        logging.WARNING: "\033[33m",  # Yellow
        logging.ERROR: "\033[31m",    # Red
        logging.CRITICAL: "\033[31m",
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str = "%(status)s%(message)s", use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors

    def _status(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            marker = self.MARKERS.get(record.levelno, "✗")
        elif record.levelno <= logging.DEBUG:
            marker = f"[{record.name}]"
        else:
            return ""
        if self.use_colors:
            color = self.COLORS.get(record.levelno, "")
            marker = f"{color}{marker}{self.RESET}"
        return f"{marker} "

    def format(self, record: logging.LogRecord) -> str:
        record.status = self._status(record)
        return super().format(record)
