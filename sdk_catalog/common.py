"""
Common utilities shared across sdk_catalog modules.
"""

from __future__ import annotations

import os
import sys


class SdkCatalogError(Exception):
    """Base class for all errors raised by sdk_catalog."""
    pass


def env_flag(name: str, default: str = "0") -> bool:
    """
    Read a boolean "0"/"1" style flag from the environment.

    Args:
        name: Environment variable name
        default: Value assumed when the variable is unset

    Returns:
        True if the variable is set to "1"
    """
    return os.environ.get(name, default) == "1"


def env_value(name: str) -> str | None:
    """
    Read an environment variable, treating empty strings as unset.

    Args:
        name: Environment variable name

    Returns:
        Stripped value, or None if unset or blank
    """
    value = os.environ.get(name, "").strip()
    return value or None


def vlog(msg: str, verbose: bool = False) -> None:
    """
    Log verbose message using structured logging.

    Args:
        msg: Message to log
        verbose: Whether verbose mode is enabled
    """
    if verbose or env_flag("SDK_CATALOG_DEBUG"):
        try:
            from .logging_config import get_logger
            logger = get_logger()
            logger.info(msg)
        except Exception:
            # Fallback to stderr if logging fails
            try:
                print(f"[sdk_catalog] {msg}", file=sys.stderr)
            except Exception:
                pass
