"""
Field extraction helpers for the plaintext catalog listings.

Every function here is total: a missing match yields None or an empty value,
never an exception.
"""

from __future__ import annotations

import re
from typing import Sequence

URI_RE = re.compile(
    r"(http|https)://(\w+:{0,1}\w*@)?(\S+)(:[0-9]+)?(/|/([\w#!:.?+=&%@!-/]))?"
)
PARENTHESIZED_RE = re.compile(r"\([-\w+\d+\.! ]+\)")

# Substituted when an identity line carries no "(version)" token
UNKNOWN_VERSION = "(unknown)"


def find_uri(line: str) -> str | None:
    """Return the first http(s) URI in *line*, or None."""
    match = URI_RE.search(line)
    return match.group(0) if match else None


def find_last_parenthesized(line: str) -> re.Match | None:
    """Return the match object of the last "(...)" version-like group in *line*."""
    last = None
    for last in PARENTHESIZED_RE.finditer(line):
        pass
    return last


def find_last_parenthesized_text(line: str) -> str | None:
    """Return the last "(...)" version-like group in *line*, parentheses included."""
    match = find_last_parenthesized(line)
    return match.group(0) if match else None


def split_pipe_row(line: str) -> list[str]:
    """
    Split a pipe-delimited table row into trimmed fields.

    A single empty field left behind by a terminating "|" is dropped, so
    "a | b |" yields ["a", "b"] while "a | | b" keeps its empty middle field.

    Args:
        line: Raw table row

    Returns:
        List of stripped field values
    """
    parts = line.split("|")
    if len(parts) > 1 and parts[-1] == "":
        parts.pop()
    return [part.strip() for part in parts]


def field_at(parts: Sequence[str], index: int) -> str:
    """Return parts[index], or an empty string when the row is too short."""
    if 0 <= index < len(parts):
        return parts[index]
    return ""
