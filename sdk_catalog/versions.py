"""
Per-candidate version list parsing.

Two listing formats are served by the candidates API:

Generic (3 header lines, whitespace separated tokens, "=" terminator)::

    ================================================================================
    Available Gradle Versions
    ================================================================================
         8.5                 7.6.3               6.9.4
         8.4                 7.6.2               6.9.3
    ================================================================================

Java (5 header lines, pipe-delimited rows, "=" terminator)::

    ================================================================================
    Available Java Versions for Linux 64bit
    ================================================================================
     Vendor        | Use | Version      | Dist    | Status     | Identifier
    --------------------------------------------------------------------------------
     Corretto      |     | 21.0.1       | amzn    |            | 21.0.1-amzn
                   |     | 17.0.9       | amzn    |            | 17.0.9-amzn
    ================================================================================
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .models import JavaVersion, SimpleVersion, VersionEntry
from .text_fields import field_at, split_pipe_row
from .versioning import natural_key

logger = logging.getLogger(__name__)

JAVA_MARKER = "Available Java Versions"
GENERIC_HEADER_LINES = 3
JAVA_HEADER_LINES = 5
TERMINATOR_PREFIX = "="


def _body_lines(raw_text: str, header_lines: int) -> list[str]:
    """Lines after the fixed header, up to the first "="-prefixed line."""
    lines = [line.rstrip("\r") for line in raw_text.split("\n")][header_lines:]
    body = []
    for line in lines:
        if line.startswith(TERMINATOR_PREFIX):
            break
        body.append(line)
    return body


def is_java_listing(raw_text: str) -> bool:
    return JAVA_MARKER in raw_text


def parse_generic_versions(
    raw_text: str,
    sort_key: Callable[[str], Any] = natural_key,
) -> list[SimpleVersion]:
    """
    Parse a generic version listing.

    Args:
        raw_text: Response body
        sort_key: Key applied before sorting in descending order

    Returns:
        SimpleVersion entries, newest-looking first
    """
    tokens = " ".join(_body_lines(raw_text, GENERIC_HEADER_LINES)).split()
    tokens.sort(key=sort_key, reverse=True)
    return [SimpleVersion(token) for token in tokens]


def parse_java_row(line: str) -> JavaVersion | None:
    """
    Parse one row of the Java table.

    Columns: vendor | use | version | dist | status | identifier. Missing
    columns become empty strings, so a short row is kept with what it has.

    Returns:
        JavaVersion, or None for lines that are not table rows (blank, no
        "|" separator, or every field empty)
    """
    if "|" not in line:
        return None
    parts = split_pipe_row(line)
    if not any(parts):
        return None
    return JavaVersion(
        vendor=field_at(parts, 0),
        usage=field_at(parts, 1),
        version=field_at(parts, 2),
        distribution=field_at(parts, 3),
        status=field_at(parts, 4),
        identifier=field_at(parts, 5),
    )


def parse_java_versions(raw_text: str) -> list[JavaVersion]:
    """
    Parse the tabular Java listing. Rows keep the server's order.

    Args:
        raw_text: Response body

    Returns:
        JavaVersion entries; lines that are not table rows are dropped
    """
    versions = []
    for line in _body_lines(raw_text, JAVA_HEADER_LINES):
        try:
            version = parse_java_row(line)
        except Exception as e:
            logger.debug(f"Skipping Java version row {line!r}: {e}")
            continue
        if version is None:
            if line.strip():
                logger.debug(f"Skipping line that is not a Java version row: {line!r}")
            continue
        if not version.identifier:
            logger.debug(f"Java version row without identifier: {line!r}")
        versions.append(version)
    return versions


def parse_versions(
    raw_text: str,
    sort_key: Callable[[str], Any] = natural_key,
) -> list[VersionEntry]:
    """
    Parse a candidate's version listing, dispatching on its format.

    Never raises on malformed text; it returns whatever entries could be
    decoded.

    Args:
        raw_text: Response body of the versions endpoint
        sort_key: Sort key for generic listings (Java rows are not re-sorted)

    Returns:
        List of VersionEntry with installed/current unset
    """
    if is_java_listing(raw_text):
        versions: list[VersionEntry] = list(parse_java_versions(raw_text))
    else:
        versions = list(parse_generic_versions(raw_text, sort_key))
    logger.debug(f"Parsed {len(versions)} versions")
    return versions
