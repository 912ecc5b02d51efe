"""
Candidate catalog parsing and lookup.

The remote candidate list is human readable text: a preamble, then one block
per candidate separated by a line of dashes, e.g.

    --------------------------------------------------------------------------------
    Java (17.0.2-tem)                                https://projects.eclipse.org/...

    Java Platform, Standard Edition (or Java SE) is a widely used platform for
    development and deployment of portable code for desktop and server environments.

                                                                  $ sdk install java
    --------------------------------------------------------------------------------
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from .models import CandidateRecord
from .text_fields import UNKNOWN_VERSION, find_last_parenthesized, find_uri

logger = logging.getLogger(__name__)

# Fallback search when no line consists of dashes alone
DIVIDER_RUN = "-" * 31
DIVIDER_LINE_RE = re.compile(r"^(-{3,})[ \t]*\r?$", re.MULTILINE)
INSTALL_MARKER = "$ sdk install "


def _lines(text: str) -> list[str]:
    return [line.rstrip("\r") for line in text.split("\n")]


def find_divider(raw_text: str) -> tuple[int, str]:
    """
    Locate the block divider.

    The divider is the first line made only of dashes; failing that, the dash
    run starting at the first DIVIDER_RUN occurrence. Its exact length is the
    delimiter used for every later block.

    Args:
        raw_text: Full catalog text

    Returns:
        Tuple of (offset of the divider, divider string), or (-1, "") when
        the text has no divider
    """
    match = DIVIDER_LINE_RE.search(raw_text)
    if match:
        return match.start(1), match.group(1)

    idx = raw_text.find(DIVIDER_RUN)
    if idx < 0:
        return -1, ""
    end = idx
    while end < len(raw_text) and raw_text[end] == "-":
        end += 1
    return idx, raw_text[idx:end]


def split_blocks(raw_text: str) -> list[str]:
    """
    Split catalog text into non-empty candidate blocks.

    The preamble before the first divider is discarded. Text without any
    divider is treated as a single block.
    """
    idx, divider = find_divider(raw_text)
    if idx < 0:
        blocks = [raw_text]
    else:
        blocks = raw_text[idx + len(divider):].split(divider)
    return [block for block in blocks if block.strip()]


def parse_block(block: str) -> CandidateRecord:
    """
    Parse one candidate block.

    Blank lines are skipped. The first line carrying a URI is the identity
    line (name, default version, homepage); a line containing
    "$ sdk install " names the binary; every other line is description text,
    each followed by a single space.

    Args:
        block: Text between two dividers

    Returns:
        CandidateRecord; fields that could not be found are empty strings
    """
    name = ""
    binary_id = ""
    description_parts: list[str] = []
    homepage = ""
    default_version = ""
    identity_seen = False

    for line in _lines(block):
        if not line.strip():
            continue

        uri = None if identity_seen else find_uri(line)
        if uri is not None:
            identity_seen = True
            homepage = uri
            name, default_version = _parse_identity(line, uri)
        elif INSTALL_MARKER in line:
            binary_id = line.split()[-1]
        else:
            description_parts.append(line + " ")

    return CandidateRecord(
        display_name=name,
        binary_id=binary_id,
        description="".join(description_parts),
        homepage=homepage,
        default_version=default_version,
    )


def _parse_identity(line: str, uri: str) -> tuple[str, str]:
    """Extract (display_name, default_version) from an identity line."""
    version = find_last_parenthesized(line)
    if version is None:
        # No version token: the name is whatever precedes the homepage
        return line[:line.find(uri)].strip(), UNKNOWN_VERSION

    offset = version.start()
    # Offset 0 leaves no room for a name
    name = line[:offset - 1].strip() if offset > 0 else ""
    return name, version.group(0)


def parse_catalog(raw_text: str) -> list[CandidateRecord]:
    """
    Parse the full candidate list into records, one per block.

    A block that fails to parse is logged and skipped; it never aborts the
    rest of the catalog.

    Args:
        raw_text: Response body of the candidate list endpoint

    Returns:
        List of CandidateRecord in listing order
    """
    records = []
    for block in split_blocks(raw_text):
        try:
            records.append(parse_block(block))
        except Exception as e:
            logger.error(f"Failed to parse candidate block: {e}")
    logger.debug(f"Parsed {len(records)} candidate blocks")
    return records


class CandidateCatalog:
    """Lookup over the parsed candidate records, keyed by binary id."""

    def __init__(self, records: Iterable[CandidateRecord] = ()):
        self._entries: dict[str, CandidateRecord] = {}
        self._order: list[CandidateRecord] = []
        for record in records:
            self._order.append(record)
            if not record.binary_id:
                logger.warning(f"Candidate without binary id: {record.display_name or '<unnamed>'}")
                continue
            if record.binary_id in self._entries:
                logger.warning(f"Duplicate candidate binary id: {record.binary_id}")
                continue
            self._entries[record.binary_id] = record

    @classmethod
    def from_text(cls, raw_text: str) -> CandidateCatalog:
        """Build a catalog straight from the candidate list text."""
        return cls(parse_catalog(raw_text))

    def get(self, binary_id: str) -> CandidateRecord | None:
        """
        Get the record for a candidate.

        Args:
            binary_id: Candidate binary id

        Returns:
            CandidateRecord or None if not found
        """
        return self._entries.get(binary_id)

    def has_candidate(self, binary_id: str) -> bool:
        return binary_id in self._entries

    def all_candidates(self) -> list[CandidateRecord]:
        """All records in listing order, including ones without a binary id."""
        return list(self._order)

    def binary_ids(self) -> list[str]:
        return list(self._entries)

    def search(self, term: str) -> list[CandidateRecord]:
        """
        Case-insensitive search over name, binary id and description.

        Args:
            term: Search text

        Returns:
            Matching records in listing order
        """
        needle = term.lower().strip()
        if not needle:
            return self.all_candidates()
        return [
            record for record in self._order
            if needle in record.display_name.lower()
            or needle in record.binary_id.lower()
            or needle in record.description.lower()
        ]

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self):
        return iter(self._order)
