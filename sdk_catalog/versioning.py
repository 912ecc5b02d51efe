"""
Version ordering.

Two comparators live here:

* ``natural_compare`` orders strings "alphanumerically": runs of digits are
  compared by numeric value, everything else character by character. It is
  the default order for generic version listings ("1.10.0" > "1.9.0",
  "rc2" > "rc1").
* ``compare_versions`` uses PEP 440 semantics from ``packaging`` when both
  strings parse, falling back to the natural order otherwise.
"""

from __future__ import annotations

import re
from functools import cmp_to_key
from typing import Iterable

from packaging import version as pkg_version

_CHUNK_RE = re.compile(r"\d+|\D+")


def _chunks(s: str) -> list[str]:
    return _CHUNK_RE.findall(s)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def natural_compare(a: str, b: str) -> int:
    """
    Compare two strings with numeric-aware ordering.

    Digit runs compare by value; equal values with different widths
    ("07" vs "7") put the shorter run first. A digit run against a non-digit
    run, and two non-digit runs, compare by character code. When one string
    is a chunk-wise prefix of the other, the shorter one sorts first.

    Args:
        a: First string
        b: Second string

    Returns:
        -1 if a < b, 0 if a == b, 1 if a > b
    """
    for left, right in zip(_chunks(a), _chunks(b)):
        if left.isdecimal() and right.isdecimal():
            result = _cmp(int(left), int(right)) or _cmp(len(left), len(right))
        else:
            result = _cmp(left, right)
        if result:
            return result
    return _cmp(len(a), len(b))


natural_key = cmp_to_key(natural_compare)


def natural_sort(values: Iterable[str], descending: bool = True) -> list[str]:
    """Sort *values* by ``natural_compare``, newest-looking first by default."""
    return sorted(values, key=natural_key, reverse=descending)


def compare_versions(v1: str, v2: str) -> int:
    """
    Compare two version strings.

    Args:
        v1: First version
        v2: Second version

    Returns:
        -1 if v1 < v2, 0 if v1 == v2, 1 if v1 > v2
    """
    v1 = strip_parentheses(v1)
    v2 = strip_parentheses(v2)
    try:
        ver1 = pkg_version.parse(v1)
        ver2 = pkg_version.parse(v2)
    except pkg_version.InvalidVersion:
        return natural_compare(v1, v2)
    return _cmp(ver1, ver2)


def strip_parentheses(value: str) -> str:
    """Turn a catalog default version token such as "(1.0)" into "1.0"."""
    value = value.strip()
    if value.startswith("(") and value.endswith(")"):
        return value[1:-1].strip()
    return value
