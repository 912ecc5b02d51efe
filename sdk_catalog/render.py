"""
Plain-text rendering for the command line.

Columns are aligned by terminal display width (wcwidth), so names with wide
characters line up.
"""

from __future__ import annotations

import os
import re
from typing import Sequence

from wcwidth import wcswidth

from .models import JavaVersion, LocalScanResult, UnifiedCandidate, VersionEntry

USE_COLOR = os.environ.get("SDK_CATALOG_COLOR", "1") == "1"

GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RESET = "\033[0m"

CSI_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")

CURRENT_MARK = ">"
INSTALLED_MARK = "*"
JAVA_CURRENT_MARK = ">>>"
JAVA_INSTALLED_STATUS = "installed"


def colorize(text: str, color: str) -> str:
    """Apply color to text, unless colors are disabled or text is empty."""
    if not USE_COLOR or not text:
        return text
    return f"{color}{text}{RESET}"


def display_width(text: str) -> int:
    """Terminal width of *text*, ignoring ANSI escapes."""
    width = wcswidth(CSI_RE.sub("", text))
    # wcswidth returns -1 for non-printable characters
    return width if width >= 0 else len(text)


def pad(text: str, width: int, right: bool = False) -> str:
    fill = " " * max(0, width - display_width(text))
    return fill + text if right else text + fill


def format_table(rows: Sequence[Sequence[str]], header: Sequence[str] | None = None, gap: int = 2) -> list[str]:
    """
    Align rows into columns.

    Args:
        rows: Table cells
        header: Optional header row, followed by a rule
        gap: Spaces between columns

    Returns:
        Rendered lines without trailing whitespace
    """
    all_rows = [list(header)] + [list(r) for r in rows] if header else [list(r) for r in rows]
    if not all_rows:
        return []
    ncols = max(len(r) for r in all_rows)
    widths = [0] * ncols
    for row in all_rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], display_width(cell))

    sep = " " * gap
    lines = []
    for idx, row in enumerate(all_rows):
        cells = [pad(row[i] if i < len(row) else "", widths[i]) for i in range(ncols)]
        lines.append(sep.join(cells).rstrip())
        if header and idx == 0:
            lines.append(sep.join("-" * w for w in widths))
    return lines


def version_markers(entry: VersionEntry) -> tuple[str, str]:
    """(current marker, installed marker) for a generic version."""
    return (
        CURRENT_MARK if entry.current else "",
        INSTALLED_MARK if entry.installed else "",
    )


def render_versions(candidate: UnifiedCandidate) -> str:
    """Render a candidate's version list, Java table or generic markers."""
    versions = candidate.versions
    if not versions:
        return f"No versions available for {candidate.binary_id}"

    if isinstance(versions[0], JavaVersion):
        rows = []
        for v in versions:
            if not isinstance(v, JavaVersion):
                continue
            rows.append([
                v.vendor,
                colorize(JAVA_CURRENT_MARK, GREEN) if v.current else "",
                v.version,
                v.distribution,
                JAVA_INSTALLED_STATUS if v.installed else "",
                v.identifier,
            ])
        header = ["Vendor", "Use", "Version", "Dist", "Status", "Identifier"]
        return "\n".join(format_table(rows, header))

    rows = []
    for v in versions:
        current, installed = version_markers(v)
        rows.append([colorize(current, GREEN), colorize(installed, BLUE), v.key])
    lines = format_table(rows)
    lines.append("")
    lines.append(f"{INSTALLED_MARK} - installed")
    lines.append(f"{CURRENT_MARK} - currently in use")
    return "\n".join(lines)


def render_candidates(candidates: Sequence[UnifiedCandidate]) -> str:
    """One row per candidate: binary id, name, default version, local state, homepage."""
    rows = []
    for c in candidates:
        state = ""
        if c.current_version:
            state = c.current_version
            if c.upgrade_available:
                state = colorize(f"{state} (upgrade available)", YELLOW)
            else:
                state = colorize(state, GREEN)
        elif c.installed:
            state = f"{len(c.installed_versions)} installed"
        rows.append([
            c.binary_id,
            c.candidate.display_name,
            c.candidate.default_version,
            state,
            c.candidate.homepage,
        ])
    return "\n".join(format_table(rows, ["Candidate", "Name", "Default", "Local", "Homepage"]))


def render_local(scan: LocalScanResult) -> str:
    """Render the local scan, including candidates that failed to scan."""
    rows = []
    for local in scan.candidates:
        for identifier, current in local.versions.items():
            rows.append([local.binary_id, CURRENT_MARK if current else "", identifier])
    lines = format_table(rows, ["Candidate", "", "Version"]) if rows else [f"No candidates installed in {scan.root}"]
    for failure in scan.failures:
        lines.append(f"✗ {failure.binary_id}: {failure.error}")
    return "\n".join(lines)
