"""
Local installation scanning.

Layout of the candidates directory (SDKMAN_CANDIDATES_DIR)::

    candidates/
      java/
        17.0.2-tem/
        21.0.1-tem/
        current -> 17.0.2-tem
      gradle/
        8.5/

Every directory below the root is a candidate; every directory below a
candidate is an installed version. The active version is not recorded in any
marker file: it is the version whose canonical path is reached twice, once
through its own directory and once through the "current" alias.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .common import SdkCatalogError
from .config import Config
from .models import LocalScanResult, LocalVersionMap, ScanFailure

logger = logging.getLogger(__name__)

CURRENT_ALIAS = "current"


class LocalScanError(SdkCatalogError):
    """Raised when the local candidates directory cannot be scanned."""
    pass


class CandidatesDirNotFoundError(LocalScanError):
    """Raised when the candidates root directory is missing or unreadable."""
    pass


def _sorted_entries(path: Path) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda entry: entry.name)


def mark_current_by_duplicate(versions: dict[str, bool], identifier: str) -> None:
    """
    Record one sighting of a canonical version identifier.

    The first sighting stores False; a second sighting of the same identifier
    stores True. Both the real version directory and the "current" alias
    resolve to the same canonical path, so only the active version is ever
    seen twice. This relies entirely on the alias convention: a layout that
    marks the active version some other way needs a different rule here.

    Args:
        versions: Per-candidate map being built (mutated in place)
        identifier: Final component of the canonical version path
    """
    versions[identifier] = identifier in versions


def scan_candidate_dir(path: Path, max_version_dirs: int | None = None) -> dict[str, bool]:
    """
    Scan one candidate directory.

    Entries that are not directories (after following symlinks) are ignored,
    as are dangling or looping symlinks.

    Args:
        path: Candidate directory
        max_version_dirs: Maximum number of entries to examine

    Returns:
        Version identifier -> is current

    Raises:
        OSError: If the directory cannot be listed
    """
    versions: dict[str, bool] = {}
    entries = _sorted_entries(path)
    if max_version_dirs is not None and len(entries) > max_version_dirs:
        logger.warning(
            f"{path.name}: {len(entries)} entries, only the first {max_version_dirs} are scanned"
        )
        entries = entries[:max_version_dirs]

    for entry in entries:
        if not entry.is_dir():
            if entry.is_symlink():
                logger.warning(f"{path.name}: dangling symlink {entry.name} ignored")
            continue
        try:
            canonical = Path(entry.path).resolve(strict=True)
        except (OSError, RuntimeError) as e:
            logger.warning(f"{path.name}: cannot resolve {entry.name}: {e}")
            continue
        mark_current_by_duplicate(versions, canonical.name)

    return versions


def scan_local_installations(
    root: str | os.PathLike,
    max_version_dirs: int | None = None,
) -> LocalScanResult:
    """
    Scan the candidates directory two levels deep.

    A candidate whose directory cannot be listed is recorded as a failure
    and the scan continues with its siblings.

    Args:
        root: Candidates root directory
        max_version_dirs: Per-candidate cap on examined entries

    Returns:
        LocalScanResult with per-candidate maps and failures

    Raises:
        CandidatesDirNotFoundError: If root cannot be listed
    """
    root_path = Path(root)
    try:
        entries = _sorted_entries(root_path)
    except OSError as e:
        raise CandidatesDirNotFoundError(f"Cannot read candidates directory {root_path}: {e}") from e

    candidates = []
    failures = []
    for entry in entries:
        try:
            if not entry.is_dir():
                continue
            versions = scan_candidate_dir(Path(entry.path), max_version_dirs)
        except OSError as e:
            logger.warning(f"Failed to scan candidate {entry.name}: {e}")
            failures.append(ScanFailure(binary_id=entry.name, path=entry.path, error=str(e)))
            continue
        candidates.append(LocalVersionMap(binary_id=entry.name, versions=versions))

    logger.debug(
        f"Scanned {root_path}: {len(candidates)} candidates, {len(failures)} failures"
    )
    return LocalScanResult(
        root=str(root_path),
        candidates=tuple(candidates),
        failures=tuple(failures),
    )


def scan(root: str | os.PathLike, max_version_dirs: int | None = None) -> list[LocalVersionMap]:
    """Scan *root* and return only the per-candidate maps."""
    return list(scan_local_installations(root, max_version_dirs).candidates)


class LocalClient:
    """Local filesystem facade configured from Config."""

    def __init__(self, config: Config):
        self.config = config

    def scan_local(self) -> LocalScanResult:
        """
        Scan the configured candidates directory.

        Raises:
            ConfigurationError: If no candidates directory is configured
            CandidatesDirNotFoundError: If it cannot be read
        """
        root = self.config.require_candidates_dir()
        return scan_local_installations(root, self.config.max_version_dirs)
