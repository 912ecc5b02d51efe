"""
Reconciliation of remote catalog data with the local installation scan.

The reconciler is pure: it never mutates the records it is given and never
touches the network or the filesystem.
"""

from __future__ import annotations

import dataclasses
from typing import Iterable, Sequence

from .models import (
    CandidateRecord,
    LocalScanResult,
    LocalVersionMap,
    UnifiedCandidate,
    VersionEntry,
)


def flag_version(entry: VersionEntry, local_map: LocalVersionMap | None) -> VersionEntry:
    """
    Return a copy of *entry* flagged from the local map.

    Found entries are installed and current as recorded; everything else
    keeps installed=False, current=False.
    """
    if local_map is None or entry.key not in local_map.versions:
        return dataclasses.replace(entry, installed=False, current=False)
    return dataclasses.replace(entry, installed=True, current=local_map.versions[entry.key])


def reconcile(
    remote: CandidateRecord,
    remote_versions: Sequence[VersionEntry] = (),
    local_map: LocalVersionMap | None = None,
) -> UnifiedCandidate:
    """
    Merge one remote candidate with its local scan result.

    Args:
        remote: Catalog record
        remote_versions: Parsed versions, already in display order
        local_map: Local versions of the same candidate, or None if not installed

    Returns:
        UnifiedCandidate with versions in the order given
    """
    versions = tuple(flag_version(entry, local_map) for entry in remote_versions)
    if local_map is None:
        return UnifiedCandidate(candidate=remote, versions=versions)
    return UnifiedCandidate(
        candidate=remote,
        versions=versions,
        local_versions=tuple(local_map.installed_versions),
        local_current=local_map.current_version,
    )


def reconcile_all(
    candidates: Iterable[CandidateRecord],
    local_scan: LocalScanResult | None,
) -> list[UnifiedCandidate]:
    """
    Merge the whole catalog with the local scan, without version lists.

    Args:
        candidates: Catalog records in listing order
        local_scan: Local scan, or None when it was unavailable

    Returns:
        One UnifiedCandidate per record, in the same order
    """
    result = []
    for record in candidates:
        local_map = local_scan.get(record.binary_id) if local_scan and record.binary_id else None
        result.append(reconcile(record, (), local_map))
    return result


def local_only_candidates(
    candidates: Iterable[CandidateRecord],
    local_scan: LocalScanResult,
) -> list[LocalVersionMap]:
    """Locally installed candidates that the remote catalog does not list."""
    known = {record.binary_id for record in candidates}
    return [local for local in local_scan.candidates if local.binary_id not in known]
