"""
Orchestration of the remote fetch, the local scan and reconciliation.

``refresh`` runs the catalog fetch and the local scan as two independent
tasks and joins both before reconciling. ``select`` fetches one candidate's
version list on demand; each selection replaces the previous one.
"""

from __future__ import annotations

import datetime
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from .catalog import CandidateCatalog
from .common import SdkCatalogError, vlog
from .config import Config, load_config
from .local import LocalClient
from .models import CandidateRecord, LocalScanResult, LocalVersionMap, UnifiedCandidate, VersionEntry
from .reconcile import local_only_candidates, reconcile, reconcile_all
from .remote import CatalogClient, Fetcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    """
    One refresh cycle's view of the catalog.

    Attributes:
        candidates: Catalog merged with local state, without version lists
        local: Local scan result, or None if the scan failed
        local_error: Why the local scan failed, if it did
        fetched_at: UTC timestamp of the refresh
    """
    candidates: tuple[UnifiedCandidate, ...]
    local: LocalScanResult | None = None
    local_error: str | None = None
    fetched_at: str = ""

    def get(self, binary_id: str) -> UnifiedCandidate | None:
        for candidate in self.candidates:
            if candidate.binary_id == binary_id:
                return candidate
        return None

    @property
    def local_only(self) -> list[LocalVersionMap]:
        if self.local is None:
            return []
        return local_only_candidates((c.candidate for c in self.candidates), self.local)

    def to_dict(self) -> dict:
        return {
            "fetched_at": self.fetched_at,
            "candidates": [c.to_dict() for c in self.candidates],
            "local": self.local.to_dict() if self.local else None,
            "local_error": self.local_error,
        }


def _utc_now() -> str:
    return (
        datetime.datetime.now(datetime.timezone.utc)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z")
    )


class SdkCatalogService:
    """
    Facade used by presentation code.

    Args:
        config: Configuration (defaults to load_config())
        fetch: Optional HTTP primitive, mainly for tests
        verbose: Enable verbose progress logging
    """

    def __init__(self, config: Config | None = None, fetch: Fetcher | None = None, verbose: bool = False):
        self.config = config if config is not None else load_config(verbose=verbose)
        self.remote = CatalogClient(self.config, fetch)
        self.local = LocalClient(self.config)
        self.verbose = verbose
        self.snapshot: CatalogSnapshot | None = None
        self.selected: UnifiedCandidate | None = None

    def fetch_catalog(self) -> list[CandidateRecord]:
        return self.remote.fetch_catalog()

    def fetch_versions(self, binary_id: str) -> list[VersionEntry]:
        return self.remote.fetch_versions(binary_id)

    def scan_local(self) -> LocalScanResult:
        return self.local.scan_local()

    def refresh(self) -> CatalogSnapshot:
        """
        Fetch the catalog and scan local installations concurrently.

        A failing local scan degrades to a snapshot without local state; a
        failing catalog fetch is raised.

        Raises:
            SdkCatalogError: If the catalog cannot be fetched
        """
        vlog("Refreshing catalog and local installations...", self.verbose)
        with ThreadPoolExecutor(max_workers=2) as executor:
            remote_future = executor.submit(self.remote.fetch_catalog)
            local_future = executor.submit(self.local.scan_local)

            local: LocalScanResult | None = None
            local_error: str | None = None
            try:
                local = local_future.result()
            except SdkCatalogError as e:
                local_error = str(e)
                logger.warning(f"Local scan unavailable: {e}")

            records = remote_future.result()

        if local is not None and local.partial:
            logger.warning(f"Local scan incomplete: {len(local.failures)} candidate(s) unreadable")

        snapshot = CatalogSnapshot(
            candidates=tuple(reconcile_all(CandidateCatalog(records), local)),
            local=local,
            local_error=local_error,
            fetched_at=_utc_now(),
        )
        vlog(f"Refreshed {len(snapshot.candidates)} candidates", self.verbose)
        self.snapshot = snapshot
        self.selected = None
        return snapshot

    def select(self, binary_id: str) -> UnifiedCandidate:
        """
        Fetch one candidate's versions and merge them with local state.

        Refreshes first when no snapshot exists yet. The result replaces any
        previous selection.

        Raises:
            KeyError: If the candidate is not in the catalog
            SdkCatalogError: If the version list cannot be fetched
        """
        snapshot = self.snapshot or self.refresh()
        current = snapshot.get(binary_id) if binary_id else None
        if current is None:
            raise KeyError(f"Unknown candidate: {binary_id}")

        versions = self.remote.fetch_versions(binary_id)
        local_map = snapshot.local.get(binary_id) if snapshot.local else None
        self.selected = reconcile(current.candidate, versions, local_map)
        return self.selected


def fetch_catalog(config: Config | None = None) -> list[CandidateRecord]:
    """Fetch the candidate catalog using the default configuration."""
    return CatalogClient(config or load_config()).fetch_catalog()


def fetch_versions(binary_id: str, config: Config | None = None) -> list[VersionEntry]:
    """Fetch one candidate's versions using the default configuration."""
    return CatalogClient(config or load_config()).fetch_versions(binary_id)


def scan_local(config: Config | None = None) -> LocalScanResult:
    """Scan local installations using the default configuration."""
    return LocalClient(config or load_config()).scan_local()
