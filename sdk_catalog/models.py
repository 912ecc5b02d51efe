"""
Record types shared by the parsers, the local scanner and the reconciler.

All records are frozen; reconciliation produces new instances rather than
mutating parsed ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .text_fields import UNKNOWN_VERSION
from .versioning import compare_versions


@dataclass(frozen=True)
class CandidateRecord:
    """
    Identity and metadata for one installable candidate.

    Attributes:
        display_name: Human readable name (e.g. "Java")
        binary_id: Identifier used by "sdk install" and as the local directory name
        description: Free text, each source line followed by one space
        homepage: Homepage URI
        default_version: Default version token including parentheses (e.g. "(17.0.2)")
    """
    display_name: str = ""
    binary_id: str = ""
    description: str = ""
    homepage: str = ""
    default_version: str = ""

    @property
    def install_command(self) -> str:
        return f"$ sdk install {self.binary_id}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "display_name": self.display_name,
            "binary_id": self.binary_id,
            "description": self.description,
            "homepage": self.homepage,
            "default_version": self.default_version,
        }


@dataclass(frozen=True)
class SimpleVersion:
    """A version from a generic listing: one whitespace-delimited token."""
    value: str
    installed: bool = False
    current: bool = False

    @property
    def key(self) -> str:
        return self.value

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "simple",
            "value": self.value,
            "installed": self.installed,
            "current": self.current,
        }


@dataclass(frozen=True)
class JavaVersion:
    """
    A row of the Java distribution table.

    ``identifier`` is the lookup and install key (e.g. "17.0.2-tem").
    ``usage`` and ``status`` keep the informational source columns.
    """
    vendor: str
    version: str
    distribution: str
    identifier: str
    usage: str = ""
    status: str = ""
    installed: bool = False
    current: bool = False

    @property
    def key(self) -> str:
        return self.identifier

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "java",
            "vendor": self.vendor,
            "version": self.version,
            "distribution": self.distribution,
            "identifier": self.identifier,
            "installed": self.installed,
            "current": self.current,
        }


VersionEntry = Union[SimpleVersion, JavaVersion]


@dataclass(frozen=True)
class LocalVersionMap:
    """
    Versions of one candidate found under the local candidates directory.

    Attributes:
        binary_id: Candidate directory name
        versions: Version identifier -> True if it is the current version
    """
    binary_id: str
    versions: dict[str, bool] = field(default_factory=dict)

    @property
    def current_version(self) -> str | None:
        for identifier, current in self.versions.items():
            if current:
                return identifier
        return None

    @property
    def installed_versions(self) -> list[str]:
        return list(self.versions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "binary_id": self.binary_id,
            "versions": dict(self.versions),
            "current": self.current_version,
        }


@dataclass(frozen=True)
class ScanFailure:
    """A candidate subtree that could not be read during a local scan."""
    binary_id: str
    path: str
    error: str

    def to_dict(self) -> dict[str, str]:
        return {"binary_id": self.binary_id, "path": self.path, "error": self.error}


@dataclass(frozen=True)
class LocalScanResult:
    """
    Result of scanning the local candidates directory.

    Attributes:
        root: Scanned directory
        candidates: One map per readable candidate directory
        failures: Candidate subtrees that failed to scan
    """
    root: str
    candidates: tuple[LocalVersionMap, ...] = ()
    failures: tuple[ScanFailure, ...] = ()

    @property
    def partial(self) -> bool:
        return bool(self.failures)

    def get(self, binary_id: str) -> LocalVersionMap | None:
        for candidate in self.candidates:
            if candidate.binary_id == binary_id:
                return candidate
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "candidates": [c.to_dict() for c in self.candidates],
            "failures": [f.to_dict() for f in self.failures],
        }


@dataclass(frozen=True)
class UnifiedCandidate:
    """
    A remote candidate merged with its local installation state.

    Attributes:
        candidate: Remote catalog record
        versions: Versions in listing order, flagged installed/current
        local_versions: Local identifiers (including ones the remote listing lacks)
        local_current: Local current identifier, if any
    """
    candidate: CandidateRecord
    versions: tuple[VersionEntry, ...] = ()
    local_versions: tuple[str, ...] = ()
    local_current: str | None = None

    @property
    def binary_id(self) -> str:
        return self.candidate.binary_id

    @property
    def installed(self) -> bool:
        return bool(self.local_versions)

    @property
    def current_version(self) -> str | None:
        return self.local_current

    @property
    def installed_versions(self) -> list[str]:
        return list(self.local_versions)

    @property
    def upgrade_available(self) -> bool:
        """True when the current version is older than the catalog default."""
        default = self.candidate.default_version
        if not self.local_current or not default or default == UNKNOWN_VERSION:
            return False
        return compare_versions(self.local_current, default) < 0

    def to_dict(self) -> dict[str, Any]:
        data = self.candidate.to_dict()
        data.update({
            "installed": self.installed,
            "current_version": self.local_current,
            "installed_versions": list(self.local_versions),
            "upgrade_available": self.upgrade_available,
            "versions": [v.to_dict() for v in self.versions],
        })
        return data
