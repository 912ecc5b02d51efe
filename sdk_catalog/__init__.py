"""
sdk-catalog - SDK candidate catalog with local installation state.

Core Modules:
- Parsing: candidate catalog blocks, generic and Java version listings
- Local state: candidate/version directory scan with "current" detection
- Reconciliation: remote versions flagged installed/current
- Clients: remote API access, local scanning, concurrent refresh
"""

__version__ = "1.0.0"

VERSION = __version__

# Parsing
from .text_fields import (
    UNKNOWN_VERSION,
    find_uri,
    find_last_parenthesized,
    find_last_parenthesized_text,
    split_pipe_row,
)
from .versioning import natural_compare, natural_key, natural_sort, compare_versions
from .models import (
    CandidateRecord,
    SimpleVersion,
    JavaVersion,
    VersionEntry,
    LocalVersionMap,
    LocalScanResult,
    ScanFailure,
    UnifiedCandidate,
)
from .catalog import CandidateCatalog, parse_catalog, parse_block
from .versions import parse_versions, parse_generic_versions, parse_java_versions

# Local state
from .local import (
    LocalClient,
    LocalScanError,
    CandidatesDirNotFoundError,
    scan,
    scan_local_installations,
    mark_current_by_duplicate,
)

# Reconciliation
from .reconcile import reconcile, reconcile_all, local_only_candidates

# Clients
from .config import Config, ConfigurationError, load_config
from .common import SdkCatalogError
from .remote import CatalogClient, HttpResponse, ServerError, TransportError, http_get
from .service import CatalogSnapshot, SdkCatalogService, fetch_catalog, fetch_versions, scan_local

# Logging configuration
from .logging_config import setup_logging, get_logger

__all__ = [
    "__version__",
    "VERSION",
    # Parsing
    "UNKNOWN_VERSION",
    "find_uri",
    "find_last_parenthesized",
    "find_last_parenthesized_text",
    "split_pipe_row",
    "natural_compare",
    "natural_key",
    "natural_sort",
    "compare_versions",
    "CandidateRecord",
    "SimpleVersion",
    "JavaVersion",
    "VersionEntry",
    "LocalVersionMap",
    "LocalScanResult",
    "ScanFailure",
    "UnifiedCandidate",
    "CandidateCatalog",
    "parse_catalog",
    "parse_block",
    "parse_versions",
    "parse_generic_versions",
    "parse_java_versions",
    # Local state
    "LocalClient",
    "LocalScanError",
    "CandidatesDirNotFoundError",
    "scan",
    "scan_local_installations",
    "mark_current_by_duplicate",
    # Reconciliation
    "reconcile",
    "reconcile_all",
    "local_only_candidates",
    # Clients
    "Config",
    "ConfigurationError",
    "load_config",
    "SdkCatalogError",
    "CatalogClient",
    "HttpResponse",
    "ServerError",
    "TransportError",
    "http_get",
    "CatalogSnapshot",
    "SdkCatalogService",
    "fetch_catalog",
    "fetch_versions",
    "scan_local",
    # Logging
    "setup_logging",
    "get_logger",
]
