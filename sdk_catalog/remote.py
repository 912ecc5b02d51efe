"""
Remote candidates API access.

Endpoints (relative to the configured base URL):
- /candidates/list                                       candidate catalog
- /candidates/{candidate}/{platform}/versions/list       version listing
"""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Callable

from .catalog import parse_catalog
from .common import SdkCatalogError
from .config import DEFAULT_TIMEOUT_SECONDS, Config
from .models import CandidateRecord, VersionEntry
from .versions import parse_versions

logger = logging.getLogger(__name__)

USER_AGENT = "sdk-catalog/1.0"


class TransportError(SdkCatalogError):
    """Raised when a request cannot be completed (DNS, connection, timeout)."""
    pass


class ServerError(SdkCatalogError):
    """Raised when the server answers with a non-success status."""

    def __init__(self, status: int, url: str = ""):
        self.status = status
        self.url = url
        super().__init__(f"Server error: {status}" + (f" ({url})" if url else ""))


@dataclass(frozen=True)
class HttpResponse:
    """Status code and decoded body of an HTTP response."""
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


Fetcher = Callable[[str, int], HttpResponse]


def http_get(url: str, timeout: int = DEFAULT_TIMEOUT_SECONDS) -> HttpResponse:
    """
    Perform a blocking HTTP GET request.

    Args:
        url: URL to fetch
        timeout: Timeout in seconds

    Returns:
        HttpResponse; HTTP error statuses are returned, not raised

    Raises:
        TransportError: If no response could be obtained
    """
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            charset = response.headers.get_content_charset() or "utf-8"
            return HttpResponse(response.status, response.read().decode(charset, "replace"))
    except urllib.error.HTTPError as e:
        try:
            body = e.read().decode("utf-8", "replace")
        except Exception:
            body = ""
        return HttpResponse(e.code, body)
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
        raise TransportError(f"Failed to fetch {url}: {e}") from e


class CatalogClient:
    """
    Candidates API facade.

    Args:
        config: Configuration supplying the base URL, platform and timeout
        fetch: Blocking GET primitive; defaults to http_get
    """

    def __init__(self, config: Config, fetch: Fetcher | None = None):
        self.config = config
        self._fetch = fetch or http_get

    def candidate_list_url(self) -> str:
        return f"{self.config.require_api_url()}/candidates/list"

    def versions_url(self, binary_id: str) -> str:
        candidate = urllib.parse.quote(binary_id, safe="")
        platform = urllib.parse.quote(self.config.require_platform(), safe="")
        return (
            f"{self.config.require_api_url()}/candidates/{candidate}/{platform}"
            "/versions/list?installed="
        )

    def _get_text(self, url: str) -> str:
        logger.debug(f"GET {url}")
        response = self._fetch(url, self.config.timeout_seconds)
        if not response.ok:
            logger.warning(f"GET {url} returned {response.status}")
            raise ServerError(response.status, url)
        return response.text

    def fetch_catalog_text(self) -> str:
        return self._get_text(self.candidate_list_url())

    def fetch_catalog(self) -> list[CandidateRecord]:
        """
        Fetch and parse the candidate catalog.

        Raises:
            ConfigurationError: If the base URL is not configured
            TransportError: On connection failure
            ServerError: On a non-success status
        """
        records = parse_catalog(self.fetch_catalog_text())
        logger.debug(f"Fetched {len(records)} candidates")
        return records

    def fetch_versions_text(self, binary_id: str) -> str:
        return self._get_text(self.versions_url(binary_id))

    def fetch_versions(self, binary_id: str) -> list[VersionEntry]:
        """
        Fetch and parse the version list of one candidate.

        Raises:
            ConfigurationError: If the base URL or platform is not configured
            TransportError: On connection failure
            ServerError: On a non-success status
            SdkCatalogError: If binary_id is empty
        """
        if not binary_id:
            raise SdkCatalogError("Candidate binary id must not be empty")
        versions = parse_versions(self.fetch_versions_text(binary_id))
        logger.debug(f"Fetched {len(versions)} versions of {binary_id}")
        return versions
