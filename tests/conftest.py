"""
Shared fixtures.
"""

import logging
import os
from pathlib import Path

import pytest

from sdk_catalog import logging_config

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so caplog sees records in every test."""
    yield
    logger = logging.getLogger(logging_config.LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    logging_config._logger = None


@pytest.fixture
def sdkman_env(monkeypatch, tmp_path):
    """SDKMAN environment pointing at an empty candidates directory under tmp_path."""
    candidates = tmp_path / "candidates"
    candidates.mkdir()
    monkeypatch.setenv("SDKMAN_CANDIDATES_API", "https://api.example.test/2")
    monkeypatch.setenv("SDKMAN_PLATFORM", "linuxx64")
    monkeypatch.setenv("SDKMAN_CANDIDATES_DIR", str(candidates))
    monkeypatch.delenv("SDK_CATALOG_TIMEOUT_SECONDS", raising=False)
    # Keep user/project config files out of the way
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sdk_catalog.config.CONFIG_LOCATIONS", [".sdk-catalog.yml"])
    return candidates


def make_version_tree(root: Path, candidate: str, versions, current=None) -> Path:
    """Create candidate/version directories and an optional current symlink."""
    candidate_dir = root / candidate
    candidate_dir.mkdir(parents=True, exist_ok=True)
    for version in versions:
        (candidate_dir / version).mkdir()
    if current is not None:
        os.symlink(current, candidate_dir / "current")
    return candidate_dir
