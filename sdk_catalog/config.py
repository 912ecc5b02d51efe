"""
Configuration loading and validation.

Values come from YAML configuration files and the SDKMAN environment
variables. Merged precedence (highest to lowest): explicit file → project
file → user file → environment → defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .common import SdkCatalogError, env_value, vlog


# Configuration file locations (in priority order)
CONFIG_LOCATIONS = [
    ".sdk-catalog.yml",
    ".sdk-catalog.yaml",
    os.path.expanduser("~/.config/sdk-catalog/config.yml"),
    os.path.expanduser("~/.config/sdk-catalog/config.yaml"),
]

# Environment variables exported by the SDKMAN init script
ENV_API_URL = "SDKMAN_CANDIDATES_API"
ENV_PLATFORM = "SDKMAN_PLATFORM"
ENV_CANDIDATES_DIR = "SDKMAN_CANDIDATES_DIR"
ENV_TIMEOUT = "SDK_CATALOG_TIMEOUT_SECONDS"

DEFAULT_TIMEOUT_SECONDS = 5
DEFAULT_MAX_VERSION_DIRS = 256


class ConfigurationError(SdkCatalogError):
    """Raised when a required configuration value is missing or invalid."""
    pass


@dataclass(frozen=True)
class Config:
    """
    Runtime configuration.

    Attributes:
        api_url: Base URL of the candidates API (e.g. "https://api.sdkman.io/2")
        platform: Platform identifier used in version-list requests (e.g. "linuxx64")
        candidates_dir: Local candidates installation root
        timeout_seconds: Timeout for network operations
        max_version_dirs: Maximum version directories examined per candidate
        source: Path to the configuration file that was loaded
    """
    api_url: str | None = None
    platform: str | None = None
    candidates_dir: str | None = None
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    max_version_dirs: int = DEFAULT_MAX_VERSION_DIRS
    source: str = ""

    def __post_init__(self):
        """Validate config after initialization."""
        if self.timeout_seconds < 1 or self.timeout_seconds > 60:
            raise ValueError(
                f"Invalid timeout_seconds: {self.timeout_seconds}. "
                "Must be between 1 and 60"
            )

        if self.max_version_dirs < 1 or self.max_version_dirs > 10000:
            raise ValueError(
                f"Invalid max_version_dirs: {self.max_version_dirs}. "
                "Must be between 1 and 10000"
            )

    @staticmethod
    def from_dict(data: dict[str, Any], source: str = "") -> Config:
        """Create Config from dictionary."""
        return Config(
            api_url=data.get("api_url"),
            platform=data.get("platform"),
            candidates_dir=data.get("candidates_dir"),
            timeout_seconds=int(data.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
            max_version_dirs=int(data.get("max_version_dirs", DEFAULT_MAX_VERSION_DIRS)),
            source=source,
        )

    @staticmethod
    def from_env() -> Config:
        """Create Config from the SDKMAN environment variables."""
        timeout = env_value(ENV_TIMEOUT)
        try:
            timeout_seconds = int(timeout) if timeout else DEFAULT_TIMEOUT_SECONDS
        except ValueError as e:
            raise ConfigurationError(f"{ENV_TIMEOUT} must be an integer, got {timeout!r}") from e

        return Config(
            api_url=env_value(ENV_API_URL),
            platform=env_value(ENV_PLATFORM),
            candidates_dir=env_value(ENV_CANDIDATES_DIR),
            timeout_seconds=timeout_seconds,
            source="environment",
        )

    def merge_with(self, other: Config) -> Config:
        """
        Merge this config with another, preferring values from this config.

        Args:
            other: Other config to merge (lower priority)

        Returns:
            New merged Config object
        """
        return Config(
            api_url=self.api_url or other.api_url,
            platform=self.platform or other.platform,
            candidates_dir=self.candidates_dir or other.candidates_dir,
            timeout_seconds=(
                self.timeout_seconds
                if self.timeout_seconds != DEFAULT_TIMEOUT_SECONDS
                else other.timeout_seconds
            ),
            max_version_dirs=(
                self.max_version_dirs
                if self.max_version_dirs != DEFAULT_MAX_VERSION_DIRS
                else other.max_version_dirs
            ),
            source=self.source or other.source,
        )

    def require(self, name: str) -> str:
        """
        Return a required string setting.

        Args:
            name: Attribute name (api_url, platform, candidates_dir)

        Returns:
            The configured value

        Raises:
            ConfigurationError: If the value is not configured
        """
        if name not in {f.name for f in fields(self)}:
            raise ConfigurationError(f"Unknown configuration value: {name}")
        value = getattr(self, name)
        if not value:
            env_names = {
                "api_url": ENV_API_URL,
                "platform": ENV_PLATFORM,
                "candidates_dir": ENV_CANDIDATES_DIR,
            }
            hint = f" (set {env_names[name]} or '{name}' in a config file)" if name in env_names else ""
            raise ConfigurationError(f"Missing required configuration value: {name}{hint}")
        return str(value)

    def require_api_url(self) -> str:
        return self.require("api_url").rstrip("/")

    def require_platform(self) -> str:
        return self.require("platform")

    def require_candidates_dir(self) -> Path:
        return Path(self.require("candidates_dir")).expanduser()


def _load_yaml(file_path: str) -> dict[str, Any] | None:
    """
    Load YAML configuration file.

    Args:
        file_path: Path to YAML file

    Returns:
        Parsed configuration dictionary, or None if the file is unreadable or invalid
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return None


def load_config_file(file_path: str, verbose: bool = False) -> Config | None:
    """
    Load configuration from a single file.

    Args:
        file_path: Path to configuration file
        verbose: Enable verbose logging

    Returns:
        Config object, or None if file cannot be loaded
    """
    if not os.path.exists(file_path):
        return None

    vlog(f"Loading config from: {file_path}", verbose)

    data = _load_yaml(file_path)
    if data is None:
        vlog(f"Invalid config file: {file_path}", verbose)
        return None

    try:
        config = Config.from_dict(data, source=file_path)
        vlog(f"Loaded config successfully: {file_path}", verbose)
        return config
    except (ValueError, TypeError) as e:
        vlog(f"Config validation failed for {file_path}: {e}", verbose)
        return None


def load_config(
    custom_path: str | None = None,
    verbose: bool = False,
) -> Config:
    """
    Load and merge configuration from all sources.

    Configuration precedence (highest to lowest):
    1. Custom path (if provided)
    2. Project .sdk-catalog.yml
    3. User ~/.config/sdk-catalog/config.yml
    4. SDKMAN_* environment variables
    5. Default configuration

    Args:
        custom_path: Optional path to custom configuration file
        verbose: Enable verbose logging

    Returns:
        Merged Config object (never None)

    Raises:
        ConfigurationError: If custom_path is provided but cannot be loaded,
            or an environment value is malformed
    """
    configs: list[Config] = []

    if custom_path:
        config = load_config_file(custom_path, verbose)
        if config is None:
            raise ConfigurationError(f"Could not load config from specified path: {custom_path}")
        configs.append(config)
        vlog(f"Using custom config: {custom_path}", verbose)

    for location in CONFIG_LOCATIONS:
        config = load_config_file(location, verbose)
        if config is not None:
            configs.append(config)
            vlog(f"Found config at: {location}", verbose)

    try:
        configs.append(Config.from_env())
    except ValueError as e:
        raise ConfigurationError(f"Invalid environment configuration: {e}") from e

    merged = configs[0]
    for config in configs[1:]:
        merged = merged.merge_with(config)

    vlog(f"Merged {len(configs)} configuration sources", verbose)
    return merged
