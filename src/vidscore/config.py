"""Configuration management for vidscore.

Supports loading configuration from:
1. Environment variables (VIDSCORE_*)
2. Config file (~/.vidscore/config.yaml)
3. Default values

Example config file (~/.vidscore/config.yaml):
    api_keys:
      youtube_api_key: "YOUR_API_KEY"
    scoring:
      policy: feqt
      include_recency: true
    filters:
      min_like_ratio: 0.01
      min_comment_ratio: 0.001
      min_views: 500
    storage:
      history_path: "~/.vidscore/history.json"
      export_dir: "."
    network:
      timeout_seconds: 30
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# Config file search locations (in priority order)
CONFIG_LOCATIONS = [
    Path.home() / ".vidscore" / "config.yaml",
    Path.home() / ".config" / "vidscore" / "config.yaml",
    Path(".vidscore.yaml"),
]

DEFAULT_HISTORY_PATH = Path.home() / ".vidscore" / "history.json"


@dataclass
class APIKeysConfig:
    """API key configuration."""

    youtube_api_key: str | None = None


@dataclass
class ScoringSettings:
    """Which scoring policy to run and how."""

    policy: str = "feqt"
    include_recency: bool = True


@dataclass
class FilterConfig:
    """Thresholds used by the low-engagement and low-views filters."""

    min_like_ratio: float = 0.01
    min_comment_ratio: float = 0.001
    min_views: int = 500


@dataclass
class StorageConfig:
    """Where history and exports live on disk."""

    history_path: Path = DEFAULT_HISTORY_PATH
    export_dir: Path = Path(".")


@dataclass
class NetworkConfig:
    """HTTP client configuration."""

    timeout_seconds: float = 30.0


@dataclass
class VidscoreConfig:
    """Main configuration for vidscore."""

    api_keys: APIKeysConfig = field(default_factory=APIKeysConfig)
    scoring: ScoringSettings = field(default_factory=ScoringSettings)
    filters: FilterConfig = field(default_factory=FilterConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)


def _load_yaml_config() -> dict[str, Any]:
    """Load configuration from the first YAML file found."""
    for config_path in CONFIG_LOCATIONS:
        if config_path.exists():
            try:
                with open(config_path, encoding="utf-8") as f:
                    data = yaml.safe_load(f)
                    return data if isinstance(data, dict) else {}
            except (OSError, yaml.YAMLError):
                continue
    return {}


def _get_env(key: str, default: Any = None) -> Any:
    """Get environment variable with VIDSCORE_ prefix."""
    return os.environ.get(f"VIDSCORE_{key}", default)


def _parse_bool(value: str | None) -> bool | None:
    """Parse boolean from string."""
    if value is None:
        return None
    return value.lower() in ("true", "1", "yes", "on")


def load_config() -> VidscoreConfig:
    """Load configuration from file and environment variables.

    Priority (highest first):
    1. Environment variables (VIDSCORE_*)
    2. Config file (~/.vidscore/config.yaml)
    3. Default values
    """
    file_config = _load_yaml_config()

    # API Keys
    api_keys_config = file_config.get("api_keys") or {}
    api_keys = APIKeysConfig(
        youtube_api_key=_get_env("YOUTUBE_API_KEY") or api_keys_config.get("youtube_api_key"),
    )

    # Scoring
    scoring_config = file_config.get("scoring") or {}
    scoring = ScoringSettings(
        policy=_get_env("POLICY") or scoring_config.get("policy", "feqt"),
        include_recency=(
            _parse_bool(_get_env("INCLUDE_RECENCY"))
            if _get_env("INCLUDE_RECENCY")
            else scoring_config.get("include_recency", True)
        ),
    )

    # Filters
    filters_config = file_config.get("filters") or {}
    filters = FilterConfig(
        min_like_ratio=float(
            _get_env("MIN_LIKE_RATIO") or filters_config.get("min_like_ratio", 0.01)
        ),
        min_comment_ratio=float(
            _get_env("MIN_COMMENT_RATIO") or filters_config.get("min_comment_ratio", 0.001)
        ),
        min_views=int(_get_env("MIN_VIEWS") or filters_config.get("min_views", 500)),
    )

    # Storage
    storage_config = file_config.get("storage") or {}
    history_path = _get_env("HISTORY_PATH") or storage_config.get("history_path")
    export_dir = _get_env("EXPORT_DIR") or storage_config.get("export_dir")
    storage = StorageConfig(
        history_path=Path(history_path).expanduser() if history_path else DEFAULT_HISTORY_PATH,
        export_dir=Path(export_dir).expanduser() if export_dir else Path("."),
    )

    # Network
    network_config = file_config.get("network") or {}
    network = NetworkConfig(
        timeout_seconds=float(
            _get_env("TIMEOUT") or network_config.get("timeout_seconds", 30.0)
        ),
    )

    return VidscoreConfig(
        api_keys=api_keys,
        scoring=scoring,
        filters=filters,
        storage=storage,
        network=network,
    )


# Global config instance (lazy loaded)
_config: VidscoreConfig | None = None


def get_config() -> VidscoreConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
