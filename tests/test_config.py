"""Tests for configuration loading."""

from pathlib import Path

from vidscore import config as config_module
from vidscore.config import get_config, load_config, reset_config


def test_defaults(tmp_path):
    config = load_config()
    assert config.api_keys.youtube_api_key is None
    assert config.scoring.policy == "feqt"
    assert config.scoring.include_recency is True
    assert config.filters.min_like_ratio == 0.01
    assert config.filters.min_comment_ratio == 0.001
    assert config.filters.min_views == 500
    assert config.storage.history_path == tmp_path / "history.json"
    assert config.network.timeout_seconds == 30.0


def test_yaml_file(tmp_path, monkeypatch):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "api_keys:\n"
        "  youtube_api_key: file-key\n"
        "scoring:\n"
        "  policy: bayesian\n"
        "  include_recency: false\n"
        "filters:\n"
        "  min_views: 1000\n"
        "storage:\n"
        "  export_dir: exports\n"
    )
    monkeypatch.setattr(config_module, "CONFIG_LOCATIONS", [tmp_path / "missing.yaml", config_file])

    config = load_config()
    assert config.api_keys.youtube_api_key == "file-key"
    assert config.scoring.policy == "bayesian"
    assert config.scoring.include_recency is False
    assert config.filters.min_views == 1000
    assert config.filters.min_like_ratio == 0.01
    assert config.storage.export_dir == Path("exports")


def test_env_overrides_file(tmp_path, monkeypatch):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("scoring:\n  policy: bayesian\n")
    monkeypatch.setattr(config_module, "CONFIG_LOCATIONS", [config_file])
    monkeypatch.setenv("VIDSCORE_POLICY", "feqt_v1")
    monkeypatch.setenv("VIDSCORE_INCLUDE_RECENCY", "no")
    monkeypatch.setenv("VIDSCORE_MIN_LIKE_RATIO", "0.05")

    config = load_config()
    assert config.scoring.policy == "feqt_v1"
    assert config.scoring.include_recency is False
    assert config.filters.min_like_ratio == 0.05


def test_invalid_yaml_is_skipped(tmp_path, monkeypatch):
    broken = tmp_path / "broken.yaml"
    broken.write_text("scoring: [unclosed\n")
    monkeypatch.setattr(config_module, "CONFIG_LOCATIONS", [broken])
    assert load_config().scoring.policy == "feqt"


def test_get_config_is_cached(monkeypatch):
    first = get_config()
    monkeypatch.setenv("VIDSCORE_POLICY", "bayesian")
    assert get_config() is first

    reset_config()
    assert get_config().scoring.policy == "bayesian"
