"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from vidscore import config as config_module
from vidscore.errors import FetchError
from vidscore.fetchers.base import BaseFetcher
from vidscore.models import VideoRecord, VideoStatistics

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class StaticFetcher(BaseFetcher):
    """Fetcher that serves canned statistics and records every call."""

    name = "static"

    def __init__(self, stats: dict[str, VideoStatistics] | None = None, error: Exception | None = None):
        self.stats = stats or {}
        self.error = error
        self.calls: list[str] = []

    def is_available(self) -> bool:
        return True

    def fetch(self, video_id: str) -> VideoStatistics:
        self.calls.append(video_id)
        if self.error is not None:
            raise self.error
        if video_id not in self.stats:
            raise FetchError(f"Video not found: {video_id}")
        return self.stats[video_id]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep tests away from the user's config file, env and history."""
    monkeypatch.setattr(config_module, "CONFIG_LOCATIONS", [])
    for key in (
        "YOUTUBE_API_KEY",
        "POLICY",
        "INCLUDE_RECENCY",
        "MIN_LIKE_RATIO",
        "MIN_COMMENT_RATIO",
        "MIN_VIEWS",
        "EXPORT_DIR",
        "TIMEOUT",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(f"VIDSCORE_{key}", raising=False)
    monkeypatch.setenv("VIDSCORE_HISTORY_PATH", str(tmp_path / "history.json"))
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for scoring."""
    return NOW


@pytest.fixture
def make_record():
    """Factory for URL-style records published ``days`` before NOW."""

    def _make(views=10_000, likes=100, comments=10, days=30, **kwargs) -> VideoRecord:
        kwargs.setdefault("publish_date", NOW - timedelta(days=days))
        return VideoRecord(views=views, likes=likes, comments=comments, **kwargs)

    return _make


@pytest.fixture
def failing_fetcher() -> StaticFetcher:
    """Fetcher whose every request fails."""
    return StaticFetcher(error=FetchError("Could not fetch video: connection refused"))


@pytest.fixture
def fetcher() -> StaticFetcher:
    """Fetcher knowing two videos."""
    return StaticFetcher(
        stats={
            "dQw4w9WgXcQ": VideoStatistics(
                video_id="dQw4w9WgXcQ",
                views=1_500_000,
                likes=45_000,
                comments=3_200,
                publish_date=NOW - timedelta(days=400),
                title="Never Gonna Give You Up",
            ),
            "aqz-KE-bpKQ": VideoStatistics(
                video_id="aqz-KE-bpKQ",
                views=20_000,
                likes=150,
                comments=4,
                publish_date=NOW - timedelta(days=10),
                title="Big Buck Bunny",
            ),
        }
    )
