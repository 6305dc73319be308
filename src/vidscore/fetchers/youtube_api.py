"""YouTube Data API v3 fetcher for view, like and comment counts.

Queries ``videos.list`` with ``part=statistics,snippet`` and maps the
response to a VideoStatistics.

Requirements:
- YouTube Data API key (set via VIDSCORE_YOUTUBE_API_KEY env var or config)

Reference:
https://developers.google.com/youtube/v3/docs/videos/list
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, ClassVar

import httpx
from pydantic import ValidationError as PydanticValidationError

from vidscore.config import get_config
from vidscore.errors import FetchError
from vidscore.models import VideoStatistics

from .base import BaseFetcher

logger = logging.getLogger(__name__)


class YouTubeAPIFetcher(BaseFetcher):
    """Fetch statistics from the YouTube Data API v3.

    Args:
        api_key: API key (default: from config)
        client: httpx client to send requests with (default: one per call)
        timeout: Request timeout in seconds (default: from config)
    """

    name: ClassVar[str] = "youtube-api"

    API_URL = "https://www.googleapis.com/youtube/v3/videos"

    def __init__(
        self,
        api_key: str | None = None,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        config = get_config()
        self.api_key = api_key or config.api_keys.youtube_api_key
        self.timeout = timeout if timeout is not None else config.network.timeout_seconds
        self._client = client

    def is_available(self) -> bool:
        """Check if a YouTube API key is configured."""
        return bool(self.api_key)

    def fetch(self, video_id: str) -> VideoStatistics:
        """Query the API for one video.

        Args:
            video_id: 11-character YouTube video ID

        Returns:
            VideoStatistics with counters and publish date

        Raises:
            FetchError: If the key is missing, the request fails, the video
                does not exist or the response cannot be parsed
        """
        if not self.api_key:
            raise FetchError(
                "YouTube API key not configured. Set VIDSCORE_YOUTUBE_API_KEY "
                "or api_keys.youtube_api_key in ~/.vidscore/config.yaml"
            )

        params = {
            "part": "statistics,snippet",
            "id": video_id,
            "key": self.api_key,
        }

        try:
            if self._client is not None:
                response = self._client.get(self.API_URL, params=params, timeout=self.timeout)
            else:
                response = httpx.get(self.API_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.warning("YouTube API request for %s failed: %s", video_id, e)
            raise FetchError(f"Could not fetch video {video_id}: {e}") from e
        except ValueError as e:
            raise FetchError(f"Malformed response for video {video_id}: {e}") from e

        return self._parse_response(video_id, data)

    def _parse_response(self, video_id: str, data: Any) -> VideoStatistics:
        """Map a videos.list payload to VideoStatistics.

        Missing counters (hidden likes, disabled comments) count as 0.
        """
        if not isinstance(data, dict):
            raise FetchError(f"Malformed response for video {video_id}")

        items = data.get("items")
        if not items:
            raise FetchError(f"Video not found: {video_id}")

        item = items[0]
        statistics = item.get("statistics") or {}
        snippet = item.get("snippet") or {}

        published = snippet.get("publishedAt")
        if not published:
            raise FetchError(f"Malformed response for video {video_id}: missing publishedAt")

        try:
            return VideoStatistics(
                video_id=video_id,
                views=int(statistics.get("viewCount") or 0),
                likes=int(statistics.get("likeCount") or 0),
                comments=int(statistics.get("commentCount") or 0),
                publish_date=self._parse_date(published),
                title=snippet.get("title"),
                channel_title=snippet.get("channelTitle"),
            )
        except (TypeError, ValueError, PydanticValidationError) as e:
            raise FetchError(f"Malformed response for video {video_id}: {e}") from e

    @staticmethod
    def _parse_date(value: str) -> datetime:
        """Parse the RFC 3339 timestamps used by the API (``...Z`` suffix)."""
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
