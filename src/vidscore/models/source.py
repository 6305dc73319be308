"""Raw statistics as returned by a platform API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class VideoStatistics(BaseModel):
    """Counters and publication info fetched for a single video.

    This is what a fetcher hands back; the catalog turns it into a
    VideoRecord once the add has been validated.
    """

    video_id: str
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
    publish_date: datetime
    title: str | None = None
    channel_title: str | None = None

    @property
    def platform_url(self) -> str:
        """Canonical watch URL for this video."""
        return f"https://www.youtube.com/watch?v={self.video_id}"
