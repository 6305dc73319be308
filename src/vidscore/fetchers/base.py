"""Base fetcher class."""

from abc import ABC, abstractmethod
from typing import ClassVar

from vidscore.models import VideoStatistics


class BaseFetcher(ABC):
    """Abstract base class for statistics fetchers.

    A fetcher is a plain request/response client: one call, one video,
    and either a VideoStatistics result or a FetchError. There is no
    retry and no background work.

    Attributes:
        name: Human-readable name of the fetcher
    """

    name: ClassVar[str] = "base"

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this fetcher is usable (credentials configured).

        Returns:
            True if fetch() can be attempted
        """
        pass

    @abstractmethod
    def fetch(self, video_id: str) -> VideoStatistics:
        """Fetch the raw statistics of one video.

        Args:
            video_id: Platform video ID

        Returns:
            VideoStatistics for the video

        Raises:
            FetchError: On network errors, unknown videos or malformed responses
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
