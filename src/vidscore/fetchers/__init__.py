"""Statistics fetchers for vidscore."""

from vidscore.fetchers.base import BaseFetcher
from vidscore.fetchers.youtube_api import YouTubeAPIFetcher

# All fetcher classes
_FETCHERS: list[type[BaseFetcher]] = [
    YouTubeAPIFetcher,
]


def get_default_fetcher() -> BaseFetcher:
    """Get the fetcher used for URL adds, configured from the global config."""
    return YouTubeAPIFetcher()


def get_fetcher_status() -> dict[str, bool]:
    """Get availability status of all fetchers.

    Returns:
        Dict mapping fetcher names to availability status.
    """
    status = {}
    for fetcher_cls in _FETCHERS:
        status[fetcher_cls.name] = fetcher_cls().is_available()
    return status


__all__ = [
    # Base class
    "BaseFetcher",
    # Fetchers
    "YouTubeAPIFetcher",
    # Functions
    "get_default_fetcher",
    "get_fetcher_status",
]
