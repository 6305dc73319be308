"""URL parsing utilities for YouTube videos.

Supports:
- Standard watch URLs: youtube.com/watch?v=ID
- Shorts: youtube.com/shorts/ID
- Short links: youtu.be/ID

An optional start-time suffix (``&t=42s`` or ``?t=42s``) is tolerated and
stripped before deduplication.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

VIDEO_ID_LENGTH = 11


class UrlKind(str, Enum):
    """Shape of a YouTube video URL."""

    WATCH = "watch"
    SHORTS = "shorts"
    SHORT_LINK = "short_link"
    UNKNOWN = "unknown"


@dataclass
class ParsedURL:
    """Result of URL parsing."""

    kind: UrlKind
    video_id: str | None
    original_url: str
    start_seconds: int | None = None
    is_valid: bool = True

    @property
    def canonical_url(self) -> str | None:
        """Canonical watch URL, used as the dedup key."""
        if not self.video_id:
            return None
        return f"https://www.youtube.com/watch?v={self.video_id}"


_ID = r"(?P<id>[a-zA-Z0-9_-]{11})"

# Full-match patterns, one per URL kind
YOUTUBE_PATTERNS = [
    (
        UrlKind.WATCH,
        re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/watch\?v=" + _ID + r"(?:&t=(?P<t>\d+)s?)?"),
    ),
    (
        UrlKind.SHORTS,
        re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/shorts/" + _ID + r"(?:\?t=(?P<t>\d+)s?)?"),
    ),
    (
        UrlKind.SHORT_LINK,
        re.compile(r"(?:https?://)?youtu\.be/" + _ID + r"(?:\?t=(?P<t>\d+)s?)?"),
    ),
]

_START_TIME_SUFFIX = re.compile(r"[?&]t=\d+s?$")


def parse_url(url: str) -> ParsedURL:
    """Parse a YouTube URL and extract its kind and video ID.

    Args:
        url: Video URL as typed by the user

    Returns:
        ParsedURL with kind, video_id, and validity info

    Examples:
        >>> parse_url("https://youtube.com/watch?v=dQw4w9WgXcQ&t=42s").video_id
        'dQw4w9WgXcQ'
        >>> parse_url("https://youtu.be/dQw4w9WgXcQ").kind
        <UrlKind.SHORT_LINK: 'short_link'>
    """
    candidate = url.strip()
    for kind, pattern in YOUTUBE_PATTERNS:
        match = pattern.fullmatch(candidate)
        if match:
            start = match.group("t")
            return ParsedURL(
                kind=kind,
                video_id=match.group("id"),
                original_url=url,
                start_seconds=int(start) if start is not None else None,
            )

    return ParsedURL(
        kind=UrlKind.UNKNOWN,
        video_id=None,
        original_url=url,
        is_valid=False,
    )


def parse_youtube_url(url: str) -> str | None:
    """Extract video ID from YouTube URL.

    Args:
        url: YouTube URL

    Returns:
        11-character video ID or None
    """
    return parse_url(url).video_id


def is_valid_url(url: str) -> bool:
    """Check if URL is a supported YouTube video URL."""
    return parse_url(url).is_valid


def clean_url(url: str) -> str:
    """Strip the start-time suffix and surrounding whitespace from a URL."""
    return _START_TIME_SUFFIX.sub("", url.strip())


def normalize_url(url: str) -> str | None:
    """Return the canonical watch URL for any supported URL form.

    Watch, shorts and short-link URLs of the same video normalize to the
    same string.
    """
    return parse_url(url).canonical_url
