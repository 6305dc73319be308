"""Utility functions for vidscore."""

from .url_parser import (
    ParsedURL,
    UrlKind,
    clean_url,
    is_valid_url,
    normalize_url,
    parse_url,
    parse_youtube_url,
)

__all__ = [
    "ParsedURL",
    "UrlKind",
    "clean_url",
    "is_valid_url",
    "normalize_url",
    "parse_url",
    "parse_youtube_url",
]
