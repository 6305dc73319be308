"""JSON output formatter."""

import json
from typing import Any

from vidscore.models import VideoRecord


def format_json(record: VideoRecord, indent: int = 2) -> str:
    """Format a record as JSON string.

    Args:
        record: VideoRecord object
        indent: JSON indentation level

    Returns:
        JSON formatted string, camelCase keys
    """
    return record.model_dump_json(indent=indent, by_alias=True, exclude_none=True)


def format_json_list(records: list[VideoRecord], indent: int = 2) -> str:
    """Format multiple records as JSON array.

    Args:
        records: List of VideoRecord objects
        indent: JSON indentation level

    Returns:
        JSON array formatted string
    """
    data = [to_dict(r) for r in records]
    return json.dumps(data, indent=indent, ensure_ascii=False)


def to_dict(record: VideoRecord) -> dict[str, Any]:
    """Convert a record to dictionary.

    Args:
        record: VideoRecord object

    Returns:
        Dictionary representation
    """
    return record.to_json_dict()
