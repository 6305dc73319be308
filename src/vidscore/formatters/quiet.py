"""Quiet output formatter - one-line summary."""

from vidscore.models import VideoRecord


def format_quiet(record: VideoRecord) -> str:
    """Format a record as one-line summary.

    Format: label | score | views | likes | comments | warnings: n
    """
    parts = []

    parts.append(record.label)

    if record.normalized_score is not None:
        parts.append(f"{record.normalized_score:.2f}")
    else:
        parts.append("N/A")

    parts.append(f"{record.views} views")
    parts.append(f"{record.likes} likes")
    parts.append(f"{record.comments} comments")

    if record.warnings is not None:
        parts.append(f"warnings: {len(record.warnings)}")

    return " | ".join(parts)


def format_quiet_list(records: list[VideoRecord]) -> str:
    """Format multiple records as one-line summaries.

    Args:
        records: List of VideoRecord objects

    Returns:
        Multiple lines, one per video
    """
    return "\n".join(format_quiet(r) for r in records)
