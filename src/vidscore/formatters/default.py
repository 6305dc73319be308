"""Default output formatter - results table with formula and summary."""

from __future__ import annotations

from datetime import datetime, timezone

from vidscore.catalog import sort_records
from vidscore.models import VideoRecord, warning_text
from vidscore.scoring import ScoringPolicy, get_policy

LABEL_WIDTH = 44


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def format_summary(
    records: list[VideoRecord],
    now: datetime | None = None,
    policy: str | ScoringPolicy | None = None,
) -> str:
    """Describe the best video of an already ranked list.

    Args:
        records: Records ordered best first
        now: Reference time for "days ago"
        policy: Policy used, for its name in the text
    """
    if not records:
        return "No videos left to analyze after applying the filters."

    best = records[0]
    now = now or datetime.now(timezone.utc)
    days = best.days_since_publish(now)

    parts = []
    if best.normalized_score is not None:
        resolved = get_policy(policy or best.policy)
        parts.append(f"has a normalized {resolved.name} score of {best.normalized_score:.2f}/100")
    parts.append(f"a like ratio of {best.like_ratio * 100:.2f}%")
    parts.append(f"a comment ratio of {best.comment_ratio * 100:.2f}%")

    return (
        f"Video #1 ({best.label}) "
        + ", ".join(parts)
        + f" and was published {days} days ago."
    )


def format_default(
    records: list[VideoRecord],
    policy: str | ScoringPolicy | None = None,
    include_recency: bool = True,
    show_results: bool = True,
    now: datetime | None = None,
) -> str:
    """Format a list of records as a results table.

    Shows:
    - the scoring formula in use
    - one row per video (rank, score, counters, warnings)
    - a one-line summary of the best video
    """
    lines = []
    resolved = get_policy(policy)

    lines.append("=" * 100)
    lines.append(f"Policy: {resolved.title}")
    for formula_line in resolved.formula(include_recency).splitlines():
        lines.append(f"  {formula_line}")
    lines.append("=" * 100)

    if not records:
        lines.append("No videos.")
        return "\n".join(lines)

    header = f"{'#':>3}  {'Video':<{LABEL_WIDTH}} {'Score':>8} {'Views':>12} {'Likes':>10} {'Comments':>9}"
    lines.append(header)
    lines.append("-" * 100)

    for rank, record in enumerate(records, 1):
        if show_results and record.normalized_score is not None:
            score = f"{record.normalized_score:8.2f}"
        else:
            score = f"{'-':>8}"
        lines.append(
            f"{rank:>3}  {_truncate(record.label, LABEL_WIDTH):<{LABEL_WIDTH}} {score} "
            f"{record.views:>12,} {record.likes:>10,} {record.comments:>9,}"
        )
        if show_results and record.warnings:
            for warning in record.warnings:
                lines.append(f"{'':>5}! {warning_text(warning)}")

    if show_results:
        best_first = sort_records(records, ascending=not resolved.higher_is_better)
        lines.append("")
        lines.append(format_summary(best_first, now=now, policy=resolved))

    lines.append("=" * 100)
    return "\n".join(lines)
