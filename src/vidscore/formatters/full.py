"""Full output formatter - every sub-factor of every video."""

from datetime import datetime, timezone

from vidscore.models import VideoRecord, warning_text


def format_record_full(record: VideoRecord, now: datetime | None = None) -> str:
    """Format one record with its counters, ratios and score breakdown."""
    now = now or datetime.now(timezone.utc)
    lines = []

    lines.append("=" * 70)
    lines.append(f"Video: {record.label}")
    lines.append("=" * 70)

    lines.append("")
    lines.append("## SOURCE")
    lines.append(f"  ID:           {record.id}")
    if record.url:
        lines.append(f"  URL:          {record.url}")
    if record.publish_date:
        lines.append(f"  Published:    {record.publish_date.strftime('%Y-%m-%d')}")
    elif record.publish_year:
        lines.append(f"  Published:    {record.publish_year}")
    lines.append(f"  Age:          {record.days_since_publish(now)} days")

    lines.append("")
    lines.append("## STATISTICS")
    lines.append(f"  Views:        {record.views:,}")
    lines.append(f"  Likes:        {record.likes:,} ({record.like_ratio:.2%})")
    lines.append(f"  Comments:     {record.comments:,} ({record.comment_ratio:.3%})")
    lines.append(f"  Daily views:  {record.views / record.days_since_publish(now):,.1f}")

    if record.is_scored:
        lines.append("")
        lines.append(f"## SCORE ({record.policy or 'unknown policy'})")
        lines.append(f"  Normalized:   {record.normalized_score:.2f}")
        lines.append(f"  Raw:          {record.score:.4f}")
        if record.recency_factor is not None:
            lines.append(f"  Recency:      {record.recency_factor:.4f}")
            lines.append(f"  Engagement:   {record.engagement_factor:.4f}")
            lines.append(f"  Virality:     {record.virality_factor:.4f}")
        if record.warnings:
            lines.append("  Warnings:")
            for warning in record.warnings:
                lines.append(f"    - {warning_text(warning)}")
        else:
            lines.append("  Warnings:     None")

    lines.append("")
    return "\n".join(lines)


def format_full(records: list[VideoRecord], now: datetime | None = None) -> str:
    """Format every record in full."""
    return "\n".join(format_record_full(r, now=now) for r in records)
