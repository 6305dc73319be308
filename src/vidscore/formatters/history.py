"""History listing formatter."""

from vidscore.models import AnalysisSnapshot


def format_history(snapshots: list[AnalysisSnapshot]) -> str:
    """Format saved analyses as a table: id, date, name, video count."""
    if not snapshots:
        return "No saved analyses."

    lines = [f"{'ID':<32}  {'Saved':<16}  {'Videos':>6}  Name", "-" * 80]
    for snapshot in snapshots:
        saved = snapshot.date.strftime("%Y-%m-%d %H:%M")
        scored = "" if snapshot.show_results else " (not scored)"
        lines.append(
            f"{snapshot.id:<32}  {saved:<16}  {snapshot.video_count:>6}  {snapshot.name}{scored}"
        )
    return "\n".join(lines)
