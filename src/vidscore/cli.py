"""
Command-line interface for vidscore.

Usage:
  vidscore URL [URL ...]                         # Fetch, score and rank
  vidscore --manual "Title,12000,300,40,2023"    # Manually entered video
  vidscore --no-recency URL ...                  # FEQT without recency
  vidscore --policy bayesian --manual ...        # Bayesian-smoothed (lower is better)
  vidscore --save "Week 12" URL ...              # Save to history
  vidscore -o report.json URL ...                # Export as JSON
  vidscore --history                             # List saved analyses
  vidscore --import a.json b.json                # Import exports into history
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path

from vidscore._version import __version__
from vidscore.catalog import Catalog, CatalogFilter
from vidscore.config import ScoringSettings, get_config
from vidscore.errors import ValidationError, VidscoreError
from vidscore.exchange import build_export, export_all, import_files, write_export
from vidscore.fetchers import get_default_fetcher, get_fetcher_status
from vidscore.formatters import (
    format_default,
    format_full,
    format_history,
    format_json_list,
    format_quiet_list,
)
from vidscore.history import HistoryStore
from vidscore.logging_config import configure_logging
from vidscore.scoring import available_policies, get_policy


def main(argv: list[str] | None = None) -> int:
    """Main entry point for vidscore CLI."""
    parser = argparse.ArgumentParser(
        prog="vidscore",
        description="Score and rank YouTube videos by recency, engagement and virality.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Scoring:
  --policy     feqt (default), feqt_v1 or bayesian
  --no-recency FEQT without the recency term (normalized by 2.5 instead of 1.5)

Ordering and filters:
  --order      best (default, honors the policy direction), asc or desc
  --filter-low-engagement  Hide videos with <1% likes or <0.1% comments
  --filter-low-views       Hide videos with <500 views

History:
  --save NAME  Save the analysis to history
  --load ID    Start from a saved analysis
  --history    List saved analyses
  --delete ID  Delete a saved analysis

Exchange:
  -o FILE      Export the analysis as JSON (a bare file name goes to storage.export_dir)
  --import     Import one or more export files into history
  --export-all [DIR]  Write every saved analysis (default: storage.export_dir)

Examples:
  vidscore https://youtu.be/dQw4w9WgXcQ
  vidscore --manual "Launch trailer,12000,300,40,2023" --policy bayesian
  vidscore -o report.json --name "Week 12" https://www.youtube.com/shorts/aqz-KE-bpKQ
        """,
    )
    parser.add_argument("urls", nargs="*", metavar="URL", help="YouTube video URL(s) to analyze")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Log progress to stderr (-vv for debug)"
    )

    # Input
    parser.add_argument(
        "--manual",
        "-m",
        action="append",
        default=[],
        metavar="ENTRY",
        help='Add a video by hand: "TITLE,VIEWS,LIKES,COMMENTS,YEAR"',
    )
    parser.add_argument("--load", metavar="ID", help="Start from a saved analysis")

    # Scoring
    parser.add_argument("--policy", help="Scoring policy (see --policies)")
    parser.add_argument("--no-recency", action="store_true", help="Leave recency out of FEQT")

    # Ordering and filters
    parser.add_argument(
        "--order",
        choices=["best", "asc", "desc"],
        default="best",
        help="Result order (default: best first)",
    )
    parser.add_argument("--filter-low-engagement", action="store_true", help="Hide low engagement")
    parser.add_argument("--filter-low-views", action="store_true", help="Hide low view counts")

    # Persistence
    parser.add_argument("--save", metavar="NAME", help="Save the analysis to history")
    parser.add_argument("-o", "--output", help="Export the analysis to a JSON file")
    parser.add_argument("--name", help="Analysis name used in exports")
    parser.add_argument("--history-file", metavar="PATH", help="History file to use")

    # Output mode
    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument("--full", action="store_true", help="Show every sub-factor")
    output_group.add_argument("-q", "--quiet", action="store_true", help="One line per video")
    output_group.add_argument("--json", action="store_true", help="Print records as JSON")

    # Standalone modes (mutually exclusive)
    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument("--history", action="store_true", help="List saved analyses")
    mode_group.add_argument("--delete", metavar="ID", help="Delete a saved analysis")
    mode_group.add_argument(
        "--import", dest="import_files", nargs="+", metavar="FILE", help="Import export files"
    )
    mode_group.add_argument(
        "--export-all",
        nargs="?",
        const="",
        metavar="DIR",
        help="Export every saved analysis (default DIR: storage.export_dir)",
    )
    mode_group.add_argument("--policies", action="store_true", help="List scoring policies")
    mode_group.add_argument("--status", action="store_true", help="Show configuration status")

    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging(args.verbose)

    config = get_config()

    if args.policies:
        for name, policy_cls in sorted(available_policies().items()):
            direction = "higher is better" if policy_cls.higher_is_better else "lower is better"
            print(f"  {name:<10} {policy_cls.title} [{direction}]")
        return 0

    if args.status:
        print("vidscore status:")
        print("=" * 50)
        print("\nFetchers:")
        print("-" * 50)
        for name, available in sorted(get_fetcher_status().items()):
            icon = "✓" if available else "✗"
            print(f"  {icon} {name}")
        print("-" * 50)
        print(f"\nHistory file:   {args.history_file or config.storage.history_path}")
        print(f"Policy:         {config.scoring.policy}")
        print(f"Recency:        {'on' if config.scoring.include_recency else 'off'}")
        return 0

    history = HistoryStore(args.history_file)

    if args.history:
        print(format_history(history.snapshots))
        return 0

    if args.delete:
        try:
            deleted = history.delete(args.delete)
        except OSError as e:
            print(f"Error writing {history.path}: {e}", file=sys.stderr)
            return 1
        if deleted:
            print(f"Deleted analysis {args.delete}")
            return 0
        print(f"Error: No saved analysis with id {args.delete!r}", file=sys.stderr)
        return 1

    if args.import_files:
        return import_into_history(history, args.import_files)

    if args.export_all is not None:
        if len(history) == 0:
            print("Error: There are no saved analyses to export", file=sys.stderr)
            return 1
        directory = args.export_all or config.storage.export_dir
        try:
            paths = export_all(history, directory)
        except OSError as e:
            print(f"Error writing to {directory}: {e}", file=sys.stderr)
            return 1
        for path in paths:
            print(f"Exported: {path}")
        print(f"Exported {len(paths)} analyses.")
        return 0

    if not args.urls and not args.manual and not args.load:
        parser.error("nothing to analyze: give URL(s), --manual or --load")

    return analyze(args, history)


def parse_manual_entry(entry: str) -> tuple[str, int, int, int, int]:
    """Split "TITLE,VIEWS,LIKES,COMMENTS,YEAR" (the title may contain commas).

    Raises:
        ValidationError: If the entry does not have five fields or a number is invalid
    """
    parts = entry.rsplit(",", 4)
    if len(parts) != 5:
        raise ValidationError(f"Manual entry must be TITLE,VIEWS,LIKES,COMMENTS,YEAR: {entry!r}")
    title, *numbers = parts
    try:
        views, likes, comments, year = (int(n.strip()) for n in numbers)
    except ValueError as e:
        raise ValidationError(f"Manual entry has a non-integer value: {entry!r}") from e
    return title.strip(), views, likes, comments, year


def analyze(args: argparse.Namespace, history: HistoryStore) -> int:
    """Build the catalog, score it, print it, then save/export.

    Args:
        args: Parsed command line arguments
        history: History store for --load and --save

    Returns:
        Exit code (0 for success, 1 if anything failed)
    """
    config = get_config()
    now = datetime.now(timezone.utc)
    catalog = Catalog()
    errors = 0

    if args.load:
        try:
            snapshot = history.load_into(args.load, catalog)
            if not args.json:
                print(f"Loaded: {snapshot.name} ({snapshot.video_count} videos)")
        except VidscoreError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if args.urls:
        fetcher = get_default_fetcher()
        for url in args.urls:
            try:
                if not args.json:
                    print(f"Fetching: {url}")
                catalog.add_url(url, fetcher)
            except VidscoreError as e:
                print(f"Error: {e}", file=sys.stderr)
                errors += 1

    for entry in args.manual:
        try:
            title, views, likes, comments, year = parse_manual_entry(entry)
            catalog.add_manual(title, views, likes, comments, year, now=now)
        except VidscoreError as e:
            print(f"Error: {e}", file=sys.stderr)
            errors += 1

    if len(catalog) == 0:
        print("Error: No videos to analyze", file=sys.stderr)
        return 1

    settings = ScoringSettings(
        policy=args.policy or config.scoring.policy,
        include_recency=config.scoring.include_recency and not args.no_recency,
    )
    try:
        catalog.compute(now=now, config=settings)
    except VidscoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    catalog_filter = CatalogFilter(
        low_engagement=args.filter_low_engagement,
        low_views=args.filter_low_views,
        thresholds=config.filters,
    )
    if args.order == "best":
        records = catalog.ranked(settings.policy, catalog_filter=catalog_filter)
    else:
        records = catalog.sorted(ascending=args.order == "asc", catalog_filter=catalog_filter)

    if args.json:
        print(format_json_list(records))
    elif args.quiet:
        print(format_quiet_list(records))
    elif args.full:
        print(format_full(records, now=now))
    else:
        policy = get_policy(settings.policy)
        print(
            format_default(
                records,
                policy=policy,
                include_recency=settings.include_recency,
                show_results=catalog.show_results,
                now=now,
            )
        )

    if args.save:
        try:
            snapshot = history.save(args.save, catalog)
            print(f"Saved analysis: {snapshot.name} ({snapshot.id})")
        except (VidscoreError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)
            errors += 1

    if args.output:
        document = build_export(args.name or args.save, catalog.records, catalog.show_results)
        output = Path(args.output)
        # A bare file name lands in the configured export directory
        directory = output.parent if output.parent != Path(".") else config.storage.export_dir
        try:
            path = write_export(document, directory, filename=output.name)
            print(f"Report saved to: {path}")
        except OSError as e:
            print(f"Error writing {output}: {e}", file=sys.stderr)
            errors += 1

    return 1 if errors > 0 else 0


def import_into_history(history: HistoryStore, paths: list[str]) -> int:
    """Import export files into history, reporting failures per file."""
    report = import_files(paths)
    if report.snapshots:
        try:
            history.extend(report.snapshots)
        except OSError as e:
            print(f"Error writing {history.path}: {e}", file=sys.stderr)
            return 1
        print(f"Imported {len(report.snapshots)} analyses.")
    for error in report.errors:
        print(error, file=sys.stderr)
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
