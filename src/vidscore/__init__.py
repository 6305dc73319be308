"""vidscore - YouTube video scoring toolkit.

Catalog a handful of videos, score them by recency, engagement and
virality, and save, export or import the results.

Usage:
    from vidscore import Catalog, HistoryStore, YouTubeAPIFetcher

    catalog = Catalog()
    catalog.add_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ", YouTubeAPIFetcher())
    catalog.compute()

    # Best first
    for record in catalog.ranked():
        print(record.label, record.normalized_score, record.warnings)

    # Save to history
    HistoryStore().save("My analysis", catalog)
"""

from vidscore._version import __version__
from vidscore.catalog import Catalog, CatalogFilter, sort_records
from vidscore.config import ScoringSettings, get_config
from vidscore.errors import FetchError, ImportFormatError, ValidationError, VidscoreError
from vidscore.exchange import (
    ImportReport,
    build_export,
    dumps_export,
    export_all,
    import_files,
    parse_export,
    read_export,
    write_export,
)
from vidscore.fetchers import BaseFetcher, YouTubeAPIFetcher
from vidscore.formatters import (
    format_default,
    format_full,
    format_json,
    format_quiet,
    format_summary,
    to_dict,
)
from vidscore.history import HistoryStore
from vidscore.models import (
    AnalysisSnapshot,
    ExportDocument,
    ScoreWarning,
    VideoRecord,
    VideoStatistics,
)
from vidscore.scoring import (
    BayesianPolicy,
    FEQTPolicy,
    FEQTv1Policy,
    ScoringPolicy,
    get_policy,
    score_all,
)
from vidscore.utils import is_valid_url, normalize_url, parse_url

__all__ = [
    # Version
    "__version__",
    # Catalog and history
    "Catalog",
    "CatalogFilter",
    "sort_records",
    "HistoryStore",
    # Scoring
    "score_all",
    "get_policy",
    "ScoringPolicy",
    "FEQTPolicy",
    "FEQTv1Policy",
    "BayesianPolicy",
    "ScoringSettings",
    "get_config",
    # Models
    "VideoRecord",
    "VideoStatistics",
    "ScoreWarning",
    "AnalysisSnapshot",
    "ExportDocument",
    # Exchange
    "ImportReport",
    "build_export",
    "dumps_export",
    "export_all",
    "import_files",
    "parse_export",
    "read_export",
    "write_export",
    # Fetchers
    "BaseFetcher",
    "YouTubeAPIFetcher",
    # Formatters
    "format_default",
    "format_full",
    "format_json",
    "format_quiet",
    "format_summary",
    "to_dict",
    # URLs
    "parse_url",
    "is_valid_url",
    "normalize_url",
    # Errors
    "VidscoreError",
    "ValidationError",
    "FetchError",
    "ImportFormatError",
]
