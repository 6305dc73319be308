"""The active catalog: an owned, in-memory list of video records.

Usage:
    from vidscore import Catalog, YouTubeAPIFetcher

    catalog = Catalog()
    catalog.add_url("https://youtu.be/dQw4w9WgXcQ", YouTubeAPIFetcher())
    catalog.add_manual("Launch trailer", views=12000, likes=300, comments=40, publish_year=2023)
    catalog.compute()

    for record in catalog.sorted():
        print(record.label, record.normalized_score)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime, timezone

from pydantic import ValidationError as PydanticValidationError

from vidscore.config import FilterConfig, ScoringSettings
from vidscore.errors import ValidationError
from vidscore.fetchers.base import BaseFetcher
from vidscore.models import VideoRecord
from vidscore.scoring import ScoringPolicy, get_policy, score_all
from vidscore.utils.url_parser import clean_url, parse_url

logger = logging.getLogger(__name__)


@dataclass
class CatalogFilter:
    """Which filters are switched on, and their thresholds."""

    low_engagement: bool = False
    low_views: bool = False
    thresholds: FilterConfig | None = None

    def accepts(self, record: VideoRecord) -> bool:
        """Unscored records always pass."""
        if not record.is_scored:
            return True
        thresholds = self.thresholds or FilterConfig()
        if self.low_engagement and (
            record.like_ratio < thresholds.min_like_ratio
            or record.comment_ratio < thresholds.min_comment_ratio
        ):
            return False
        if self.low_views and record.views < thresholds.min_views:
            return False
        return True


class Catalog:
    """Ordered collection of VideoRecords plus the "results shown" flag.

    All mutation goes through the methods below. A failed operation raises
    and leaves the catalog exactly as it was.
    """

    def __init__(self, records: Iterable[VideoRecord] = (), show_results: bool = False):
        self._records: list[VideoRecord] = list(records)
        self.show_results = show_results

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[VideoRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"Catalog(records={len(self._records)}, show_results={self.show_results})"

    @property
    def records(self) -> list[VideoRecord]:
        """Copy of the records, in insertion order."""
        return list(self._records)

    def get(self, record_id: str) -> VideoRecord | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def contains_key(self, key: str) -> bool:
        """Check if a record with this dedup key is already present."""
        return any(record.dedup_key == key for record in self._records)

    # -- mutation ---------------------------------------------------------

    def add(self, record: VideoRecord) -> VideoRecord:
        """Append a record.

        Raises:
            ValidationError: If a record with the same dedup key exists
        """
        if self.contains_key(record.dedup_key):
            raise ValidationError(f"Video already in the catalog: {record.label}")
        self._records.append(record)
        logger.debug("Added %s (%s)", record.id, record.dedup_key)
        return record

    def add_url(self, url: str, fetcher: BaseFetcher) -> VideoRecord:
        """Validate a YouTube URL, fetch its statistics and append it.

        The duplicate check runs before the fetch, so a duplicate never
        costs a request.

        Args:
            url: Watch, shorts or youtu.be URL
            fetcher: Client used to fetch the counters

        Returns:
            The new record

        Raises:
            ValidationError: If the URL is invalid or already present
            FetchError: If the statistics could not be fetched
        """
        parsed = parse_url(url or "")
        if not parsed.is_valid or parsed.video_id is None:
            raise ValidationError(f"Invalid YouTube URL: {url!r}")

        if self.contains_key(parsed.canonical_url):
            raise ValidationError(f"Video already in the catalog: {url}")

        stats = fetcher.fetch(parsed.video_id)
        record = VideoRecord(
            url=clean_url(url),
            title=stats.title,
            views=stats.views,
            likes=stats.likes,
            comments=stats.comments,
            publish_date=stats.publish_date,
        )
        return self.add(record)

    def add_manual(
        self,
        title: str,
        views: int,
        likes: int,
        comments: int,
        publish_year: int,
        now: datetime | None = None,
    ) -> VideoRecord:
        """Append a manually entered record.

        Raises:
            ValidationError: On an empty title, negative counters, a year
                before 1 or in the future, or a duplicate title/year pair
        """
        if not title or not title.strip():
            raise ValidationError("A title is required for manual entries")
        current_year = (now or datetime.now(timezone.utc)).year
        if publish_year < 1:
            raise ValidationError(f"Publish year {publish_year} is out of range")
        if publish_year > current_year:
            raise ValidationError(f"Publish year {publish_year} is in the future")

        try:
            record = VideoRecord(
                title=title.strip(),
                views=views,
                likes=likes,
                comments=comments,
                publish_year=publish_year,
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid manual entry: {e.errors()[0]['msg']}") from e
        return self.add(record)

    def remove(self, record_id: str) -> bool:
        """Remove a record by id. Returns False if it was not present."""
        before = len(self._records)
        self._records = [r for r in self._records if r.id != record_id]
        return len(self._records) != before

    def replace(self, records: Iterable[VideoRecord], show_results: bool | None = None) -> None:
        """Bulk-replace the contents, e.g. when loading a saved analysis."""
        self._records = list(records)
        if show_results is not None:
            self.show_results = show_results

    def clear(self) -> None:
        self._records = []
        self.show_results = False

    def compute(
        self,
        now: datetime | None = None,
        config: ScoringSettings | None = None,
        policy: str | ScoringPolicy | None = None,
    ) -> list[VideoRecord]:
        """Score the whole catalog and replace its contents with the result.

        Raises:
            ValidationError: If the catalog is empty or the policy is unknown
        """
        if not self._records:
            raise ValidationError("Add at least one video before computing scores")
        scored = score_all(self._records, now=now, config=config, policy=policy)
        self.replace(scored, show_results=True)
        return self.records

    # -- views ------------------------------------------------------------

    def filtered(self, catalog_filter: CatalogFilter | None = None) -> list[VideoRecord]:
        """Records that pass the enabled filters, in insertion order."""
        catalog_filter = catalog_filter or CatalogFilter()
        return [r for r in self._records if catalog_filter.accepts(r)]

    def sorted(
        self,
        ascending: bool = False,
        catalog_filter: CatalogFilter | None = None,
    ) -> list[VideoRecord]:
        """Filtered records sorted by normalized score."""
        return sort_records(self.filtered(catalog_filter), ascending=ascending)

    def ranked(
        self,
        policy: str | ScoringPolicy | None = None,
        catalog_filter: CatalogFilter | None = None,
    ) -> list[VideoRecord]:
        """Filtered records, best first under the policy's direction."""
        resolved = get_policy(policy or self.policy_name)
        return self.sorted(ascending=not resolved.higher_is_better, catalog_filter=catalog_filter)

    @property
    def policy_name(self) -> str | None:
        """Policy that scored the catalog, if it has been scored."""
        for record in self._records:
            if record.policy:
                return record.policy
        return None


def sort_records(records: Iterable[VideoRecord], ascending: bool = False) -> list[VideoRecord]:
    """Sort by normalized score.

    Ascending is a stable sort with unscored records first. Descending is
    the exact reverse of ascending.
    """
    ordered = sorted(
        records,
        key=lambda r: r.normalized_score if r.normalized_score is not None else float("-inf"),
    )
    if ascending:
        return ordered
    return ordered[::-1]
