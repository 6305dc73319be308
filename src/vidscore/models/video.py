"""Main VideoRecord model."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from vidscore.utils.url_parser import normalize_url


class ScoreWarning(str, Enum):
    """Advisory tags attached to a scored record. They never change the score."""

    LOW_LIKE_RATIO = "low_like_ratio"
    LOW_COMMENT_RATIO = "low_comment_ratio"
    LOW_DAILY_GROWTH = "low_daily_growth"

    @property
    def message(self) -> str:
        """Human-readable description."""
        return WARNING_MESSAGES[self]


WARNING_MESSAGES = {
    ScoreWarning.LOW_LIKE_RATIO: "Low like ratio (<1%)",
    ScoreWarning.LOW_COMMENT_RATIO: "Low comment ratio (<0.1%)",
    ScoreWarning.LOW_DAILY_GROWTH: "Low daily growth (<100 views/day)",
}

# Written together by every scoring pass
SCORE_FIELDS = ("score", "normalized_score", "warnings")
# Sub-factors; absent from records scored by the first app revision
FACTOR_FIELDS = ("recency_factor", "engagement_factor", "virality_factor")
DERIVED_FIELDS = SCORE_FIELDS + FACTOR_FIELDS + ("policy",)

# Known tags become ScoreWarning; free text from older exports is kept as is
WarningTag = Annotated[ScoreWarning | str, Field(union_mode="left_to_right")]


def warning_text(warning: ScoreWarning | str) -> str:
    """Display text for a known tag or a free-text warning."""
    if isinstance(warning, ScoreWarning):
        return warning.message
    return warning


def _new_id() -> str:
    return uuid.uuid4().hex


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class VideoRecord(BaseModel):
    """One analyzed video.

    Raw counters are immutable once the record exists. The derived fields
    are filled in only by a scoring pass over the whole catalog. Score,
    normalized score and warnings are all present or all absent; the three
    sub-factors likewise, and only alongside a score. ``policy`` is an
    optional label, missing on records exported by older app revisions.

    Serialized with camelCase keys (``publishDate``, ``normalizedScore``...)
    and without unset fields, matching the export file format.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(default_factory=_new_id)
    url: str | None = None
    title: str | None = None

    views: int = Field(ge=0)
    likes: int = Field(ge=0)
    comments: int = Field(ge=0)

    publish_date: datetime | None = None
    publish_year: int | None = Field(default=None, ge=1, le=9999)

    # Derived by the scorer
    score: float | None = None
    normalized_score: float | None = None
    recency_factor: float | None = None
    engagement_factor: float | None = None
    virality_factor: float | None = None
    warnings: list[WarningTag] | None = None
    policy: str | None = None

    @model_validator(mode="after")
    def _check_consistency(self) -> VideoRecord:
        if self.publish_date is None and self.publish_year is None:
            raise ValueError("either publishDate or publishYear is required")

        present = {name: getattr(self, name) is not None for name in DERIVED_FIELDS}
        required: list[str] = []
        if any(present.values()):
            required.extend(SCORE_FIELDS)
        if any(present[name] for name in FACTOR_FIELDS):
            required.extend(FACTOR_FIELDS)
        missing = [name for name in required if not present[name]]
        if missing:
            raise ValueError(f"partially scored record, missing: {', '.join(missing)}")
        return self

    @property
    def is_scored(self) -> bool:
        """Check if the scorer has populated the derived fields."""
        return self.score is not None

    @property
    def like_ratio(self) -> float:
        """Likes per view, with views floored to 1."""
        return self.likes / (self.views or 1)

    @property
    def comment_ratio(self) -> float:
        """Comments per view, with views floored to 1."""
        return self.comments / (self.views or 1)

    @property
    def label(self) -> str:
        """Best short label for display."""
        return self.title or self.url or self.id

    @property
    def dedup_key(self) -> str:
        """Normalized identifying key used to reject duplicates."""
        if self.url:
            return normalize_url(self.url) or self.url.strip()
        title = (self.title or "").strip().casefold()
        return f"{title}|{self.publish_year}"

    def published_at(self) -> datetime:
        """Publication moment; year-only records count from January 1st."""
        if self.publish_date is not None:
            return as_utc(self.publish_date)
        return datetime(self.publish_year, 1, 1, tzinfo=timezone.utc)

    def days_since_publish(self, now: datetime) -> int:
        """Whole days since publication, floored at 1."""
        elapsed = as_utc(now) - self.published_at()
        return max(elapsed.days, 1)

    def years_since_publish(self, now: datetime) -> int:
        """Calendar years since publication, floored at 0."""
        year = self.publish_year if self.publish_year is not None else self.published_at().year
        return max(as_utc(now).year - year, 0)

    def without_scores(self) -> VideoRecord:
        """Return a copy with all derived fields cleared."""
        return self.model_copy(update={name: None for name in DERIVED_FIELDS})

    def to_json_dict(self) -> dict:
        """Dictionary in the export file layout."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
