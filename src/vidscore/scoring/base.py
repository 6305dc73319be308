"""Base scoring policy and the shared warning rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from vidscore.models import ScoreWarning, VideoRecord

# Warning thresholds
LIKE_RATIO_WARNING = 0.01
COMMENT_RATIO_WARNING = 0.001
DAILY_GROWTH_WARNING = 100


@dataclass(frozen=True)
class ScoringContext:
    """Catalog-wide inputs shared by every record in one scoring pass."""

    now: datetime
    max_views: int = 0
    include_recency: bool = True


@dataclass(frozen=True)
class ScoreBreakdown:
    """Composite score and the sub-factors it was built from."""

    score: float
    normalized_score: float
    recency: float
    engagement: float
    virality: float


def evaluate_warnings(record: VideoRecord, now: datetime) -> list[ScoreWarning]:
    """Return the advisory warnings for a record, independent of any policy."""
    warnings = []
    if record.like_ratio < LIKE_RATIO_WARNING:
        warnings.append(ScoreWarning.LOW_LIKE_RATIO)
    if record.comment_ratio < COMMENT_RATIO_WARNING:
        warnings.append(ScoreWarning.LOW_COMMENT_RATIO)
    if record.views / record.days_since_publish(now) < DAILY_GROWTH_WARNING:
        warnings.append(ScoreWarning.LOW_DAILY_GROWTH)
    return warnings


class ScoringPolicy(ABC):
    """Abstract base class for scoring policies.

    A policy is a pure function of one record plus the shared
    ScoringContext. Policies differ only in coefficients and in which
    sub-factors they combine, so they are interchangeable.

    Attributes:
        name: Registry name of the policy
        higher_is_better: Direction used when ranking best-first
    """

    name: ClassVar[str] = "base"
    title: ClassVar[str] = "Base policy"
    higher_is_better: ClassVar[bool] = True

    @abstractmethod
    def breakdown(self, record: VideoRecord, context: ScoringContext) -> ScoreBreakdown:
        """Compute the composite score for one record.

        Args:
            record: Record with raw counters
            context: Shared inputs for this scoring pass

        Returns:
            ScoreBreakdown with the composite and its sub-factors
        """
        pass

    @abstractmethod
    def formula(self, include_recency: bool = True) -> str:
        """Describe the formula in one or two lines of text."""
        pass

    def score(self, record: VideoRecord, context: ScoringContext) -> VideoRecord:
        """Return a scored copy of the record. The input is not modified."""
        result = self.breakdown(record, context)
        return record.model_copy(
            update={
                "score": result.score,
                "normalized_score": result.normalized_score,
                "recency_factor": result.recency,
                "engagement_factor": result.engagement,
                "virality_factor": result.virality,
                "warnings": evaluate_warnings(record, context.now),
                "policy": self.name,
            }
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, higher_is_better={self.higher_is_better})"
