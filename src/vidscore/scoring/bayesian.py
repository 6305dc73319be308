"""Bayesian-smoothed engagement policy for manually entered videos.

Uses the publication year rather than an exact date, and the largest view
count in the catalog for its popularity term. Lower composite scores rank
better under this policy.
"""

from __future__ import annotations

import math
from typing import ClassVar

from vidscore.models import VideoRecord

from .base import ScoreBreakdown, ScoringContext, ScoringPolicy

SMOOTHING_M = 100
ENGAGEMENT_WEIGHT = 0.65
RECENCY_WEIGHT = 0.25
POPULARITY_WEIGHT = 0.10
BAYESIAN_MAX = ENGAGEMENT_WEIGHT * 100 + RECENCY_WEIGHT + POPULARITY_WEIGHT


def adjusted_engagement_rate(likes: int, comments: int, views: int, m: int = SMOOTHING_M) -> float:
    """Engagement rate in percent, smoothed toward 1 by ``m`` pseudo-views."""
    return (likes + comments + m) / (views + m) * 100


def popularity_factor(views: int, max_views: int) -> float:
    """Log views relative to the most viewed record, in [0, 1]."""
    denominator = math.log10(max_views + 1)
    if denominator == 0:
        return 0.0
    return math.log10(views + 1) / denominator


class BayesianPolicy(ScoringPolicy):
    """Weighted 0.65 / 0.25 / 0.10 mix of adjusted ER, recency and popularity."""

    name: ClassVar[str] = "bayesian"
    title: ClassVar[str] = "Bayesian-smoothed engagement (lower is better)"
    higher_is_better: ClassVar[bool] = False

    def __init__(self, smoothing: int = SMOOTHING_M):
        self.smoothing = smoothing

    def breakdown(self, record: VideoRecord, context: ScoringContext) -> ScoreBreakdown:
        adjusted_er = adjusted_engagement_rate(
            record.likes, record.comments, record.views, m=self.smoothing
        )
        recency = 1 / math.sqrt(record.years_since_publish(context.now) + 1)
        popularity = popularity_factor(record.views, max(context.max_views, record.views))

        composite = (
            adjusted_er * ENGAGEMENT_WEIGHT
            + recency * RECENCY_WEIGHT
            + popularity * POPULARITY_WEIGHT
        )
        return ScoreBreakdown(
            score=composite,
            normalized_score=composite / BAYESIAN_MAX * 100,
            recency=recency,
            engagement=adjusted_er,
            virality=popularity,
        )

    def formula(self, include_recency: bool = True) -> str:
        return (
            "Score = (ER x 0.65) + (R x 0.25) + (P x 0.10)  (lower is better)\n"
            f"ER = (L + C + {self.smoothing}) / (V + {self.smoothing}) x 100, "
            "R = 1/sqrt(years + 1), P = log10(V + 1)/log10(maxV + 1)"
        )
