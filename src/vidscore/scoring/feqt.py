"""FEQT scoring: recency, engagement and virality.

    R = exp(-0.005 * days)
    E = 0.7 * likes/views + 0.3 * comments/views
    V = min(log10(views/days + 1), 6)

    with recency:    base = 0.4*R + 0.5*E + 0.1*V   (max 1.5)
    without recency: base = 0.7*E + 0.3*V           (max 2.5)

    normalized = base / max * 100
"""

from __future__ import annotations

import math
from typing import ClassVar

from vidscore.models import VideoRecord

from .base import ScoreBreakdown, ScoringContext, ScoringPolicy

RECENCY_DECAY = -0.005
# log10(1_000_000 + 1) is just over 6
VIRALITY_MAX = 6.0
FEQT_MAX_WITH_RECENCY = 1.5
FEQT_MAX_WITHOUT_RECENCY = 2.5


def recency_factor(days: int) -> float:
    """Exponential decay over days since publication, in (0, 1]."""
    return math.exp(RECENCY_DECAY * days)


def virality_factor(views: int, days: int, cap: float | None = VIRALITY_MAX) -> float:
    """log10 of daily views, optionally capped."""
    value = math.log10(views / days + 1)
    if cap is None:
        return value
    return min(value, cap)


class FEQTPolicy(ScoringPolicy):
    """Current FEQT policy with the recency toggle and 0-100 normalization."""

    name: ClassVar[str] = "feqt"
    title: ClassVar[str] = "FEQT (recency, engagement, virality)"
    higher_is_better: ClassVar[bool] = True

    def breakdown(self, record: VideoRecord, context: ScoringContext) -> ScoreBreakdown:
        days = record.days_since_publish(context.now)

        r = recency_factor(days)
        e = record.like_ratio * 0.7 + record.comment_ratio * 0.3
        v = virality_factor(record.views, days)

        if context.include_recency:
            base = r * 0.4 + e * 0.5 + v * 0.1
            maximum = FEQT_MAX_WITH_RECENCY
        else:
            base = e * 0.7 + v * 0.3
            maximum = FEQT_MAX_WITHOUT_RECENCY

        return ScoreBreakdown(
            score=base,
            normalized_score=base / maximum * 100,
            recency=r,
            engagement=e,
            virality=v,
        )

    def formula(self, include_recency: bool = True) -> str:
        if include_recency:
            return (
                "FEQT = [(R x 0.4) + (E x 0.5) + (V x 0.1)] x (100/1.5)\n"
                "R = e^(-0.005 x days), E = (L/V x 0.7) + (C/V x 0.3), "
                "V = min(log10(views/days + 1), 6)"
            )
        return (
            "FEQT = [(E x 0.7) + (V x 0.3)] x (100/2.5)\n"
            "E = (L/V x 0.7) + (C/V x 0.3), V = min(log10(views/days + 1), 6)"
        )


class FEQTv1Policy(ScoringPolicy):
    """First FEQT revision.

    Engagement is computed from percentages, virality is uncapped and
    recency is always included. There is no theoretical maximum, so the
    normalized score is the raw score.
    """

    name: ClassVar[str] = "feqt_v1"
    title: ClassVar[str] = "FEQT v1 (percentage engagement, uncapped virality)"
    higher_is_better: ClassVar[bool] = True

    def breakdown(self, record: VideoRecord, context: ScoringContext) -> ScoreBreakdown:
        days = record.days_since_publish(context.now)

        r = recency_factor(days)
        likes_pct = record.like_ratio * 100
        comments_pct = record.comment_ratio * 100
        e = (likes_pct * 70 + comments_pct * 30) / 100
        v = virality_factor(record.views, days, cap=None)

        base = r * 0.4 + e * 0.5 + v * 0.1
        return ScoreBreakdown(
            score=base,
            normalized_score=base,
            recency=r,
            engagement=e,
            virality=v,
        )

    def formula(self, include_recency: bool = True) -> str:
        return (
            "FEQT v1 = (R x 0.4) + (E x 0.5) + (V x 0.1)\n"
            "R = e^(-0.005 x days), E = (L% x 0.7) + (C% x 0.3), V = log10(views/days + 1)"
        )
