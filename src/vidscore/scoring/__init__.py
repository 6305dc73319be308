"""Scoring policies for vidscore.

Usage:
    from vidscore.scoring import score_all

    scored = score_all(records)                        # FEQT with recency
    scored = score_all(records, policy="bayesian")     # lower is better
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from vidscore.config import ScoringSettings
from vidscore.errors import ValidationError
from vidscore.models import VideoRecord

from .base import (
    COMMENT_RATIO_WARNING,
    DAILY_GROWTH_WARNING,
    LIKE_RATIO_WARNING,
    ScoreBreakdown,
    ScoringContext,
    ScoringPolicy,
    evaluate_warnings,
)
from .bayesian import BayesianPolicy
from .feqt import FEQTPolicy, FEQTv1Policy

logger = logging.getLogger(__name__)

# All policy classes, keyed by name
_POLICIES: dict[str, type[ScoringPolicy]] = {
    cls.name: cls for cls in (FEQTPolicy, FEQTv1Policy, BayesianPolicy)
}

DEFAULT_POLICY = FEQTPolicy.name


def available_policies() -> dict[str, type[ScoringPolicy]]:
    """Get all registered policy classes, keyed by name."""
    return dict(_POLICIES)


def get_policy(name: str | ScoringPolicy | None = None) -> ScoringPolicy:
    """Resolve a policy name (or instance) to a policy instance.

    Raises:
        ValidationError: If no policy has that name
    """
    if isinstance(name, ScoringPolicy):
        return name
    policy_cls = _POLICIES.get(name or DEFAULT_POLICY)
    if policy_cls is None:
        known = ", ".join(sorted(_POLICIES))
        raise ValidationError(f"Unknown scoring policy: {name!r} (available: {known})")
    return policy_cls()


def score_all(
    records: Iterable[VideoRecord],
    now: datetime | None = None,
    config: ScoringSettings | None = None,
    policy: str | ScoringPolicy | None = None,
) -> list[VideoRecord]:
    """Score every record of a catalog in one pass.

    Args:
        records: Records with raw counters (scored or not)
        now: Reference time for ages (default: current UTC time)
        config: Policy name and recency toggle
        policy: Overrides ``config.policy`` when given

    Returns:
        New scored records, in input order. Inputs are not modified.
    """
    config = config or ScoringSettings()
    resolved = get_policy(policy or config.policy)
    records = list(records)
    context = ScoringContext(
        now=now or datetime.now(timezone.utc),
        max_views=max((r.views for r in records), default=0),
        include_recency=config.include_recency,
    )
    logger.debug(
        "Scoring %d records with %s (include_recency=%s)",
        len(records),
        resolved.name,
        context.include_recency,
    )
    return [resolved.score(record, context) for record in records]


__all__ = [
    # Base classes
    "ScoringPolicy",
    "ScoringContext",
    "ScoreBreakdown",
    # Policies
    "FEQTPolicy",
    "FEQTv1Policy",
    "BayesianPolicy",
    "DEFAULT_POLICY",
    # Functions
    "available_policies",
    "get_policy",
    "score_all",
    "evaluate_warnings",
    # Thresholds
    "LIKE_RATIO_WARNING",
    "COMMENT_RATIO_WARNING",
    "DAILY_GROWTH_WARNING",
]
