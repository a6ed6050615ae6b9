"""Engagement ranking for the worker marketplace.

score = (like_weight * likes + rating_weight * avg_rating * sqrt(reviews))
        * recency_decay ** weeks_since_activity
        + response_bonus

The response bonus is a step function and is not decayed by recency.
"""

import logging
import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from gigrank.core.config import RankingConfig
from gigrank.core.schemas import (
    RankedWorker,
    RankingBreakdown,
    WorkerBadge,
    WorkerEngagementMetrics,
    ensure_utc,
    utc_now,
)

logger = logging.getLogger(__name__)

# (max response minutes inclusive, bonus); slower than every tier gets the fallback.
RESPONSE_TIERS: tuple[tuple[float, float], ...] = (
    (15, 5.0),
    (30, 4.0),
    (60, 3.0),
    (120, 2.0),
)
RESPONSE_FALLBACK = 1.0

# (min score inclusive, badge), highest first.
BADGE_TIERS: tuple[tuple[float, WorkerBadge], ...] = (
    (50, WorkerBadge(label="Top Rated", variant="default")),
    (30, WorkerBadge(label="Excellent", variant="secondary")),
    (15, WorkerBadge(label="Great", variant="outline")),
)
NEW_BADGE = WorkerBadge(label="New", variant="outline")

_WEEK = timedelta(weeks=1)


def weeks_since(last_activity: datetime, now: datetime) -> int:
    """Whole weeks elapsed since last_activity. Future timestamps count as 0."""
    return max(0, (ensure_utc(now) - ensure_utc(last_activity)) // _WEEK)


def response_bonus(response_time_minutes: float) -> float:
    for max_minutes, bonus in RESPONSE_TIERS:
        if response_time_minutes <= max_minutes:
            return bonus
    return RESPONSE_FALLBACK


def calculate_worker_score(
    metrics: WorkerEngagementMetrics,
    config: RankingConfig | None = None,
    now: datetime | None = None,
) -> RankedWorker:
    """Score a single worker.

    Args:
        metrics: The worker's engagement counters.
        config: Ranking constants; defaults to RankingConfig().
        now: Reference time for recency; defaults to the current UTC time.

    Returns:
        A new RankedWorker carrying the metrics, score and breakdown.
    """
    config = config or RankingConfig()
    now = now or utc_now()

    like_score = config.like_weight * metrics.like_count
    rating_score = (
        config.rating_weight * metrics.avg_rating * math.sqrt(metrics.review_count)
        if metrics.review_count > 0
        else 0.0
    )
    recency_score = config.recency_decay ** weeks_since(metrics.last_activity_date, now)
    response_score = response_bonus(metrics.response_time_minutes)

    score = (like_score + rating_score) * recency_score + response_score

    return RankedWorker(
        **metrics.model_dump(),
        score=score,
        breakdown=RankingBreakdown(
            like_score=like_score,
            rating_score=rating_score,
            recency_score=recency_score,
            response_score=response_score,
        ),
    )


def rank_workers(
    metrics: Iterable[WorkerEngagementMetrics],
    config: RankingConfig | None = None,
    now: datetime | None = None,
) -> list[RankedWorker]:
    """Score a batch of workers, sorted by score desc.

    The sort is stable: workers with equal scores keep their input order.
    """
    now = now or utc_now()
    ranked = [calculate_worker_score(m, config, now) for m in metrics]
    ranked.sort(key=lambda r: r.score, reverse=True)
    logger.debug("Ranked %d workers", len(ranked))
    return ranked


def get_worker_badge(score: float) -> WorkerBadge:
    """Map a ranking score to its display badge (lower bounds inclusive)."""
    for min_score, badge in BADGE_TIERS:
        if score >= min_score:
            return badge
    return NEW_BADGE
