"""Filter chain applied to roster workers before ranking.

Filter order:
  1. DeduplicationFilter   by worker_id, first occurrence wins
  2. MinimumReviewsFilter  optional, drops workers with too few rated reviews
  3. InactiveWorkerFilter  optional, drops workers idle for too many weeks
"""

import logging
from collections.abc import Callable
from datetime import datetime

from gigrank.core.config import LeaderboardConfig
from gigrank.roster.schema import WorkerRecord
from gigrank.scoring.ranking import weeks_since

logger = logging.getLogger(__name__)

# A filter is a callable that takes workers and returns a subset.
Filter = Callable[[list[WorkerRecord]], list[WorkerRecord]]


class DeduplicationFilter:
    """Remove repeated worker_ids, keeping the first record.

    Stateful: tracks seen IDs across calls within the same filter instance.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def __call__(self, workers: list[WorkerRecord]) -> list[WorkerRecord]:
        result: list[WorkerRecord] = []
        for w in workers:
            if w.worker_id not in self._seen:
                self._seen.add(w.worker_id)
                result.append(w)
        deduped = len(workers) - len(result)
        if deduped:
            logger.debug("DeduplicationFilter: removed %d duplicates", deduped)
        return result


class MinimumReviewsFilter:
    """Keep only workers with at least min_reviews rated reviews.

    With min_reviews == 0 the filter is a no-op.
    """

    def __init__(self, min_reviews: int) -> None:
        self._min_reviews = min_reviews

    def __call__(self, workers: list[WorkerRecord]) -> list[WorkerRecord]:
        if self._min_reviews <= 0:
            return workers
        result = [w for w in workers if w.engagement().review_count >= self._min_reviews]
        removed = len(workers) - len(result)
        if removed:
            logger.debug("MinimumReviewsFilter: removed %d workers", removed)
        return result


class InactiveWorkerFilter:
    """Remove workers whose last activity is more than max_weeks whole weeks ago."""

    def __init__(self, max_weeks: int | None, now: datetime) -> None:
        self._max_weeks = max_weeks
        self._now = now

    def __call__(self, workers: list[WorkerRecord]) -> list[WorkerRecord]:
        if self._max_weeks is None:
            return workers
        result = [
            w for w in workers
            if weeks_since(w.last_activity_date, self._now) <= self._max_weeks
        ]
        removed = len(workers) - len(result)
        if removed:
            logger.debug("InactiveWorkerFilter: removed %d inactive workers", removed)
        return result


def build_filters(config: LeaderboardConfig, now: datetime) -> list[Filter]:
    """Build the filter chain for the leaderboard."""
    return [
        DeduplicationFilter(),
        MinimumReviewsFilter(config.min_reviews),
        InactiveWorkerFilter(config.max_weeks_inactive, now),
    ]


def run_filter_chain(
    workers: list[WorkerRecord],
    filters: list[Filter],
) -> list[WorkerRecord]:
    """Apply filters in order, returning the surviving workers."""
    result = workers
    for f in filters:
        result = f(result)
    return result
