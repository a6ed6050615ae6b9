"""GigScore: a 0-100 worker quality score from five weighted sub-scores.

Sub-scores (each 0-100, default weights from GigScoreWeights):
  review        40%  rating scaled by a confidence ramp over the first 10 reviews
  jobs          25%  log curve, saturates at 50 completed jobs
  response      15%  linear, 100 at 0 minutes down to 0 at 240+ minutes
  cancellation  10%  double-weighted penalty, 0 at a 50% cancellation rate
  repeat        10%  repeat clients per completed job

The total is clamped to 0-100 and rounded with round(x, 1).
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from gigrank.core.config import GigScoreWeights
from gigrank.core.schemas import GigScoreBreakdown, WorkerPerformanceFactors

logger = logging.getLogger(__name__)

FULL_CONFIDENCE_REVIEWS = 10
JOBS_SATURATION = 50
RESPONSE_CUTOFF_MINUTES = 240.0
CANCELLATION_PENALTY = 200.0

PERFORMANCE_DEFAULTS: dict[str, Any] = {
    "avg_rating": 0.0,
    "review_count": 0,
    "completed_jobs": 0,
    "response_time_minutes": 60.0,
    "cancelled_jobs": 0,
    "repeat_clients": 0,
}


def review_score(avg_rating: float, review_count: int) -> float:
    confidence = min(review_count / FULL_CONFIDENCE_REVIEWS, 1.0)
    return (avg_rating / 5.0) * 100.0 * confidence


def jobs_score(completed_jobs: int) -> float:
    return min(100.0, math.log(completed_jobs + 1) / math.log(JOBS_SATURATION + 1) * 100.0)


def response_score(response_time_minutes: float) -> float:
    return max(0.0, 100.0 - (response_time_minutes / RESPONSE_CUTOFF_MINUTES) * 100.0)


def cancellation_score(completed_jobs: int, cancelled_jobs: int) -> float:
    """Reliability credit; a worker with no job history earns none."""
    total_jobs = completed_jobs + cancelled_jobs
    if total_jobs == 0:
        return 0.0
    rate = cancelled_jobs / total_jobs
    return max(0.0, 100.0 - rate * CANCELLATION_PENALTY)


def repeat_score(repeat_clients: int, completed_jobs: int) -> float:
    return min(100.0, repeat_clients / max(completed_jobs, 1) * 100.0)


def gig_score_breakdown(
    factors: WorkerPerformanceFactors,
    weights: GigScoreWeights | None = None,
) -> GigScoreBreakdown:
    """Compute every sub-score and the weighted total.

    Args:
        factors: Validated performance counters.
        weights: Sub-score weights; defaults to GigScoreWeights().

    Returns:
        GigScoreBreakdown with unweighted sub-scores and the rounded total.
    """
    weights = weights or GigScoreWeights()

    review = review_score(factors.avg_rating, factors.review_count)
    jobs = jobs_score(factors.completed_jobs)
    response = response_score(factors.response_time_minutes)
    cancellation = cancellation_score(factors.completed_jobs, factors.cancelled_jobs)
    repeat = repeat_score(factors.repeat_clients, factors.completed_jobs)

    weighted = (
        weights.review * review
        + weights.jobs * jobs
        + weights.response * response
        + weights.cancellation * cancellation
        + weights.repeat * repeat
    )
    total = round(max(0.0, min(100.0, weighted)), 1)

    return GigScoreBreakdown(
        review_score=review,
        jobs_score=jobs,
        response_score=response,
        cancellation_score=cancellation,
        repeat_score=repeat,
        total=total,
    )


def calculate_gig_score(
    factors: WorkerPerformanceFactors,
    weights: GigScoreWeights | None = None,
) -> float:
    """Return the GigScore (0-100, one decimal) for a worker."""
    return gig_score_breakdown(factors, weights).total


def fill_performance_defaults(profile: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge a partial profile over PERFORMANCE_DEFAULTS.

    Keys that are missing or None take the default; unknown keys are dropped.
    """
    filled = dict(PERFORMANCE_DEFAULTS)
    for key, value in (profile or {}).items():
        if key in filled and value is not None:
            filled[key] = value
    return filled


def calculate_worker_gig_score(
    profile: Mapping[str, Any] | None = None,
    weights: GigScoreWeights | None = None,
) -> float:
    """Score a possibly incomplete worker profile.

    Raises:
        pydantic.ValidationError: If a supplied value is out of domain.
    """
    factors = WorkerPerformanceFactors.model_validate(fill_performance_defaults(profile))
    score = calculate_gig_score(factors, weights)
    logger.debug("GigScore %.1f for %s", score, factors)
    return score
