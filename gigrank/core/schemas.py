"""Core data models for worker scoring and ranking.

All models are frozen: scoring never mutates its inputs, results are new
instances. Out-of-domain values (negative or oversized counts, ratings
outside 0-5, NaN/inf) are rejected here, so the engines can stay total.
"""

from datetime import date, datetime, time, timezone
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field

BadgeVariant = Literal["default", "secondary", "outline"]
VolunteerStatus = Literal["pending", "approved", "completed", "rejected"]

# Largest count accepted; every count must convert to float exactly.
MAX_COUNT = 2**53


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware values pass through unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_timestamp(value: Any) -> Any:
    # YAML turns bare dates into datetime.date; treat them as midnight UTC.
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return value


Timestamp = Annotated[datetime, BeforeValidator(_coerce_timestamp), AfterValidator(ensure_utc)]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


# ---------------------------------------------------------------------------
# GigScore
# ---------------------------------------------------------------------------


class WorkerPerformanceFactors(_Frozen):
    """Raw performance counters for one worker, read fresh per scoring call."""

    avg_rating: float = Field(ge=0.0, le=5.0)
    review_count: int = Field(ge=0, le=MAX_COUNT)
    completed_jobs: int = Field(ge=0, le=MAX_COUNT)
    response_time_minutes: float = Field(ge=0.0)
    cancelled_jobs: int = Field(ge=0, le=MAX_COUNT)
    # Semantically <= completed_jobs; not enforced.
    repeat_clients: int = Field(ge=0, le=MAX_COUNT)


class GigScoreBreakdown(_Frozen):
    """Unweighted sub-scores (each 0-100) and the rounded weighted total."""

    review_score: float
    jobs_score: float
    response_score: float
    cancellation_score: float
    repeat_score: float
    total: float = Field(ge=0.0, le=100.0)


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


class WorkerEngagementMetrics(_Frozen):
    """Engagement counters used for marketplace ordering."""

    worker_id: str
    like_count: int = Field(ge=0, le=MAX_COUNT)
    avg_rating: float = Field(ge=0.0, le=5.0)
    review_count: int = Field(ge=0, le=MAX_COUNT)
    last_activity_date: Timestamp
    response_time_minutes: float = Field(ge=0.0)


class RankingBreakdown(_Frozen):
    like_score: float
    rating_score: float
    recency_score: float
    response_score: float


class RankedWorker(WorkerEngagementMetrics):
    """Engagement metrics plus the computed ranking score."""

    score: float
    breakdown: RankingBreakdown


class WorkerBadge(_Frozen):
    label: str
    variant: BadgeVariant


# ---------------------------------------------------------------------------
# Upstream signals
# ---------------------------------------------------------------------------


class Review(_Frozen):
    """A review/like left by a client. A missing rating is a plain like."""

    rating: int | None = Field(default=None, ge=1, le=5)
    client_id: str = ""


class ReviewStats(_Frozen):
    like_count: int = Field(ge=0, le=MAX_COUNT)
    avg_rating: float = Field(ge=0.0, le=5.0)
    review_count: int = Field(ge=0, le=MAX_COUNT)


class CommunityStats(_Frozen):
    """Community (G-Square) activity counters."""

    posts: int = Field(default=0, ge=0, le=MAX_COUNT)
    comments: int = Field(default=0, ge=0, le=MAX_COUNT)
    helpful_reacts: int = Field(default=0, ge=0, le=MAX_COUNT)
    accepted_answers: int = Field(default=0, ge=0, le=MAX_COUNT)


class VolunteerEntry(_Frozen):
    """A donated-service entry. Only approved/completed entries are scored."""

    title: str = ""
    hours: float = Field(default=0.0, ge=0.0)
    status: VolunteerStatus = "pending"
    rating: int | None = Field(default=None, ge=1, le=5)
    created_at: Timestamp
    completed_at: Timestamp | None = None


# ---------------------------------------------------------------------------
# Community feed
# ---------------------------------------------------------------------------


class Post(_Frozen):
    post_id: str
    title: str = ""
    author_id: str = ""
    created_at: Timestamp
    reactions: list[str] = Field(default_factory=list)


class RankedPost(Post):
    hot_score: float


# ---------------------------------------------------------------------------
# Leaderboard
# ---------------------------------------------------------------------------


class LeaderboardEntry(_Frozen):
    """One row of the worker leaderboard."""

    rank: int = Field(ge=1)
    worker_id: str
    name: str = ""
    score: float
    breakdown: RankingBreakdown
    badge: WorkerBadge
    gig_score: float = Field(ge=0.0, le=100.0)
    community_score: int = Field(default=0, ge=0, le=100)
    volunteer_score: int = Field(default=0, ge=0, le=100)
    achievements: list[str] = Field(default_factory=list)
