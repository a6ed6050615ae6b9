"""Roster file model: workers and community posts loaded from YAML."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from gigrank.core.schemas import (
    MAX_COUNT,
    CommunityStats,
    Post,
    Review,
    Timestamp,
    VolunteerEntry,
    WorkerEngagementMetrics,
    WorkerPerformanceFactors,
)
from gigrank.scoring.gig_score import PERFORMANCE_DEFAULTS, fill_performance_defaults
from gigrank.scoring.signals import aggregate_reviews, count_repeat_clients


class WorkerRecord(BaseModel):
    """Everything the roster file knows about one worker.

    When ``reviews`` is non-empty it overrides like_count, avg_rating and
    review_count. ``bookings`` (client IDs of completed bookings) fills
    completed_jobs and repeat_clients when those are not given. Counters
    still missing take PERFORMANCE_DEFAULTS.
    """

    worker_id: str
    name: str = ""
    role: str = "worker"

    like_count: int = Field(default=0, ge=0, le=MAX_COUNT)
    avg_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    review_count: int | None = Field(default=None, ge=0, le=MAX_COUNT)
    reviews: list[Review] = Field(default_factory=list)
    last_activity_date: Timestamp
    response_time_minutes: float | None = Field(default=None, ge=0.0)

    completed_jobs: int | None = Field(default=None, ge=0, le=MAX_COUNT)
    cancelled_jobs: int | None = Field(default=None, ge=0, le=MAX_COUNT)
    repeat_clients: int | None = Field(default=None, ge=0, le=MAX_COUNT)
    bookings: list[str] = Field(default_factory=list)

    community: CommunityStats | None = None
    volunteering: list[VolunteerEntry] = Field(default_factory=list)

    completed_modules: int = Field(default=0, ge=0, le=MAX_COUNT)
    badges: list[str] = Field(default_factory=list)

    @field_validator("worker_id")
    @classmethod
    def worker_id_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "worker_id must not be empty"
            raise ValueError(msg)
        return v.strip()

    def engagement(self) -> WorkerEngagementMetrics:
        """Build ranking input, preferring raw reviews over stored counters."""
        if self.reviews:
            stats = aggregate_reviews(self.reviews)
            like_count, avg_rating, review_count = (
                stats.like_count, stats.avg_rating, stats.review_count,
            )
        else:
            like_count = self.like_count
            avg_rating = self.avg_rating or 0.0
            review_count = self.review_count or 0

        response = self.response_time_minutes
        return WorkerEngagementMetrics(
            worker_id=self.worker_id,
            like_count=like_count,
            avg_rating=avg_rating,
            review_count=review_count,
            last_activity_date=self.last_activity_date,
            response_time_minutes=(
                response if response is not None else PERFORMANCE_DEFAULTS["response_time_minutes"]
            ),
        )

    def performance(self) -> WorkerPerformanceFactors:
        """Build GigScore input, filling unknown counters with defaults."""
        engagement = self.engagement()
        completed_jobs = self.completed_jobs
        repeat_clients = self.repeat_clients
        if self.bookings:
            if completed_jobs is None:
                completed_jobs = len(self.bookings)
            if repeat_clients is None:
                repeat_clients = count_repeat_clients(self.bookings)

        profile = {
            "avg_rating": engagement.avg_rating,
            "review_count": engagement.review_count,
            "completed_jobs": completed_jobs,
            "response_time_minutes": self.response_time_minutes,
            "cancelled_jobs": self.cancelled_jobs,
            "repeat_clients": repeat_clients,
        }
        return WorkerPerformanceFactors.model_validate(fill_performance_defaults(profile))


class Roster(BaseModel):
    """Contents of a roster YAML file."""

    workers: list[WorkerRecord] = Field(default_factory=list)
    posts: list[Post] = Field(default_factory=list)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Roster":
        """Load a roster from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Roster file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
