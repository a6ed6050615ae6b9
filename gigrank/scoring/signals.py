"""Upstream signals derived from raw marketplace records.

These turn reviews, bookings, community activity and volunteer entries into
the counters and 0-100 scores that the GigScore and ranking engines consume
or that are shown next to them.
"""

import logging
from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timedelta

from gigrank.core.schemas import (
    CommunityStats,
    Review,
    ReviewStats,
    VolunteerEntry,
    ensure_utc,
    utc_now,
)

logger = logging.getLogger(__name__)

# Community point model: ~60 points maps to a full score.
HELPFUL_REACT_POINTS = 3
POST_POINTS = 2
COMMENT_POINTS = 1
ACCEPTED_ANSWER_POINTS = 4
COMMUNITY_FULL_POINTS = 60

VOLUNTEER_WINDOW = timedelta(days=365)
VOLUNTEER_POINTS_PER_HOUR = 5
VOLUNTEER_BASE_CAP = 60
VOLUNTEER_SCORED_STATUSES = frozenset({"approved", "completed"})


def aggregate_reviews(reviews: Iterable[Review]) -> ReviewStats:
    """Summarise reviews into like count, average rating and rated count.

    Unrated reviews and 5-star reviews both count as likes.
    """
    like_count = 0
    ratings: list[int] = []
    for review in reviews:
        if review.rating is None or review.rating == 5:
            like_count += 1
        if review.rating is not None:
            ratings.append(review.rating)

    avg_rating = sum(ratings) / len(ratings) if ratings else 0.0
    return ReviewStats(like_count=like_count, avg_rating=avg_rating, review_count=len(ratings))


def count_repeat_clients(client_ids: Iterable[str]) -> int:
    """Number of distinct clients with more than one booking."""
    bookings = Counter(client_ids)
    return sum(1 for count in bookings.values() if count > 1)


def community_score(stats: CommunityStats | None) -> int:
    if stats is None:
        return 0
    points = (
        HELPFUL_REACT_POINTS * stats.helpful_reacts
        + POST_POINTS * stats.posts
        + COMMENT_POINTS * stats.comments
        + ACCEPTED_ANSWER_POINTS * stats.accepted_answers
    )
    return min(100, round(points / COMMUNITY_FULL_POINTS * 100))


def _volunteer_reference_date(entry: VolunteerEntry) -> datetime:
    return entry.completed_at if entry.completed_at is not None else entry.created_at


def volunteer_score(entries: Iterable[VolunteerEntry], now: datetime | None = None) -> int:
    """Score approved/completed volunteer work from the last 365 days.

    5 points per hour up to 60, plus (avg_rating - 3) * 10 when positive.
    avg_rating averages the rated entries only; with no rated entry it is 5.
    """
    now = ensure_utc(now or utc_now())
    cutoff = now - VOLUNTEER_WINDOW
    recent = [
        e for e in entries
        if e.status in VOLUNTEER_SCORED_STATUSES and _volunteer_reference_date(e) >= cutoff
    ]
    if not recent:
        return 0

    total_hours = sum(e.hours for e in recent)
    ratings = [e.rating for e in recent if e.rating is not None]
    avg_rating = sum(ratings) / len(ratings) if ratings else 5.0

    base = min(VOLUNTEER_BASE_CAP, total_hours * VOLUNTEER_POINTS_PER_HOUR)
    bonus = max(0.0, (avg_rating - 3) * 10)
    score = min(100, round(base + bonus))
    logger.debug(
        "Volunteer score %d from %d entries (%.1f hours)", score, len(recent), total_hours,
    )
    return score
