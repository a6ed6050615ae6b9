"""Hot ranking for community feed posts.

hot = weighted_reactions / (age_hours + 2) ** 1.5, rounded to 3 decimals.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from gigrank.core.schemas import Post, RankedPost, ensure_utc, utc_now

REACTION_WEIGHTS: dict[str, int] = {
    "LIKE": 1,
    "HELPFUL": 2,
    "INSIGHTFUL": 3,
}
AGE_OFFSET_HOURS = 2.0
GRAVITY = 1.5

_HOUR = timedelta(hours=1)


def hot_score(reactions: Iterable[str], created_at: datetime, now: datetime | None = None) -> float:
    """Score a post by its reactions, decayed by age. Unknown reaction kinds weigh 0."""
    now = ensure_utc(now or utc_now())
    age_hours = max(0.0, (now - ensure_utc(created_at)) / _HOUR)
    weighted = sum(REACTION_WEIGHTS.get(kind.upper(), 0) for kind in reactions)
    return round(weighted / (age_hours + AGE_OFFSET_HOURS) ** GRAVITY, 3)


def rank_posts(posts: Iterable[Post], now: datetime | None = None) -> list[RankedPost]:
    """Return posts ordered by hot score desc; ties keep input order."""
    now = now or utc_now()
    ranked = [
        RankedPost(**p.model_dump(), hot_score=hot_score(p.reactions, p.created_at, now))
        for p in posts
    ]
    ranked.sort(key=lambda p: p.hot_score, reverse=True)
    return ranked
