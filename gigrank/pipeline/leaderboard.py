"""Leaderboard: wires roster filters, ranking, badges and GigScore.

Data flow:
  1. Filter chain → eligible workers
  2. rank_workers → engagement score, sorted desc
  3. Per worker: display badge, GigScore, community/volunteer scores,
     achievement badges
  4. Assign 1-based rank, apply limit
"""

import json
import logging
from datetime import datetime

from gigrank.core.config import Settings
from gigrank.core.schemas import LeaderboardEntry, RankedWorker, utc_now
from gigrank.pipeline.filters import build_filters, run_filter_chain
from gigrank.roster.schema import WorkerRecord
from gigrank.scoring.badges import award_profile_badges
from gigrank.scoring.gig_score import calculate_gig_score
from gigrank.scoring.ranking import get_worker_badge, rank_workers
from gigrank.scoring.signals import community_score, volunteer_score

logger = logging.getLogger(__name__)


def build_leaderboard(
    workers: list[WorkerRecord],
    settings: Settings | None = None,
    now: datetime | None = None,
) -> list[LeaderboardEntry]:
    """Rank roster workers and decorate each with its badges and scores.

    Args:
        workers: Roster records, in file order (ties keep this order).
        settings: Scoring and leaderboard settings; defaults to Settings().
        now: Reference time for recency and volunteer windows.

    Returns:
        Leaderboard entries sorted by engagement score desc.
    """
    settings = settings or Settings()
    now = now or utc_now()

    eligible = run_filter_chain(workers, build_filters(settings.leaderboard, now))
    logger.info("Eligible workers: %d of %d", len(eligible), len(workers))

    by_id = {w.worker_id: w for w in eligible}
    ranked = rank_workers((w.engagement() for w in eligible), settings.ranking, now)

    limit = settings.leaderboard.limit
    if limit is not None:
        ranked = ranked[:limit]

    entries = [
        _build_entry(rank, r, by_id[r.worker_id], settings, now)
        for rank, r in enumerate(ranked, start=1)
    ]
    if entries:
        logger.info(
            "Leaderboard: %d entries, top '%s' with %.2f",
            len(entries), entries[0].worker_id, entries[0].score,
        )
    return entries


def _build_entry(
    rank: int,
    ranked: RankedWorker,
    record: WorkerRecord,
    settings: Settings,
    now: datetime,
) -> LeaderboardEntry:
    newly_awarded = award_profile_badges(record.completed_modules, record.role, record.badges)
    return LeaderboardEntry(
        rank=rank,
        worker_id=ranked.worker_id,
        name=record.name,
        score=ranked.score,
        breakdown=ranked.breakdown,
        badge=get_worker_badge(ranked.score),
        gig_score=calculate_gig_score(record.performance(), settings.gig_score),
        community_score=community_score(record.community),
        volunteer_score=volunteer_score(record.volunteering, now),
        achievements=[*record.badges, *newly_awarded],
    )


def export_leaderboard_json(entries: list[LeaderboardEntry]) -> str:
    """Export leaderboard entries as a JSON string."""
    data = [entry.model_dump(mode="json") for entry in entries]
    return json.dumps(data, indent=2)
