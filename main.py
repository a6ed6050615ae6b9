"""CLI entry point for worker scoring and ranking."""

import argparse
import logging
import sys
from datetime import datetime

import yaml

from gigrank.core.config import Settings
from gigrank.core.schemas import ensure_utc, utc_now
from gigrank.pipeline.leaderboard import build_leaderboard, export_leaderboard_json
from gigrank.roster.schema import Roster
from gigrank.scoring.gig_score import gig_score_breakdown
from gigrank.scoring.hot import rank_posts

logger = logging.getLogger(__name__)


def _timestamp(value: str) -> datetime:
    try:
        return ensure_utc(datetime.fromisoformat(value))
    except ValueError as e:
        msg = f"invalid ISO timestamp: {value!r}"
        raise argparse.ArgumentTypeError(msg) from e


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--roster",
        default="config/roster.yaml",
        help="Path to roster YAML file (default: config/roster.yaml)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file (default: built-in settings)",
    )
    parser.add_argument(
        "--now",
        type=_timestamp,
        default=None,
        help="Reference time as ISO timestamp (default: current UTC time)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Worker scoring - GigScore, marketplace ranking and feed ordering",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- rank subcommand ---
    rank_parser = subparsers.add_parser("rank", help="Print the worker leaderboard")
    _add_common_args(rank_parser)
    rank_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export leaderboard to format (json)",
    )

    # --- score subcommand ---
    score_parser = subparsers.add_parser("score", help="Print GigScore breakdown per worker")
    _add_common_args(score_parser)

    # --- feed subcommand ---
    feed_parser = subparsers.add_parser("feed", help="Print community posts by hot score")
    _add_common_args(feed_parser)

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str | None) -> Settings:
    if path is None:
        return Settings()
    return Settings.from_yaml(path)


def cmd_rank(args: argparse.Namespace, roster: Roster, settings: Settings) -> None:
    """Handle rank subcommand."""
    entries = build_leaderboard(roster.workers, settings, args.now)

    if args.export == "json":
        print(export_leaderboard_json(entries))
        return

    if not entries:
        print("No eligible workers.")
        return

    for e in entries:
        label = e.name or e.worker_id
        print(f"{e.rank:>3}. {label} ({e.worker_id})  score {e.score:.2f}  "
              f"[{e.badge.label}]  GigScore {e.gig_score:.1f}")
        if e.achievements:
            print(f"     Achievements: {', '.join(e.achievements)}")


def cmd_score(args: argparse.Namespace, roster: Roster, settings: Settings) -> None:
    """Handle score subcommand."""
    for worker in roster.workers:
        b = gig_score_breakdown(worker.performance(), settings.gig_score)
        label = worker.name or worker.worker_id
        print(f"{label} ({worker.worker_id}): GigScore {b.total:.1f}")
        print(f"  review {b.review_score:.1f} | jobs {b.jobs_score:.1f} | "
              f"response {b.response_score:.1f} | cancellation {b.cancellation_score:.1f} | "
              f"repeat {b.repeat_score:.1f}")


def cmd_feed(args: argparse.Namespace, roster: Roster, settings: Settings) -> None:
    """Handle feed subcommand."""
    ranked = rank_posts(roster.posts, args.now)
    if not ranked:
        print("No posts.")
        return
    for i, post in enumerate(ranked, start=1):
        print(f"{i:>3}. {post.hot_score:.3f}  {post.title or post.post_id} ({post.post_id})")


_COMMANDS = {
    "rank": cmd_rank,
    "score": cmd_score,
    "feed": cmd_feed,
}


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
        roster = Roster.from_yaml(args.roster)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.now is None:
        args.now = utc_now()
    logger.debug("Reference time: %s", args.now.isoformat())

    _COMMANDS[args.command](args, roster, settings)


if __name__ == "__main__":
    main()
