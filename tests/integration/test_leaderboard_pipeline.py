"""Integration test: roster file through leaderboard and CLI output."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from gigrank.core.config import LeaderboardConfig, Settings
from gigrank.pipeline.leaderboard import build_leaderboard, export_leaderboard_json
from gigrank.roster.schema import Roster, WorkerRecord
from main import main

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
NOW_ARG = "2026-10-19T12:00:00+00:00"
EXAMPLE_ROSTER = Path(__file__).parents[2] / "config" / "roster.example.yaml"

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def workers() -> list[WorkerRecord]:
    return Roster.from_yaml(EXAMPLE_ROSTER).workers


def _settings(**leaderboard: object) -> Settings:
    return Settings(leaderboard=LeaderboardConfig(**leaderboard))  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# build_leaderboard
# ---------------------------------------------------------------------------


class TestBuildLeaderboard:
    def test_order_and_ranks(self, workers: list[WorkerRecord]) -> None:
        entries = build_leaderboard(workers, now=NOW)
        assert [e.worker_id for e in entries] == ["w-ana", "w-ben", "w-cho"]
        assert [e.rank for e in entries] == [1, 2, 3]

    def test_top_worker_entry(self, workers: list[WorkerRecord]) -> None:
        top = build_leaderboard(workers, now=NOW)[0]
        assert top.name == "Ana Lima"
        assert top.score == pytest.approx(61.435, abs=1e-3)
        assert top.badge.label == "Top Rated"
        assert top.gig_score == 90.9
        assert top.community_score == 100
        assert top.volunteer_score == 50
        assert top.achievements == ["safety_verified", "business_ready", "verified_identity"]

    def test_scores_from_reviews_and_recency(self, workers: list[WorkerRecord]) -> None:
        entries = build_leaderboard(workers, now=NOW)
        ben, cho = entries[1], entries[2]
        # (2 + 2.5 * 4.5 * sqrt(2)) * 0.85 ** 6 + 3
        assert ben.score == pytest.approx(9.755, abs=1e-3)
        assert ben.badge.label == "New"
        # no engagement, default 60-minute response
        assert cho.score == pytest.approx(3.0)
        assert cho.breakdown.recency_score == pytest.approx(0.85)
        assert cho.community_score == 0
        assert cho.volunteer_score == 0

    def test_inactive_workers_filtered(self, workers: list[WorkerRecord]) -> None:
        entries = build_leaderboard(workers, _settings(max_weeks_inactive=4), NOW)
        assert [e.worker_id for e in entries] == ["w-ana", "w-cho"]
        assert [e.rank for e in entries] == [1, 2]

    def test_minimum_reviews_filtered(self, workers: list[WorkerRecord]) -> None:
        entries = build_leaderboard(workers, _settings(min_reviews=3), NOW)
        assert [e.worker_id for e in entries] == ["w-ana"]

    def test_limit(self, workers: list[WorkerRecord]) -> None:
        entries = build_leaderboard(workers, _settings(limit=2), NOW)
        assert [e.worker_id for e in entries] == ["w-ana", "w-ben"]

    def test_duplicate_ids_keep_first(self, workers: list[WorkerRecord]) -> None:
        duplicate = workers[2].model_copy(update={"name": "Impostor"})
        entries = build_leaderboard([*workers, duplicate], now=NOW)
        assert len(entries) == 3
        assert entries[2].name == "Cho Park"

    def test_empty_roster(self) -> None:
        assert build_leaderboard([], now=NOW) == []

    def test_json_export(self, workers: list[WorkerRecord]) -> None:
        data = json.loads(export_leaderboard_json(build_leaderboard(workers, now=NOW)))
        assert len(data) == 3
        assert data[0]["worker_id"] == "w-ana"
        assert data[0]["badge"] == {"label": "Top Rated", "variant": "default"}
        assert set(data[0]["breakdown"]) == {
            "like_score", "rating_score", "recency_score", "response_score",
        }


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class TestCli:
    def test_rank_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["rank", "--roster", str(EXAMPLE_ROSTER), "--now", NOW_ARG])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].startswith("  1. Ana Lima (w-ana)")
        assert "[Top Rated]" in lines[0]
        assert "GigScore 90.9" in lines[0]
        assert "Achievements: safety_verified, business_ready, verified_identity" in out

    def test_rank_json_export(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["rank", "--roster", str(EXAMPLE_ROSTER), "--now", NOW_ARG, "--export", "json"])
        data = json.loads(capsys.readouterr().out)
        assert [d["worker_id"] for d in data] == ["w-ana", "w-ben", "w-cho"]

    def test_rank_with_settings_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        cfg = tmp_path / "settings.yaml"
        cfg.write_text("leaderboard:\n  min_reviews: 20\n")
        main(["rank", "--roster", str(EXAMPLE_ROSTER), "--config", str(cfg), "--now", NOW_ARG])
        assert capsys.readouterr().out.strip() == "No eligible workers."

    def test_score_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["score", "--roster", str(EXAMPLE_ROSTER), "--now", NOW_ARG])
        out = capsys.readouterr().out
        assert "Ana Lima (w-ana): GigScore 90.9" in out
        assert "Cho Park (w-cho): GigScore" in out

    def test_feed_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["feed", "--roster", str(EXAMPLE_ROSTER), "--now", NOW_ARG])
        lines = capsys.readouterr().out.splitlines()
        assert "(p-1)" in lines[0]
        assert "(p-2)" in lines[1]

    def test_missing_roster_exits(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["rank", "--roster", str(tmp_path / "missing.yaml")])
        assert exc.value.code == 1
        assert "Roster file not found" in capsys.readouterr().err

    def test_invalid_settings_exits(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        cfg = tmp_path / "settings.yaml"
        cfg.write_text("gig_score:\n  review: 0.9\n")
        with pytest.raises(SystemExit) as exc:
            main(["rank", "--roster", str(EXAMPLE_ROSTER), "--config", str(cfg)])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_bad_now_rejected(self) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["rank", "--roster", str(EXAMPLE_ROSTER), "--now", "yesterday"])
        assert exc.value.code == 2
