"""Tests for profile achievement badges."""

from gigrank.scoring.badges import award_profile_badges


class TestAwardProfileBadges:
    def test_worker_with_three_modules(self) -> None:
        assert award_profile_badges(3, "worker") == [
            "safety_verified", "business_ready", "verified_identity",
        ]

    def test_two_modules_only_safety(self) -> None:
        assert award_profile_badges(2, "client") == ["safety_verified"]

    def test_nothing_earned(self) -> None:
        assert award_profile_badges(1, "client") == []

    def test_worker_role_alone(self) -> None:
        assert award_profile_badges(0, "worker") == ["verified_identity"]

    def test_held_badges_not_reawarded(self) -> None:
        held = ["safety_verified", "verified_identity"]
        assert award_profile_badges(5, "worker", held) == ["business_ready"]

    def test_all_held(self) -> None:
        held = ("safety_verified", "business_ready", "verified_identity")
        assert award_profile_badges(3, "worker", held) == []
