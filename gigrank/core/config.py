"""Configuration models and YAML loader for worker scoring."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator

_WEIGHT_TOLERANCE = 1e-6


class GigScoreWeights(BaseModel):
    """Weights of the five GigScore sub-scores. Must sum to 1.0."""

    review: float = Field(default=0.40, ge=0.0, le=1.0)
    jobs: float = Field(default=0.25, ge=0.0, le=1.0)
    response: float = Field(default=0.15, ge=0.0, le=1.0)
    cancellation: float = Field(default=0.10, ge=0.0, le=1.0)
    repeat: float = Field(default=0.10, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def weights_sum_to_one(self) -> "GigScoreWeights":
        total = self.review + self.jobs + self.response + self.cancellation + self.repeat
        if abs(total - 1.0) > _WEIGHT_TOLERANCE:
            msg = f"gig_score weights must sum to 1.0, got {total:.4f}"
            raise ValueError(msg)
        return self


class RankingConfig(BaseModel):
    """Tunable constants of the engagement ranking."""

    like_weight: float = Field(default=1.0, ge=0.0)
    rating_weight: float = Field(default=2.5, ge=0.0)
    recency_decay: float = Field(default=0.85, gt=0.0, le=1.0)


class LeaderboardConfig(BaseModel):
    """Roster filtering and output size for the leaderboard."""

    min_reviews: int = Field(default=0, ge=0)
    max_weeks_inactive: int | None = Field(default=None, ge=0)
    limit: int | None = Field(default=None, ge=1)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    gig_score: GigScoreWeights = Field(default_factory=GigScoreWeights)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    leaderboard: LeaderboardConfig = Field(default_factory=LeaderboardConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
