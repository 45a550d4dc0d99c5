"""Storage file models for persisting leaderboard state."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.models.common import _utc_now
from src.models.model_leaderboard import AIModel, Dimension, Score, ScrapeLog


class LeaderboardFile(BaseModel):
    """Complete store contents, persisted as data/leaderboard.json.

    Models and dimensions are keyed by their unique name; dict order is
    creation order. Scores and scrape logs are append-only.
    """

    version: str = Field(default="1.0", description="Schema version for migrations")
    updated_at: datetime = Field(default_factory=_utc_now)
    models: dict[str, AIModel] = Field(default_factory=dict)
    dimensions: dict[str, Dimension] = Field(default_factory=dict)
    scores: list[Score] = Field(default_factory=list)
    scrape_logs: list[ScrapeLog] = Field(default_factory=list)
