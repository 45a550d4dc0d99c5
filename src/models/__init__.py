"""Pydantic models for the model leaderboard."""

from src.models.model_leaderboard import (
    AIModel,
    Dimension,
    LastUpdate,
    LeaderboardSnapshot,
    RankedModel,
    Score,
    ScoredModel,
    ScrapeLog,
    ScrapeResult,
    ScrapeStatus,
)
from src.models.model_observation import (
    ModelMeta,
    ObservationInput,
    RawObservation,
    ValidatedObservation,
)
from src.models.model_storage import LeaderboardFile

__all__ = [
    # Observation models
    "ModelMeta",
    "ObservationInput",
    "RawObservation",
    "ValidatedObservation",
    # Persisted entities
    "AIModel",
    "Dimension",
    "Score",
    "ScrapeLog",
    "ScrapeStatus",
    # Views and results
    "LastUpdate",
    "LeaderboardSnapshot",
    "RankedModel",
    "ScoredModel",
    "ScrapeResult",
    # Storage models
    "LeaderboardFile",
]
