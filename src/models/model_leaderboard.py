"""Persisted leaderboard entities and ranking views."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.models.common import _new_id, _utc_now


class ScrapeStatus(str, Enum):
    """Outcome of one scraper execution."""

    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"


class AIModel(BaseModel):
    """An AI model tracked by the leaderboard."""

    id: str = Field(default_factory=_new_id)
    name: str = Field(description="Unique display name")
    vendor: str = Field(default="Unknown", description="Publisher of the model")
    release_date: date | None = Field(default=None)
    param_size: str | None = Field(default=None, description="Parameter count, e.g. '70B'")
    open_source: bool = Field(default=False)
    description: str | None = Field(default=None)
    access_url: str | None = Field(default=None)
    updated_at: datetime = Field(default_factory=_utc_now)


class Dimension(BaseModel):
    """A named evaluation axis with a ranking weight."""

    id: str = Field(default_factory=_new_id)
    name: str = Field(description="Unique, lower-case identifier")
    display_name: str = Field(description="Label shown to users")
    weight: float = Field(default=1.0, ge=0.0, description="Weight in composite ranking")
    description: str | None = Field(default=None)


class Score(BaseModel):
    """One append-only score row."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: str = Field(default_factory=_new_id)
    model_id: str
    dimension_id: str
    value: float
    source: str
    scraped_at: datetime


class ScrapeLog(BaseModel):
    """Audit entry written once per scraper execution."""

    id: str = Field(default_factory=_new_id)
    source: str
    status: ScrapeStatus
    error: str | None = Field(default=None)
    raw_data: str | None = Field(default=None, description="JSON of raw and processed records")
    started_at: datetime
    ended_at: datetime = Field(default_factory=_utc_now)


class ScoredModel(AIModel):
    """Model together with its latest score per dimension name."""

    scores: dict[str, float] = Field(
        default_factory=dict, description="Dimension name -> latest score"
    )


class RankedModel(ScoredModel):
    """Model placed on a leaderboard."""

    rank: int = Field(ge=1, description="1-based position")
    dimension_score: float | None = Field(
        default=None, description="Score used for ordering; None sorts last"
    )


@dataclass
class ScrapeResult:
    """Structured outcome of running one scraper through the pipeline."""

    source: str
    status: ScrapeStatus
    records_processed: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass
class LastUpdate:
    """When and from where the leaderboard was last refreshed."""

    ended_at: datetime
    source: str


@dataclass
class LeaderboardSnapshot:
    """Consistent read of models with latest scores, plus all dimensions."""

    models: list[ScoredModel]
    dimensions: list[Dimension]
