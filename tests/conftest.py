"""Pytest configuration and fixtures."""

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from src.consts import DEFAULT_DIMENSIONS
from src.models.model_leaderboard import Dimension, ScoredModel
from src.models.model_observation import ModelMeta, RawObservation
from src.storage import InMemoryModelStore

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


class FakeScraper:
    """Scraper returning canned observations, raising, or never finishing."""

    def __init__(
        self,
        name: str = "fake",
        source: str = "Fake Source",
        records: list | None = None,
        error: Exception | None = None,
        hang: bool = False,
    ):
        self.name = name
        self.source = source
        self.records = records or []
        self.error = error
        self.hang = hang
        self.calls = 0

    async def scrape(self) -> list:
        self.calls += 1
        if self.hang:
            await asyncio.Event().wait()
        if self.error is not None:
            raise self.error
        return list(self.records)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock advancing one second per call, starting at FIXED_NOW."""
    ticks = iter(range(1_000_000))
    return lambda: FIXED_NOW + timedelta(seconds=next(ticks))


@pytest.fixture
def store() -> InMemoryModelStore:
    """In-memory store seeded with the default dimensions."""
    store = InMemoryModelStore()
    for dimension in DEFAULT_DIMENSIONS:
        store.upsert_dimension(dimension["name"], dimension["display_name"])
    return store


@pytest.fixture
def make_observation() -> Callable[..., RawObservation]:
    """Factory for RawObservation with sensible defaults."""

    def _make(
        model_name: str = "GPT-4",
        dimension_name: str = "coding",
        score: float = 90.0,
        source: str = "lmsys",
        scraped_at: datetime = FIXED_NOW,
        raw_payload: str = "{}",
        model_meta: ModelMeta | None = None,
    ) -> RawObservation:
        return RawObservation(
            source=source,
            model_name=model_name,
            dimension_name=dimension_name,
            score=score,
            scraped_at=scraped_at,
            raw_payload=raw_payload,
            model_meta=model_meta,
        )

    return _make


@pytest.fixture
def fake_scraper() -> type[FakeScraper]:
    return FakeScraper


@pytest.fixture
def three_dimensions() -> list[Dimension]:
    return [
        Dimension(name="coding", display_name="Coding", weight=2.0),
        Dimension(name="reasoning", display_name="Reasoning", weight=3.0),
        Dimension(name="math", display_name="Math", weight=1.0),
    ]


@pytest.fixture
def scored_models() -> list[ScoredModel]:
    """Four models with partial score coverage, in a fixed input order."""
    return [
        ScoredModel(name="alpha", scores={"coding": 90.0, "reasoning": 95.0, "math": 88.0}),
        ScoredModel(name="beta", scores={"coding": 95.0}),
        ScoredModel(name="gamma", scores={}),
        ScoredModel(name="delta", scores={"coding": 90.0, "math": 70.0}),
    ]
