"""Scrapers serving observations from bundled, static datasets."""

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from src.consts import DIMENSION_NAMES
from src.models.common import _utc_now
from src.models.model_observation import ModelMeta, RawObservation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelEntry:
    """One model row in a static dataset."""

    name: str
    vendor: str
    release_date: str
    param_size: str
    open_source: bool
    scores: dict[str, float] = field(default_factory=dict)
    description: str | None = None
    access_url: str | None = None

    def meta(self) -> ModelMeta:
        return ModelMeta(
            vendor=self.vendor,
            release_date=date.fromisoformat(self.release_date),
            param_size=self.param_size,
            open_source=self.open_source,
            description=self.description,
            access_url=self.access_url,
        )


# (entry, dimension, score, position in dataset, scraped_at) -> payload dict
PayloadBuilder = Callable[[ModelEntry, str, float, int, datetime], dict[str, Any]]


class StaticScraper:
    """Scraper emitting one observation per (model, dimension) in a dataset.

    All observations of one ``scrape()`` call share a single ``scraped_at``.
    """

    def __init__(
        self,
        name: str,
        source: str,
        entries: Sequence[ModelEntry],
        payload_builder: PayloadBuilder,
        dimensions: Sequence[str] = DIMENSION_NAMES,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.name = name
        self.source = source
        self.entries = list(entries)
        self.payload_builder = payload_builder
        self.dimensions = list(dimensions)
        self.clock = clock

    async def scrape(self) -> list[RawObservation]:
        scraped_at = self.clock()
        results: list[RawObservation] = []

        for position, entry in enumerate(self.entries):
            meta = entry.meta()
            for dimension in self.dimensions:
                score = entry.scores.get(dimension)
                if score is None:
                    continue
                payload = self.payload_builder(entry, dimension, score, position, scraped_at)
                results.append(
                    RawObservation(
                        source=self.source,
                        model_name=entry.name,
                        dimension_name=dimension,
                        score=score,
                        scraped_at=scraped_at,
                        raw_payload=json.dumps(payload, ensure_ascii=False),
                        model_meta=meta,
                    )
                )

        logger.info(f"{self.name}: produced {len(results)} observations")
        return results
