"""Artificial Analysis API scraper.

Fetches model evaluations from https://artificialanalysis.ai (documented at
https://artificialanalysis.ai/documentation). Requires an API key in the
ARTIFICIAL_ANALYSIS_API_KEY environment variable.

Each dimension maps to one preferred metric so that a model never yields two
observations for the same dimension from this source. Failures raise and are
handled by the scheduler; there is no retry or rate limiting here.
"""

import json
import logging
import os
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx

from src.consts import (
    ARTIFICIAL_ANALYSIS_API_KEY_ENV,
    ARTIFICIAL_ANALYSIS_API_URL,
    ARTIFICIAL_ANALYSIS_OPEN_SOURCE_CREATORS,
    ARTIFICIAL_ANALYSIS_PREFERRED_METRICS,
)
from src.errors import ScraperError
from src.models.common import _utc_now
from src.models.model_observation import ModelMeta, RawObservation

logger = logging.getLogger(__name__)


def normalize_score(raw_score: float) -> float:
    """Scale ratios (0-1) to percentages and round to one decimal."""
    score = raw_score * 100 if raw_score <= 1 else raw_score
    return round(score, 1)


def is_open_source(creator_slug: str) -> bool:
    """Guess whether a creator publishes open weights."""
    return creator_slug in ARTIFICIAL_ANALYSIS_OPEN_SOURCE_CREATORS


class ArtificialAnalysisScraper:
    """Scraper for the Artificial Analysis LLM models endpoint."""

    name = "artificial-analysis"
    source = "Artificial Analysis"

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str = ARTIFICIAL_ANALYSIS_API_URL,
        client: httpx.AsyncClient | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the scraper.

        Args:
            api_key: API key. None = read from env (ARTIFICIAL_ANALYSIS_API_KEY)
                at scrape time.
            api_url: Models endpoint URL.
            client: Optional HTTP client; when given, the caller owns it.
            clock: Source of the scrape timestamp.
        """
        self.api_key = api_key
        self.api_url = api_url
        self.clock = clock
        self._client = client
        self._owns_client = client is None

    def _resolve_api_key(self) -> str:
        api_key = self.api_key or os.getenv(ARTIFICIAL_ANALYSIS_API_KEY_ENV, "").strip()
        if not api_key:
            raise ScraperError(
                f"Missing {ARTIFICIAL_ANALYSIS_API_KEY_ENV} environment variable"
            )
        return api_key

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(30.0),
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this scraper created it."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def _fetch_models(self) -> list[dict[str, Any]]:
        """Fetch the raw model list.

        Raises:
            ScraperError: On non-2xx responses or an unexpected payload shape.
        """
        client = await self._get_client()
        response = await client.get(self.api_url, headers={"x-api-key": self._resolve_api_key()})

        if response.status_code >= 400:
            raise ScraperError(
                f"Artificial Analysis API request failed: "
                f"{response.status_code} {response.reason_phrase}"
            )

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise ScraperError(f"Artificial Analysis API returned invalid JSON: {e}") from e

        models = data.get("data") if isinstance(data, dict) else None
        if not isinstance(models, list):
            raise ScraperError("Artificial Analysis API response has no 'data' list")
        return models

    def _to_observations(
        self, model: dict[str, Any], scraped_at: datetime
    ) -> list[RawObservation]:
        evaluations = model.get("evaluations")
        if not evaluations:
            return []

        creator = model.get("model_creator") or {}
        meta = ModelMeta(
            vendor=creator.get("name"),
            open_source=is_open_source(creator.get("slug", "")),
        )

        observations = []
        for dimension, metric in ARTIFICIAL_ANALYSIS_PREFERRED_METRICS.items():
            raw_score = evaluations.get(metric)
            if raw_score is None:
                continue

            payload = {
                "model_id": model.get("id"),
                "model_name": model.get("name"),
                "creator": creator.get("name"),
                "metric": metric,
                "raw_score": raw_score,
                "pricing": model.get("pricing"),
            }
            observations.append(
                RawObservation(
                    source=self.source,
                    model_name=model.get("name") or "",
                    dimension_name=dimension,
                    score=normalize_score(raw_score),
                    scraped_at=scraped_at,
                    raw_payload=json.dumps(payload),
                    model_meta=meta,
                )
            )
        return observations

    async def scrape(self) -> list[RawObservation]:
        try:
            models = await self._fetch_models()
        finally:
            await self.close()

        scraped_at = self.clock()
        results: list[RawObservation] = []
        for model in models:
            results.extend(self._to_observations(model, scraped_at))

        logger.info(
            f"Artificial Analysis: {len(results)} observations from {len(models)} models"
        )
        return results
