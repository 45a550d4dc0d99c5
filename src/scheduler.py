"""Scraper scheduler: registry of sources plus manual and recurring triggers."""

import logging
import os
from collections.abc import Callable, Iterable
from datetime import datetime

from src.consts import (
    ARTIFICIAL_ANALYSIS_API_KEY_ENV,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_SCHEDULE_INTERVAL_SECONDS,
    SCRAPER_TIMEOUT_SECONDS,
)
from src.ingestion.recurring import RecurringTrigger
from src.models.common import _utc_now
from src.models.model_leaderboard import ScrapeLog, ScrapeResult
from src.pipeline import ScrapePipeline
from src.scrapers import ArtificialAnalysisScraper, Scraper, create_builtin_scraper
from src.storage.model_store.base import ModelStore

logger = logging.getLogger(__name__)


class ScraperScheduler:
    """Run registered scrapers on demand or on a fixed interval.

    Sources run one after another; each is executed by a ScrapePipeline which
    turns every outcome into a ScrapeResult, so one failing source never
    stops the rest.
    """

    def __init__(
        self,
        store: ModelStore,
        scrapers: Iterable[Scraper] = (),
        pipeline: ScrapePipeline | None = None,
        timeout: float = SCRAPER_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the scheduler.

        Args:
            store: Store shared by all runs.
            scrapers: Initial sources, run in this order.
            pipeline: Pipeline executing each run. Built on ``store`` if None.
            timeout: Per-scraper timeout used when building the pipeline.
            clock: Clock for run timestamps.
        """
        self.store = store
        self.pipeline = pipeline or ScrapePipeline(store, timeout=timeout, clock=clock)
        self._scrapers: list[Scraper] = list(scrapers)
        self._clock = clock
        self._trigger: RecurringTrigger | None = None

    @property
    def scrapers(self) -> list[Scraper]:
        return list(self._scrapers)

    @property
    def is_running(self) -> bool:
        return self._trigger is not None and self._trigger.is_running

    @property
    def trigger(self) -> RecurringTrigger | None:
        return self._trigger

    def register(self, scraper: Scraper) -> None:
        """Add a source; it runs after the ones already registered."""
        self._scrapers.append(scraper)
        logger.debug(f"Registered scraper {scraper.name!r} ({scraper.source})")

    async def run_now(self, name: str | None = None) -> list[ScrapeResult]:
        """Run one named scraper, or all of them, right away.

        Args:
            name: Scraper name. None = run every registered scraper.

        Returns:
            One result per scraper run, in registration order. Empty when no
            scraper matches ``name``.
        """
        targets = [s for s in self._scrapers if name is None or s.name == name]
        if not targets:
            logger.warning(f"No scraper registered under name {name!r}")
            return []

        results = []
        for scraper in targets:
            results.append(await self.pipeline.run(scraper))

        failed = sum(1 for r in results if r.errors)
        logger.info(f"Run complete: {len(results)} sources, {failed} failed")
        return results

    def history(self, limit: int = DEFAULT_HISTORY_LIMIT) -> list[ScrapeLog]:
        """Most recent scrape logs, newest first."""
        return self.store.list_scrape_logs(limit=limit)

    def start(self, interval: float | None = None) -> RecurringTrigger:
        """Start the recurring trigger, replacing any running one.

        Must be called from within a running event loop.

        Args:
            interval: Seconds between runs. None = DEFAULT_SCHEDULE_INTERVAL_SECONDS.
        """
        self.stop()
        self._trigger = RecurringTrigger(
            self.run_now,
            DEFAULT_SCHEDULE_INTERVAL_SECONDS if interval is None else interval,
            clock=self._clock,
        )
        self._trigger.start()
        return self._trigger

    def stop(self) -> None:
        """Stop the recurring trigger. No-op when none is running."""
        if self._trigger is not None:
            self._trigger.stop()
            self._trigger = None


def create_default_scheduler(store: ModelStore, **kwargs) -> ScraperScheduler:
    """Build a scheduler with the default sources.

    The Artificial Analysis scraper is registered first when
    ARTIFICIAL_ANALYSIS_API_KEY is set; the built-in dataset always follows.
    """
    scrapers: list[Scraper] = []
    if os.getenv(ARTIFICIAL_ANALYSIS_API_KEY_ENV, "").strip():
        scrapers.append(ArtificialAnalysisScraper())
    scrapers.append(create_builtin_scraper())
    return ScraperScheduler(store, scrapers, **kwargs)
