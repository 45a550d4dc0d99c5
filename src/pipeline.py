"""Pipeline orchestration for one scraper run.

This module coordinates all steps of a single source's run:
1. Scrape raw observations (bounded by a timeout)
2. Validate (drop malformed records, normalize names)
3. Deduplicate (latest observation per model/dimension/source)
4. Persist the batch in one transaction

Every outcome is converted into a ScrapeResult. Failures are written to the
scrape log outside of any transaction and never propagate to the caller.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from src.consts import (
    DATABASE_WRITE_FAILED_PREFIX,
    NO_VALID_RECORDS_MESSAGE,
    SCRAPER_TIMEOUT_SECONDS,
)
from src.filters import Deduplicator, Validator
from src.ingestion.persistence_writer import PersistenceWriter, serialize_records
from src.models.common import _utc_now
from src.models.model_leaderboard import ScrapeLog, ScrapeResult, ScrapeStatus
from src.models.model_observation import RawObservation
from src.scrapers.base_scraper import Scraper
from src.storage.model_store.base import ModelStore

logger = logging.getLogger(__name__)

# Scraper tasks abandoned after a timeout, held until they finish
_abandoned: set[asyncio.Future] = set()


class ScrapePipeline:
    """Run scrapers through validation, deduplication and persistence."""

    def __init__(
        self,
        store: ModelStore,
        validator: Validator | None = None,
        deduplicator: Deduplicator | None = None,
        writer: PersistenceWriter | None = None,
        timeout: float = SCRAPER_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the pipeline.

        Args:
            store: Store receiving scores and scrape logs.
            validator: Record validator. Default instance if None.
            deduplicator: Record deduplicator. Default instance if None.
            writer: Transactional writer. Built on ``store`` if None.
            timeout: Seconds to wait for a scraper before giving up.
            clock: Source of run timestamps.
        """
        self.store = store
        self.validator = validator or Validator()
        self.deduplicator = deduplicator or Deduplicator()
        self.writer = writer or PersistenceWriter(store, clock=clock)
        self.timeout = timeout
        self.clock = clock

    async def _scrape_with_timeout(self, scraper: Scraper) -> list[RawObservation]:
        # shield() keeps wait_for from cancelling the scraper; a late result is dropped.
        task = asyncio.ensure_future(scraper.scrape())
        try:
            result = await asyncio.wait_for(asyncio.shield(task), timeout=self.timeout)
        except TimeoutError:
            _abandoned.add(task)
            task.add_done_callback(_discard_result)
            raise
        return list(result)

    def _error_result(self, scraper: Scraper, message: str) -> ScrapeResult:
        return ScrapeResult(
            source=scraper.source,
            status=ScrapeStatus.ERROR,
            records_processed=0,
            errors=[message],
        )

    def _raw_data(self, raw: list) -> str | None:
        """Serialize the scraped batch for an error log, or None if it can't be."""
        try:
            return serialize_records(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Could not serialize raw batch for scrape log: {e}")
            return None

    def _log_failure(
        self,
        source: str,
        message: str,
        started_at: datetime,
        raw_data: str | None = None,
    ) -> None:
        """Write an error scrape log. Best effort: a failing write is only logged."""
        try:
            self.store.insert_scrape_log(
                ScrapeLog(
                    source=source,
                    status=ScrapeStatus.ERROR,
                    error=message,
                    raw_data=raw_data,
                    started_at=started_at,
                    ended_at=self.clock(),
                )
            )
        except Exception:
            logger.exception(f"{source}: failed to write error scrape log")

    async def run(self, scraper: Scraper) -> ScrapeResult:
        """Run one scraper end to end.

        Args:
            scraper: Source to run.

        Returns:
            Outcome of the run. Never raises for source or storage failures.
        """
        started_at = self.clock()
        logger.info(f"Starting scrape for source: {scraper.source} ({scraper.name})")

        # 1. Scrape
        try:
            raw = await self._scrape_with_timeout(scraper)
        except TimeoutError:
            message = f'Scraper "{scraper.name}" timed out after {self.timeout}s'
            logger.error(message)
            self._log_failure(scraper.source, message, started_at)
            return self._error_result(scraper, message)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.error(f"Scraper {scraper.name!r} failed: {message}")
            self._log_failure(scraper.source, message, started_at)
            return self._error_result(scraper, message)

        # 2. Validate, 3. Deduplicate
        try:
            validated = self.validator.apply(raw)
            deduped = self.deduplicator.apply(validated)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.exception(f"{scraper.source}: processing failed: {message}")
            self._log_failure(
                scraper.source, message, started_at, raw_data=self._raw_data(raw)
            )
            return self._error_result(scraper, message)

        if not deduped:
            logger.warning(f"{scraper.source}: {NO_VALID_RECORDS_MESSAGE}")
            self._log_failure(
                scraper.source,
                NO_VALID_RECORDS_MESSAGE,
                started_at,
                raw_data=self._raw_data(raw),
            )
            return self._error_result(scraper, NO_VALID_RECORDS_MESSAGE)

        # 4. Persist
        try:
            self.writer.write(scraper.source, raw, deduped, started_at)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.error(f"{scraper.source}: {DATABASE_WRITE_FAILED_PREFIX}: {message}")
            self._log_failure(
                scraper.source, message, started_at, raw_data=self._raw_data(raw)
            )
            return self._error_result(scraper, f"{DATABASE_WRITE_FAILED_PREFIX}: {message}")

        elapsed = (self.clock() - started_at).total_seconds()
        logger.info(
            f"Finished {scraper.source}: {len(deduped)} records processed in {elapsed:.2f}s"
        )
        return ScrapeResult(
            source=scraper.source,
            status=ScrapeStatus.SUCCESS,
            records_processed=len(deduped),
        )


def _discard_result(task: asyncio.Future) -> None:
    _abandoned.discard(task)
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug(f"Abandoned scraper finished with error after timeout: {error}")
    else:
        logger.debug("Abandoned scraper finished after timeout; result discarded")

