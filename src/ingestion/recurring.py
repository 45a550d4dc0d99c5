"""Fixed-interval recurring trigger backed by APScheduler."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from src.models.common import _utc_now

logger = logging.getLogger(__name__)

SCRAPE_JOB_ID = "scrape_all_sources"


class RecurringTrigger:
    """Invoke an async callback every ``interval`` seconds until stopped.

    The first run happens one interval after ``start()``. A failing run is
    logged and later runs still happen. Calling ``start()`` again replaces the
    scheduled job, and ``stop()`` is safe to call any number of times.
    """

    def __init__(
        self,
        callback: Callable[[], Awaitable[object]],
        interval: float,
        clock: Callable[[], datetime] = _utc_now,
        job_id: str = SCRAPE_JOB_ID,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")

        self._callback = callback
        self.interval = interval
        self.job_id = job_id
        self._clock = clock
        self._scheduler: AsyncIOScheduler | None = None
        self._stopped = asyncio.Event()
        self.runs = 0
        self.last_run_at: datetime | None = None

    @property
    def is_running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    @property
    def next_run_at(self) -> datetime | None:
        if not self.is_running:
            return None
        job = self._scheduler.get_job(self.job_id)
        return job.next_run_time if job else None

    def start(self) -> None:
        """Schedule the job on the running event loop, replacing any previous one."""
        if not self.is_running:
            self._scheduler = AsyncIOScheduler(
                event_loop=asyncio.get_running_loop(), timezone=UTC
            )
            self._scheduler.start()
        self._stopped.clear()
        self._scheduler.add_job(
            self._run,
            IntervalTrigger(seconds=self.interval, timezone=UTC),
            id=self.job_id,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        logger.info(f"Recurring trigger started (every {self.interval:g}s)")

    def stop(self) -> None:
        """Shut the scheduler down if it is running."""
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Recurring trigger stopped")
        self._scheduler = None
        self._stopped.set()

    async def wait(self) -> None:
        """Block until ``stop()`` is called."""
        if not self.is_running:
            return
        await self._stopped.wait()

    async def _run(self) -> None:
        self.last_run_at = self._clock()
        self.runs += 1
        logger.info(f"Recurring run #{self.runs} triggered")
        try:
            await self._callback()
        except Exception as e:
            logger.exception(f"Scheduled run failed: {e}")
