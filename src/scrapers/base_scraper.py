"""Scraper protocol defining the contract every data source must satisfy."""

from typing import Protocol, runtime_checkable

from src.models.model_observation import RawObservation


@runtime_checkable
class Scraper(Protocol):
    """Protocol for benchmark data sources.

    A scraper is identified by ``name`` (used to trigger it on demand) and
    reports observations under ``source``. Implementations are not trusted to
    bound their own running time or to validate their output; the scheduler
    enforces a timeout and the validator filters the results.
    """

    name: str
    source: str

    async def scrape(self) -> list[RawObservation]:
        """Collect observations from the source.

        Returns:
            Raw observations, possibly malformed or duplicated.
        """
        ...
