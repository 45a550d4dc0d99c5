"""Collapse repeated observations to the most recent one per key."""

import logging
from collections.abc import Iterable

from src.models.model_observation import ValidatedObservation

logger = logging.getLogger(__name__)


class Deduplicator:
    """Keep one observation per (model, dimension, source).

    The survivor of each group is the observation with the greatest
    ``scraped_at``. When two observations share the same ``scraped_at`` the
    first one seen is kept; callers must not rely on that tie-break.
    """

    def apply(self, records: Iterable[ValidatedObservation]) -> list[ValidatedObservation]:
        """Deduplicate validated observations.

        Args:
            records: Observations that passed validation.

        Returns:
            One observation per dedup key. Order is not significant.
        """
        latest: dict[tuple[str, str, str], ValidatedObservation] = {}
        total = 0

        for record in records:
            total += 1
            existing = latest.get(record.dedup_key)
            if existing is None or record.scraped_at > existing.scraped_at:
                latest[record.dedup_key] = record

        logger.info(f"Deduplicator: {total} -> {len(latest)} records")
        return list(latest.values())


def deduplicate(records: Iterable[ValidatedObservation]) -> list[ValidatedObservation]:
    """Deduplicate observations with a default Deduplicator."""
    return Deduplicator().apply(records)
