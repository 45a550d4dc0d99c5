"""Transactional persistence of a deduplicated observation batch."""

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from src.models.common import _utc_now
from src.models.model_leaderboard import ScrapeLog, ScrapeStatus
from src.models.model_observation import RawObservation, ValidatedObservation
from src.storage.model_store.base import ModelStore

logger = logging.getLogger(__name__)


def _record_to_json(record: Any) -> Any:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json")
    if isinstance(record, Mapping):
        return dict(record)
    return record


def serialize_records(records: Sequence[Any]) -> str:
    """Serialize observations (models or plain mappings) to a JSON array."""
    return json.dumps([_record_to_json(r) for r in records], default=str)


class PersistenceWriter:
    """Apply one scraper run's batch to the store atomically.

    For every record the model is upserted by name, the dimension is looked up
    and a new score row is appended. Records whose dimension is unknown are
    skipped without error. A success log closes the transaction. If anything
    raises, the whole run is rolled back and the exception propagates so the
    caller can log the failure outside the transaction.
    """

    def __init__(self, store: ModelStore, clock: Callable[[], datetime] = _utc_now):
        self.store = store
        self.clock = clock

    def write(
        self,
        source: str,
        raw: Sequence[RawObservation | Mapping[str, Any]],
        processed: Sequence[ValidatedObservation],
        started_at: datetime,
    ) -> int:
        """Persist a deduplicated batch.

        Args:
            source: Data source name recorded on the scrape log.
            raw: Observations exactly as the scraper returned them.
            processed: Validated, deduplicated observations to persist.
            started_at: When the scraper run started.

        Returns:
            Number of score rows written.
        """
        written = 0
        skipped = 0

        with self.store.transaction() as tx:
            for record in processed:
                model = tx.upsert_model_by_name(
                    record.model_name.strip(),
                    record.model_meta,
                    now=self.clock(),
                )

                dimension = tx.find_dimension_by_name(record.normalized_dimension_name)
                if dimension is None:
                    skipped += 1
                    logger.debug(
                        f"Skipping {record.model_name!r}: unknown dimension "
                        f"{record.normalized_dimension_name!r}"
                    )
                    continue

                tx.insert_score(
                    model_id=model.id,
                    dimension_id=dimension.id,
                    value=record.score,
                    source=record.source,
                    scraped_at=record.scraped_at,
                )
                written += 1

            raw_data = json.dumps(
                {
                    "raw": [_record_to_json(r) for r in raw],
                    "processed": [_record_to_json(r) for r in processed],
                },
                default=str,
            )
            tx.insert_scrape_log(
                ScrapeLog(
                    source=source,
                    status=ScrapeStatus.SUCCESS,
                    raw_data=raw_data,
                    started_at=started_at,
                    ended_at=self.clock(),
                )
            )

        if skipped:
            logger.warning(f"{source}: skipped {skipped} records with unknown dimensions")
        logger.info(f"{source}: wrote {written} scores from {len(processed)} records")
        return written
