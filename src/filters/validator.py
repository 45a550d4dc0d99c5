"""Structural validation of raw observations.

Runs immediately after a scrape, BEFORE deduplication and persistence, so that
nothing malformed from a third-party source can reach the store. Invalid
records are dropped silently; the only visible effect is a smaller
``records_processed`` count.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from src.models.model_observation import ObservationInput, RawObservation, ValidatedObservation

logger = logging.getLogger(__name__)


class Validator:
    """Drop structurally invalid observations and normalize identifiers."""

    def apply(
        self, records: Iterable[RawObservation | Mapping[str, Any]]
    ) -> list[ValidatedObservation]:
        """Validate raw observations.

        Args:
            records: Observations as emitted by a scraper. Plain mappings with
                snake_case or camelCase keys are accepted as well.

        Returns:
            Observations that passed validation, with normalized names added.
        """
        validated: list[ValidatedObservation] = []
        total = 0

        for record in records:
            total += 1
            observation = self._validate_one(record)
            if observation is None:
                logger.debug(f"Validator dropped record: {record!r}")
                continue
            validated.append(observation)

        logger.info(
            f"Validator: {len(validated)}/{total} records passed "
            f"({total - len(validated)} dropped)"
        )
        return validated

    def _validate_one(self, record: Any) -> ValidatedObservation | None:
        if isinstance(record, BaseModel):
            record = record.model_dump()
        elif isinstance(record, Mapping):
            record = dict(record)

        try:
            fields = ObservationInput.model_validate(record)
        except ValidationError as e:
            logger.debug(f"Invalid observation: {e.error_count()} error(s)")
            return None

        return ValidatedObservation(
            source=fields.source,
            model_name=fields.model_name,
            dimension_name=fields.dimension_name,
            score=fields.score,
            scraped_at=fields.scraped_at,
            raw_payload=fields.raw_payload,
            model_meta=fields.model_meta,
            normalized_model_name=fields.model_name.strip().lower(),
            normalized_dimension_name=fields.dimension_name.strip().lower(),
        )


def validate(
    records: Iterable[RawObservation | Mapping[str, Any]],
) -> list[ValidatedObservation]:
    """Validate raw observations with a default Validator."""
    return Validator().apply(records)
