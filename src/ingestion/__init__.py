"""Persistence and recurring triggering of scraper runs."""

from src.ingestion.persistence_writer import PersistenceWriter, serialize_records
from src.ingestion.recurring import RecurringTrigger

__all__ = ["PersistenceWriter", "RecurringTrigger", "serialize_records"]
