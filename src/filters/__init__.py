"""Validation and deduplication of scraped observations."""

from src.filters.deduplicator import Deduplicator, deduplicate
from src.filters.validator import Validator, validate

__all__ = ["Deduplicator", "Validator", "deduplicate", "validate"]
