import uuid
from datetime import UTC, datetime


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


def _new_id() -> str:
    """Return a new opaque row identifier."""
    return uuid.uuid4().hex
