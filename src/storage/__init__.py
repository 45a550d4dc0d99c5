"""Storage backends for persisting leaderboard data.

This module provides:
- ModelStore: Abstract base class with transactional unit-of-work semantics
- InMemoryModelStore: Process-local store
- FileModelStore: JSON file store with atomic commits
"""

from src.storage.model_store import (
    FileModelStore,
    InMemoryModelStore,
    ModelStore,
    StoreTransaction,
)

__all__ = [
    "FileModelStore",
    "InMemoryModelStore",
    "ModelStore",
    "StoreTransaction",
]
