"""Model store backends."""

from src.storage.model_store.base import ModelStore, StoreTransaction, build_snapshot
from src.storage.model_store.file_store import FileModelStore
from src.storage.model_store.memory_store import InMemoryModelStore

__all__ = [
    "FileModelStore",
    "InMemoryModelStore",
    "ModelStore",
    "StoreTransaction",
    "build_snapshot",
]
