"""In-memory model store."""

from src.models.model_storage import LeaderboardFile
from src.storage.model_store.base import ModelStore


class InMemoryModelStore(ModelStore):
    """Model store keeping its state in process memory.

    Useful for tests and one-off runs. Nothing survives the process.
    """

    def __init__(self, state: LeaderboardFile | None = None):
        super().__init__()
        self._state = state if state is not None else LeaderboardFile()

    def _load_state(self) -> LeaderboardFile:
        return self._state

    def _save_state(self, state: LeaderboardFile) -> None:
        self._state = state
