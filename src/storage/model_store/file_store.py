"""File-based model store.

Directory structure:
    data/
    └── leaderboard.json    # Models, dimensions, score history, scrape logs

Commits serialize the whole state to a temporary file next to the target and
move it into place with ``os.replace``, so readers see either the previous or
the new state and never a partial write.
"""

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from src.consts import DEFAULT_DATA_DIR, DEFAULT_STORE_FILENAME
from src.errors import StoreError
from src.models.model_storage import LeaderboardFile
from src.storage.model_store.base import ModelStore

logger = logging.getLogger(__name__)


class FileModelStore(ModelStore):
    """Model store persisted as a single JSON document."""

    def __init__(self, data_dir: Path | str = DEFAULT_DATA_DIR):
        """Initialize FileModelStore with data directory.

        Args:
            data_dir: Root directory for the store file.
        """
        super().__init__()
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / DEFAULT_STORE_FILENAME
        self._cached: LeaderboardFile | None = None
        self._cached_mtime: float | None = None

    def _load_state(self) -> LeaderboardFile:
        if not self.path.exists():
            return LeaderboardFile()

        mtime = self.path.stat().st_mtime
        if self._cached is not None and self._cached_mtime == mtime:
            return self._cached

        try:
            state = LeaderboardFile.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            raise StoreError(f"Failed to load {self.path}: {e}") from e

        self._cached = state
        self._cached_mtime = mtime
        return state

    def _save_state(self, state: LeaderboardFile) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(state.model_dump_json(indent=2))
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StoreError(f"Failed to write {self.path}: {e}") from e

        self._cached = state
        self._cached_mtime = self.path.stat().st_mtime
        logger.debug(
            f"Saved store: {self.path} ({len(state.models)} models, {len(state.scores)} scores)"
        )
