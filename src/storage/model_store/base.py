"""Abstract base class for leaderboard model stores.

A model store holds models, reference dimensions, the append-only score
history and the scrape audit log. All mutation goes through ``transaction()``,
which hands out a unit of work operating on a private copy of the state. The
copy is published only when the ``with`` block exits cleanly; any exception
discards it, so a failed run leaves no partial writes behind.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from src.errors import StoreError
from src.models.common import _utc_now
from src.models.model_leaderboard import (
    AIModel,
    Dimension,
    LastUpdate,
    LeaderboardSnapshot,
    Score,
    ScoredModel,
    ScrapeLog,
    ScrapeStatus,
)
from src.models.model_observation import ModelMeta
from src.models.model_storage import LeaderboardFile

logger = logging.getLogger(__name__)


class StoreTransaction:
    """Unit of work against one private copy of the store state."""

    def __init__(self, state: LeaderboardFile):
        self._state = state
        self._dimension_ids = {d.id for d in state.dimensions.values()}
        self._model_ids = {m.id for m in state.models.values()}

    def upsert_model_by_name(
        self,
        name: str,
        patch: ModelMeta | None = None,
        now: datetime | None = None,
    ) -> AIModel:
        """Create a model or merge reported metadata into an existing one.

        Args:
            name: Unique model name.
            patch: Metadata reported by the source. Only fields that are not
                None are applied; absent fields never clear stored values.
            now: Timestamp recorded as ``updated_at``.

        Returns:
            The created or updated model.
        """
        now = now or _utc_now()
        fields = patch.present_fields() if patch is not None else {}
        existing = self._state.models.get(name)

        if existing is None:
            model = AIModel(name=name, updated_at=now, **fields)
            self._state.models[name] = model
            self._model_ids.add(model.id)
            logger.debug(f"Created model {name!r}")
            return model

        model = existing.model_copy(update={**fields, "updated_at": now})
        self._state.models[name] = model
        return model

    def find_dimension_by_name(self, name: str) -> Dimension | None:
        """Look up a reference dimension by its normalized name."""
        return self._state.dimensions.get(name)

    def upsert_dimension(
        self,
        name: str,
        display_name: str,
        weight: float = 1.0,
        description: str | None = None,
    ) -> Dimension:
        """Create or update reference dimension data (seeding only)."""
        existing = self._state.dimensions.get(name)
        if existing is None:
            dimension = Dimension(
                name=name,
                display_name=display_name,
                weight=weight,
                description=description,
            )
            self._dimension_ids.add(dimension.id)
        else:
            dimension = existing.model_copy(
                update={"display_name": display_name, "weight": weight, "description": description}
            )
        self._state.dimensions[name] = dimension
        return dimension

    def insert_score(
        self,
        model_id: str,
        dimension_id: str,
        value: float,
        source: str,
        scraped_at: datetime,
    ) -> Score:
        """Append a score row.

        Raises:
            StoreError: If the model or dimension does not exist.
        """
        if model_id not in self._model_ids:
            raise StoreError(f"Unknown model id: {model_id}")
        if dimension_id not in self._dimension_ids:
            raise StoreError(f"Unknown dimension id: {dimension_id}")

        score = Score(
            model_id=model_id,
            dimension_id=dimension_id,
            value=value,
            source=source,
            scraped_at=scraped_at,
        )
        self._state.scores.append(score)
        return score

    def insert_scrape_log(self, entry: ScrapeLog) -> ScrapeLog:
        """Append a scrape audit entry."""
        if any(log.id == entry.id for log in self._state.scrape_logs):
            raise StoreError(f"Scrape log {entry.id} already exists")
        self._state.scrape_logs.append(entry)
        return entry


class ModelStore(ABC):
    """Abstract base class for model store implementations.

    Subclasses only decide where the state lives; transaction semantics,
    read helpers and latest-score computation are shared.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @abstractmethod
    def _load_state(self) -> LeaderboardFile:
        """Return the current committed state. Callers must not mutate it."""
        ...

    @abstractmethod
    def _save_state(self, state: LeaderboardFile) -> None:
        """Atomically replace the committed state."""
        ...

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Open an all-or-nothing unit of work.

        Yields:
            StoreTransaction bound to a private copy of the state.

        Raises:
            Any exception raised inside the block, after discarding the work.
        """
        with self._lock:
            state = self._load_state().model_copy(deep=True)
            try:
                yield StoreTransaction(state)
            except Exception as e:
                logger.warning(f"Transaction rolled back: {e}")
                raise
            state.updated_at = _utc_now()
            self._save_state(state)

    # === CONVENIENCE WRITES ===

    def insert_scrape_log(self, entry: ScrapeLog) -> ScrapeLog:
        """Write a scrape log in its own transaction."""
        with self.transaction() as tx:
            return tx.insert_scrape_log(entry)

    def upsert_dimension(
        self,
        name: str,
        display_name: str,
        weight: float = 1.0,
        description: str | None = None,
    ) -> Dimension:
        """Create or update a reference dimension in its own transaction."""
        with self.transaction() as tx:
            return tx.upsert_dimension(name, display_name, weight, description)

    # === READS ===

    def list_models(self) -> list[AIModel]:
        """Return all models in creation order."""
        with self._lock:
            return list(self._load_state().models.values())

    def get_model(self, name: str) -> AIModel | None:
        """Return a model by its unique name."""
        with self._lock:
            return self._load_state().models.get(name)

    def list_dimensions(self) -> list[Dimension]:
        """Return all reference dimensions in creation order."""
        with self._lock:
            return list(self._load_state().dimensions.values())

    def list_scores(self) -> list[Score]:
        """Return the full score history in insertion order."""
        with self._lock:
            return list(self._load_state().scores)

    def list_scrape_logs(self, limit: int | None = None) -> list[ScrapeLog]:
        """Return scrape logs, most recently ended first.

        Args:
            limit: Maximum number of entries. None returns all.
        """
        with self._lock:
            logs = list(self._load_state().scrape_logs)
        logs.sort(key=lambda log: log.ended_at, reverse=True)
        return logs if limit is None else logs[:limit]

    def last_successful_scrape(self) -> LastUpdate | None:
        """Return when and from where data was last successfully ingested."""
        successes = [
            log for log in self.list_scrape_logs() if log.status == ScrapeStatus.SUCCESS
        ]
        if not successes:
            return None
        return LastUpdate(ended_at=successes[0].ended_at, source=successes[0].source)

    def snapshot(self) -> LeaderboardSnapshot:
        """Read every model with its latest score per dimension.

        The whole snapshot comes from one committed state, so rankings never
        see a half-applied scrape run.
        """
        with self._lock:
            state = self._load_state()
            return build_snapshot(state)


def build_snapshot(state: LeaderboardFile) -> LeaderboardSnapshot:
    """Derive latest scores per (model, dimension) from a store state.

    The latest score is the row with the greatest ``scraped_at``; on equal
    timestamps the row inserted last wins.
    """
    dimension_names = {d.id: d.name for d in state.dimensions.values()}
    latest: dict[tuple[str, str], Score] = {}

    for score in state.scores:
        key = (score.model_id, score.dimension_id)
        current = latest.get(key)
        if current is None or score.scraped_at >= current.scraped_at:
            latest[key] = score

    scores_by_model: dict[str, dict[str, float]] = {}
    for (model_id, dimension_id), score in latest.items():
        dimension_name = dimension_names.get(dimension_id)
        if dimension_name is None:
            continue
        scores_by_model.setdefault(model_id, {})[dimension_name] = score.value

    models = [
        ScoredModel(**model.model_dump(), scores=scores_by_model.get(model.id, {}))
        for model in state.models.values()
    ]
    return LeaderboardSnapshot(models=models, dimensions=list(state.dimensions.values()))
