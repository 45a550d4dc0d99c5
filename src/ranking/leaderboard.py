"""Leaderboard service: ranked views over one consistent store snapshot."""

import logging

from src.consts import COMPOSITE_DIMENSION
from src.models.model_leaderboard import Dimension, LastUpdate, RankedModel
from src.ranking.rankings import rank_by_composite, rank_by_dimension
from src.storage.model_store.base import ModelStore

logger = logging.getLogger(__name__)


class Leaderboard:
    """Read-side facade ranking the models held by a store."""

    def __init__(self, store: ModelStore):
        self.store = store

    def rank_by_dimension(self, dimension_name: str, limit: int | None = None) -> list[RankedModel]:
        """Rank all models by their latest score on one dimension.

        Args:
            dimension_name: Dimension to rank by (case-insensitive).
            limit: Max entries to return. None = all.
        """
        snapshot = self.store.snapshot()
        name = dimension_name.strip().lower()
        if name not in {d.name for d in snapshot.dimensions}:
            logger.warning(f"Unknown dimension {dimension_name!r}; all models rank unscored")
        return _head(rank_by_dimension(snapshot.models, name), limit)

    def rank_by_composite(
        self,
        dimension_weights: dict[str, float] | None = None,
        limit: int | None = None,
    ) -> list[RankedModel]:
        """Rank all models by weighted composite score.

        Args:
            dimension_weights: Per-dimension weight overrides keyed by
                dimension name. Dimensions not listed keep their stored weight.
            limit: Max entries to return. None = all.

        Raises:
            ValueError: If an override weight is negative.
        """
        snapshot = self.store.snapshot()
        dimensions = _apply_weights(snapshot.dimensions, dimension_weights or {})
        return _head(rank_by_composite(snapshot.models, dimensions), limit)

    def rank(self, dimension: str = COMPOSITE_DIMENSION, limit: int | None = None) -> list[RankedModel]:
        """Rank by a dimension name, or by composite score for ``"composite"``."""
        if dimension.strip().lower() == COMPOSITE_DIMENSION:
            return self.rank_by_composite(limit=limit)
        return self.rank_by_dimension(dimension, limit=limit)

    def dimensions(self) -> list[Dimension]:
        return self.store.list_dimensions()

    def last_updated(self) -> LastUpdate | None:
        """End time and source of the most recent successful scrape."""
        return self.store.last_successful_scrape()


def _apply_weights(dimensions: list[Dimension], weights: dict[str, float]) -> list[Dimension]:
    overrides = {name.strip().lower(): weight for name, weight in weights.items()}
    for name, weight in overrides.items():
        if weight < 0:
            raise ValueError(f"Weight for dimension {name!r} must be >= 0, got {weight}")
    return [
        d.model_copy(update={"weight": overrides[d.name]}) if d.name in overrides else d
        for d in dimensions
    ]


def _head(ranked: list[RankedModel], limit: int | None) -> list[RankedModel]:
    return ranked if limit is None else ranked[:limit]
