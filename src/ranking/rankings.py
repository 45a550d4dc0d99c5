"""Pure ranking functions over a snapshot of latest scores.

Both rankings sort descending by score, place models without a score after
every scored model, keep input order among ties and unscored models, and
assign 1-based ranks by final position. No rounding is applied here.
"""

from collections.abc import Sequence

from src.models.model_leaderboard import Dimension, RankedModel, ScoredModel


def _assign_ranks(scored: list[tuple[ScoredModel, float | None]]) -> list[RankedModel]:
    with_score = [item for item in scored if item[1] is not None]
    without_score = [item for item in scored if item[1] is None]

    # sorted() is stable, including with reverse=True
    ordered = sorted(with_score, key=lambda item: item[1], reverse=True) + without_score

    return [
        RankedModel.model_validate(
            {**model.model_dump(), "rank": position, "dimension_score": value}
        )
        for position, (model, value) in enumerate(ordered, start=1)
    ]


def composite_score(model: ScoredModel, dimensions: Sequence[Dimension]) -> float | None:
    """Weighted average of a model's scores over the dimensions it has data for.

    Args:
        model: Model with its latest score per dimension name.
        dimensions: Dimensions to aggregate, each carrying its weight.

    Returns:
        sum(score * weight) / sum(weight), or None if the total weight is 0.
    """
    weighted_sum = 0.0
    total_weight = 0.0
    for dimension in dimensions:
        score = model.scores.get(dimension.name)
        if score is None:
            continue
        weighted_sum += score * dimension.weight
        total_weight += dimension.weight

    if total_weight <= 0:
        return None
    return weighted_sum / total_weight


def rank_by_dimension(models: Sequence[ScoredModel], dimension_name: str) -> list[RankedModel]:
    """Rank models by their latest score on one dimension.

    Models with no score for ``dimension_name`` (including an unknown
    dimension) rank last in input order.
    """
    return _assign_ranks([(model, model.scores.get(dimension_name)) for model in models])


def rank_by_composite(
    models: Sequence[ScoredModel], dimensions: Sequence[Dimension]
) -> list[RankedModel]:
    """Rank models by their weighted composite score."""
    return _assign_ranks([(model, composite_score(model, dimensions)) for model in models])
