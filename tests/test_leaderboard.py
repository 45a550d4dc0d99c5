"""Tests for the leaderboard service."""

from datetime import timedelta

import pytest

from src.models.model_leaderboard import ScrapeLog, ScrapeStatus
from src.ranking import Leaderboard
from src.storage import InMemoryModelStore


@pytest.fixture
def populated_store(fixed_now) -> InMemoryModelStore:
    store = InMemoryModelStore()
    store.upsert_dimension("coding", "Coding", weight=2.0)
    store.upsert_dimension("reasoning", "Reasoning", weight=3.0)
    store.upsert_dimension("math", "Math", weight=1.0)

    scores = {
        "alpha": {"coding": 90.0, "reasoning": 95.0, "math": 88.0},
        "beta": {"coding": 95.0},
        "gamma": {},
    }
    with store.transaction() as tx:
        for name, by_dim in scores.items():
            model = tx.upsert_model_by_name(name)
            for dim_name, value in by_dim.items():
                dim = tx.find_dimension_by_name(dim_name)
                tx.insert_score(model.id, dim.id, value, "test", fixed_now)
        # older score never wins over the latest
        alpha = tx.upsert_model_by_name("alpha")
        tx.insert_score(
            alpha.id,
            tx.find_dimension_by_name("coding").id,
            10.0,
            "test",
            fixed_now - timedelta(days=30),
        )
    return store


class TestLeaderboard:
    """Tests for Leaderboard."""

    def test_rank_by_dimension_uses_latest_scores(self, populated_store) -> None:
        ranked = Leaderboard(populated_store).rank_by_dimension("coding")

        assert [(m.name, m.rank, m.dimension_score) for m in ranked] == [
            ("beta", 1, 95.0),
            ("alpha", 2, 90.0),
            ("gamma", 3, None),
        ]

    def test_dimension_name_is_case_insensitive(self, populated_store) -> None:
        ranked = Leaderboard(populated_store).rank_by_dimension(" Coding ")
        assert ranked[0].name == "beta"

    def test_unknown_dimension(self, populated_store) -> None:
        ranked = Leaderboard(populated_store).rank_by_dimension("poetry")
        assert [m.name for m in ranked] == ["alpha", "beta", "gamma"]
        assert all(m.dimension_score is None for m in ranked)

    def test_rank_by_composite_uses_stored_weights(self, populated_store) -> None:
        ranked = Leaderboard(populated_store).rank_by_composite()

        assert [m.name for m in ranked] == ["beta", "alpha", "gamma"]
        assert ranked[1].dimension_score == pytest.approx(92.1666666667)

    def test_rank_by_composite_weight_overrides(self, populated_store) -> None:
        ranked = Leaderboard(populated_store).rank_by_composite(
            dimension_weights={"coding": 0.0}
        )

        alpha = next(m for m in ranked if m.name == "alpha")
        beta = next(m for m in ranked if m.name == "beta")
        assert alpha.dimension_score == pytest.approx((95 * 3 + 88) / 4)
        assert beta.dimension_score is None
        assert [m.name for m in ranked] == ["alpha", "beta", "gamma"]

    def test_negative_weight_override_rejected(self, populated_store) -> None:
        with pytest.raises(ValueError):
            Leaderboard(populated_store).rank_by_composite(dimension_weights={"math": -1})

    def test_limit(self, populated_store) -> None:
        leaderboard = Leaderboard(populated_store)
        assert len(leaderboard.rank_by_dimension("coding", limit=2)) == 2
        assert len(leaderboard.rank_by_composite(limit=1)) == 1

    def test_rank_composite_keyword(self, populated_store) -> None:
        leaderboard = Leaderboard(populated_store)

        composite = leaderboard.rank("composite")
        coding = leaderboard.rank("coding")

        assert composite[1].dimension_score == pytest.approx(92.1666666667)
        assert coding[1].dimension_score == 90.0

    def test_last_updated(self, populated_store, fixed_now) -> None:
        leaderboard = Leaderboard(populated_store)
        assert leaderboard.last_updated() is None

        populated_store.insert_scrape_log(
            ScrapeLog(
                source="builtin",
                status=ScrapeStatus.SUCCESS,
                started_at=fixed_now,
                ended_at=fixed_now,
            )
        )

        last = leaderboard.last_updated()
        assert last.source == "builtin"
        assert last.ended_at == fixed_now
