"""Tests for the model store backends."""

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from src.errors import StoreError
from src.models.model_leaderboard import ScrapeLog, ScrapeStatus
from src.models.model_observation import ModelMeta
from src.storage import FileModelStore, InMemoryModelStore

T0 = datetime(2025, 1, 1, tzinfo=UTC)


def _seed(store) -> None:
    store.upsert_dimension("coding", "Coding", weight=2.0)
    store.upsert_dimension("math", "Math")


class TestTransaction:
    """Tests for unit-of-work semantics shared by all stores."""

    def test_commit_publishes_changes(self) -> None:
        store = InMemoryModelStore()
        _seed(store)

        with store.transaction() as tx:
            model = tx.upsert_model_by_name("GPT-4", ModelMeta(vendor="OpenAI"))
            dim = tx.find_dimension_by_name("coding")
            tx.insert_score(model.id, dim.id, 90.0, "lmsys", T0)

        assert [m.name for m in store.list_models()] == ["GPT-4"]
        assert store.get_model("GPT-4").vendor == "OpenAI"
        assert len(store.list_scores()) == 1

    def test_exception_rolls_back_everything(self) -> None:
        store = InMemoryModelStore()
        _seed(store)

        with pytest.raises(RuntimeError):
            with store.transaction() as tx:
                model = tx.upsert_model_by_name("GPT-4")
                tx.insert_score(model.id, tx.find_dimension_by_name("coding").id, 1.0, "s", T0)
                raise RuntimeError("boom")

        assert store.list_models() == []
        assert store.list_scores() == []

    def test_changes_invisible_until_commit(self) -> None:
        store = InMemoryModelStore()

        with store.transaction() as tx:
            tx.upsert_model_by_name("GPT-4")
            assert store.list_models() == []

        assert len(store.list_models()) == 1

    def test_score_for_unknown_model_or_dimension_raises(self) -> None:
        store = InMemoryModelStore()
        _seed(store)

        with pytest.raises(StoreError, match="Unknown model"):
            with store.transaction() as tx:
                tx.insert_score("missing", tx.find_dimension_by_name("coding").id, 1.0, "s", T0)

        with pytest.raises(StoreError, match="Unknown dimension"):
            with store.transaction() as tx:
                model = tx.upsert_model_by_name("GPT-4")
                tx.insert_score(model.id, "missing", 1.0, "s", T0)

        assert store.list_models() == []

    def test_duplicate_scrape_log_id_raises(self) -> None:
        store = InMemoryModelStore()
        entry = ScrapeLog(source="s", status=ScrapeStatus.SUCCESS, started_at=T0)
        store.insert_scrape_log(entry)

        with pytest.raises(StoreError):
            store.insert_scrape_log(entry)
        assert len(store.list_scrape_logs()) == 1


class TestModelUpsert:
    """Tests for partial-merge model upserts."""

    def test_create_applies_defaults(self) -> None:
        store = InMemoryModelStore()
        with store.transaction() as tx:
            tx.upsert_model_by_name("Mystery", now=T0)

        model = store.get_model("Mystery")
        assert model.vendor == "Unknown"
        assert model.open_source is False
        assert model.release_date is None
        assert model.updated_at == T0

    def test_update_only_overwrites_present_fields(self) -> None:
        store = InMemoryModelStore()
        with store.transaction() as tx:
            tx.upsert_model_by_name(
                "Llama",
                ModelMeta(vendor="Meta", param_size="70B", open_source=True),
                now=T0,
            )
        with store.transaction() as tx:
            tx.upsert_model_by_name(
                "Llama",
                ModelMeta(description="Open model", param_size=None),
                now=T0 + timedelta(days=1),
            )

        model = store.get_model("Llama")
        assert model.vendor == "Meta"
        assert model.param_size == "70B"
        assert model.open_source is True
        assert model.description == "Open model"
        assert model.updated_at == T0 + timedelta(days=1)

    def test_update_keeps_model_id(self) -> None:
        store = InMemoryModelStore()
        with store.transaction() as tx:
            first = tx.upsert_model_by_name("X")
        with store.transaction() as tx:
            second = tx.upsert_model_by_name("X", ModelMeta(vendor="V"))
        assert first.id == second.id


class TestSnapshot:
    """Tests for latest-score computation."""

    def test_latest_score_wins_regardless_of_insert_order(self) -> None:
        store = InMemoryModelStore()
        _seed(store)

        with store.transaction() as tx:
            model = tx.upsert_model_by_name("GPT-4")
            coding = tx.find_dimension_by_name("coding")
            tx.insert_score(model.id, coding.id, 95.0, "a", T0 + timedelta(days=2))
            tx.insert_score(model.id, coding.id, 80.0, "b", T0)

        [scored] = store.snapshot().models
        assert scored.scores == {"coding": 95.0}
        assert len(store.list_scores()) == 2

    def test_equal_timestamps_latest_insert_wins(self) -> None:
        store = InMemoryModelStore()
        _seed(store)

        with store.transaction() as tx:
            model = tx.upsert_model_by_name("GPT-4")
            coding = tx.find_dimension_by_name("coding")
            tx.insert_score(model.id, coding.id, 80.0, "a", T0)
            tx.insert_score(model.id, coding.id, 85.0, "b", T0)

        assert store.snapshot().models[0].scores["coding"] == 85.0

    def test_models_without_scores_included(self) -> None:
        store = InMemoryModelStore()
        _seed(store)
        with store.transaction() as tx:
            tx.upsert_model_by_name("Lonely")

        snapshot = store.snapshot()
        assert snapshot.models[0].scores == {}
        assert [d.name for d in snapshot.dimensions] == ["coding", "math"]


class TestScrapeLogs:
    """Tests for scrape log reads."""

    def test_list_newest_first_with_limit(self) -> None:
        store = InMemoryModelStore()
        for i in range(5):
            store.insert_scrape_log(
                ScrapeLog(
                    source=f"s{i}",
                    status=ScrapeStatus.SUCCESS,
                    started_at=T0,
                    ended_at=T0 + timedelta(minutes=i),
                )
            )

        logs = store.list_scrape_logs(limit=3)
        assert [log.source for log in logs] == ["s4", "s3", "s2"]

    def test_last_successful_scrape(self) -> None:
        store = InMemoryModelStore()
        assert store.last_successful_scrape() is None

        store.insert_scrape_log(
            ScrapeLog(source="ok", status=ScrapeStatus.SUCCESS, started_at=T0, ended_at=T0)
        )
        store.insert_scrape_log(
            ScrapeLog(
                source="bad",
                status=ScrapeStatus.ERROR,
                started_at=T0,
                ended_at=T0 + timedelta(hours=1),
            )
        )

        last = store.last_successful_scrape()
        assert last.source == "ok"
        assert last.ended_at == T0


class TestFileModelStore:
    """Tests for the JSON file backend."""

    def test_empty_directory_reads_empty(self, tmp_path: Path) -> None:
        store = FileModelStore(tmp_path)
        assert store.list_models() == []
        assert not store.path.exists()

    def test_commit_persists_across_instances(self, tmp_path: Path) -> None:
        store = FileModelStore(tmp_path)
        _seed(store)
        with store.transaction() as tx:
            model = tx.upsert_model_by_name("GPT-4", ModelMeta(vendor="OpenAI"))
            tx.insert_score(model.id, tx.find_dimension_by_name("coding").id, 90.0, "s", T0)

        reopened = FileModelStore(tmp_path)
        assert reopened.get_model("GPT-4").vendor == "OpenAI"
        assert reopened.snapshot().models[0].scores == {"coding": 90.0}
        assert reopened.list_dimensions()[0].weight == 2.0

    def test_rollback_leaves_file_untouched(self, tmp_path: Path) -> None:
        store = FileModelStore(tmp_path)
        _seed(store)
        before = store.path.read_text()

        with pytest.raises(ValueError):
            with store.transaction() as tx:
                tx.upsert_model_by_name("GPT-4")
                raise ValueError("nope")

        assert store.path.read_text() == before
        assert FileModelStore(tmp_path).list_models() == []

    def test_no_temp_files_left_behind(self, tmp_path: Path) -> None:
        store = FileModelStore(tmp_path)
        _seed(store)
        assert [p.name for p in tmp_path.iterdir()] == ["leaderboard.json"]

    def test_file_is_json(self, tmp_path: Path) -> None:
        store = FileModelStore(tmp_path)
        _seed(store)
        data = json.loads(store.path.read_text())
        assert set(data["dimensions"]) == {"coding", "math"}

    def test_corrupt_file_raises_store_error(self, tmp_path: Path) -> None:
        (tmp_path / "leaderboard.json").write_text("{not json")
        with pytest.raises(StoreError):
            FileModelStore(tmp_path).list_models()
