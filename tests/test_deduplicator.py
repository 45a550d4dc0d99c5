"""Tests for the observation deduplicator."""

from datetime import timedelta

from src.filters import Deduplicator, deduplicate, validate


class TestDeduplicator:
    """Tests for Deduplicator.apply."""

    def test_keeps_latest_per_model_dimension_source(self, make_observation, fixed_now) -> None:
        records = validate(
            [
                make_observation("GPT-4", "coding", 88.0, "lmsys", fixed_now),
                make_observation("gpt-4 ", "Coding", 91.0, "lmsys", fixed_now + timedelta(hours=1)),
            ]
        )

        [result] = Deduplicator().apply(records)

        assert result.score == 91.0
        assert result.scraped_at == fixed_now + timedelta(hours=1)

    def test_older_record_after_newer_does_not_replace(self, make_observation, fixed_now) -> None:
        records = validate(
            [
                make_observation(score=91.0, scraped_at=fixed_now + timedelta(hours=1)),
                make_observation(score=88.0, scraped_at=fixed_now),
            ]
        )

        [result] = deduplicate(records)
        assert result.score == 91.0

    def test_different_sources_are_kept_separately(self, make_observation) -> None:
        records = validate(
            [
                make_observation(source="lmsys"),
                make_observation(source="openllm"),
            ]
        )
        assert len(deduplicate(records)) == 2

    def test_different_dimensions_are_kept_separately(self, make_observation) -> None:
        records = validate(
            [
                make_observation(dimension_name="coding"),
                make_observation(dimension_name="math"),
            ]
        )
        assert len(deduplicate(records)) == 2

    def test_output_has_unique_keys(self, make_observation, fixed_now) -> None:
        records = validate(
            [
                make_observation(model_name=name, scraped_at=fixed_now + timedelta(minutes=i))
                for i, name in enumerate(["A", "a", "B", " A", "b", "C"])
            ]
        )

        results = deduplicate(records)
        keys = [r.dedup_key for r in results]

        assert len(keys) == len(set(keys)) == 3

    def test_empty_input(self) -> None:
        assert deduplicate([]) == []
