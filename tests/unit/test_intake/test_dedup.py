"""Unit tests for batch deduplication."""

import pytest

from src.intake.dedup import Deduplicator, deduplicate
from src.intake.models import RawItem, SourceKind


def _make_item(identifier: str, quality: float = 1.0) -> RawItem:
    """Create a test RawItem."""
    return RawItem(
        identifier=identifier,
        display_text=f"item {identifier}",
        quality_metric=quality,
        source_kind=SourceKind.PUBLICATION,
    )


class TestDeduplicate:
    """Tests for first-seen-wins merging."""

    @pytest.mark.unit
    def test_empty_input(self) -> None:
        """No batches produce no items."""
        assert deduplicate([]) == []

    @pytest.mark.unit
    def test_empty_batches(self) -> None:
        """Empty batches produce no items."""
        assert deduplicate([[], []]) == []

    @pytest.mark.unit
    def test_first_seen_wins_across_batches(self) -> None:
        """The record from the earlier batch is retained."""
        first = _make_item("W1", quality=5)
        second = _make_item("W1", quality=50)

        merged = deduplicate([[first], [second]])

        assert len(merged) == 1
        assert merged[0].quality_metric == 5

    @pytest.mark.unit
    def test_first_seen_wins_within_batch(self) -> None:
        """Duplicates inside one batch also collapse to the first."""
        merged = deduplicate([[_make_item("W1", 1), _make_item("W1", 9)]])

        assert [i.quality_metric for i in merged] == [1]

    @pytest.mark.unit
    def test_order_of_first_appearance(self) -> None:
        """Output order follows first appearance."""
        merged = deduplicate(
            [
                [_make_item("A"), _make_item("B")],
                [_make_item("C"), _make_item("A"), _make_item("D")],
            ]
        )

        assert [i.identifier for i in merged] == ["A", "B", "C", "D"]

    @pytest.mark.unit
    def test_output_identifiers_unique(self) -> None:
        """Every identifier appears once."""
        batches = [[_make_item(str(i % 3)) for i in range(10)] for _ in range(3)]

        merged = deduplicate(batches)

        identifiers = [i.identifier for i in merged]
        assert len(identifiers) == len(set(identifiers))


class TestDeduplicator:
    """Tests for the Deduplicator class."""

    @pytest.mark.unit
    def test_counts_dropped_duplicates(self) -> None:
        """Dropped records are counted."""
        dedup = Deduplicator(run_id="test")

        dedup.merge([[_make_item("A"), _make_item("B")], [_make_item("A")]])

        assert dedup.duplicates_dropped == 1

    @pytest.mark.unit
    def test_count_resets_per_merge(self) -> None:
        """Each merge reports its own drop count."""
        dedup = Deduplicator(run_id="test")
        dedup.merge([[_make_item("A")], [_make_item("A")]])

        dedup.merge([[_make_item("B")]])

        assert dedup.duplicates_dropped == 0
