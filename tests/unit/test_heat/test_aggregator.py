"""Unit tests for heat aggregation."""

import pytest

from src.classifier.models import ClassifiedItem, InclusionReason, Tier
from src.heat.aggregator import HeatAggregator, aggregate_heat
from src.intake.models import RawItem, SourceKind


def _make_classified(
    identifier: str,
    quality: float,
    tags: tuple[str, ...] = ("STRATEGY",),
    topics: tuple[str, ...] = (),
    included: bool = True,
) -> ClassifiedItem:
    """Create a ClassifiedItem."""
    return ClassifiedItem(
        item=RawItem(
            identifier=identifier,
            quality_metric=quality,
            source_kind=SourceKind.PUBLICATION,
        ),
        tags=tags,
        topics=topics,
        tier=Tier.SECONDARY if included else None,
        inclusion_reason=(
            InclusionReason.HEURISTIC_VELOCITY if included else InclusionReason.EXCLUDED
        ),
        included=included,
    )


class TestHeatAggregator:
    """Tests for HeatAggregator."""

    @pytest.mark.unit
    def test_weight_is_quality_plus_one(self) -> None:
        """Three items with quality 0, 2 and 7 give heat 12."""
        heat = aggregate_heat(
            [
                _make_classified("a", 0, topics=("X",)),
                _make_classified("b", 2, topics=("X",)),
                _make_classified("c", 7, topics=("X",)),
            ]
        )

        assert heat.topic_score("X") == 12

    @pytest.mark.unit
    def test_occurrences_count_items(self) -> None:
        """Entries report how many included items carried the tag."""
        heat = aggregate_heat(
            [
                _make_classified("a", 50, tags=("T",), topics=("X",)),
                _make_classified("b", 0, tags=("T",), topics=("X", "Y")),
                _make_classified("c", 9, tags=("T",), topics=("X",), included=False),
            ]
        )

        assert [(e.tag, e.accumulated_score, e.occurrences) for e in heat.top()] == [
            ("X", 52, 2),
            ("Y", 1, 1),
        ]
        assert heat.top_strategies()[0].occurrences == 2

    @pytest.mark.unit
    def test_zero_quality_contributes(self) -> None:
        """Zero-quality items still add a baseline unit."""
        heat = aggregate_heat([_make_classified("a", 0, topics=("X",))])

        assert heat.top()[0].accumulated_score == 1

    @pytest.mark.unit
    def test_excluded_items_ignored(self) -> None:
        """Only included items contribute heat."""
        heat = aggregate_heat(
            [_make_classified("a", 100, tags=("T",), topics=("X",), included=False)]
        )

        assert heat.top() == []
        assert heat.top_strategies() == []

    @pytest.mark.unit
    def test_topic_and_strategy_maps_are_separate(self) -> None:
        """Topic labels and strategy tags accumulate independently."""
        heat = aggregate_heat(
            [_make_classified("a", 4, tags=("SHARED",), topics=("SHARED", "Rust"))]
        )

        assert heat.topic_score("SHARED") == 5
        assert heat.strategy_score("SHARED") == 5
        assert [e.tag for e in heat.top()] == ["SHARED", "Rust"]
        assert [e.tag for e in heat.top_strategies()] == ["SHARED"]

    @pytest.mark.unit
    def test_top_sorted_descending_with_stable_ties(self) -> None:
        """Ties keep first-encountered order."""
        heat = aggregate_heat(
            [
                _make_classified("a", 1, topics=("B", "A")),
                _make_classified("b", 9, topics=("C",)),
            ]
        )

        top = heat.top()

        assert [e.tag for e in top] == ["C", "B", "A"]
        scores = [e.accumulated_score for e in top]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.unit
    def test_top_limit(self) -> None:
        """The limit bounds the number of entries."""
        heat = aggregate_heat(
            [_make_classified(str(i), i, topics=(f"T{i}",)) for i in range(5)]
        )

        assert [e.tag for e in heat.top(2)] == ["T4", "T3"]
        assert heat.top(0) == []

    @pytest.mark.unit
    def test_monotonic_in_quality(self) -> None:
        """Raising one item's quality never lowers a tag's heat."""
        low = aggregate_heat([_make_classified("a", 3, topics=("X",))])
        high = aggregate_heat([_make_classified("a", 30, topics=("X",))])

        assert high.topic_score("X") >= low.topic_score("X")

    @pytest.mark.unit
    def test_fresh_per_instance(self) -> None:
        """Separate aggregators do not share state."""
        first = HeatAggregator()
        first.add(_make_classified("a", 5, topics=("X",)))

        assert HeatAggregator().topic_score("X") == 0.0
