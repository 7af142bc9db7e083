"""Weighted heat aggregation over included items."""

from collections.abc import Iterable
from dataclasses import dataclass

from src.classifier.models import ClassifiedItem
from src.heat.models import HeatEntry


# Baseline weight so zero-quality items still register
BASELINE_WEIGHT = 1.0


def item_weight(item: ClassifiedItem) -> float:
    """Heat contributed by one item to each tag it carries."""
    return item.quality_metric + BASELINE_WEIGHT


@dataclass
class _Tally:
    score: float = 0.0
    count: int = 0


def _accumulate(tallies: dict[str, _Tally], tag: str, weight: float) -> None:
    tally = tallies.setdefault(tag, _Tally())
    tally.score += weight
    tally.count += 1


def _top(tallies: dict[str, _Tally], limit: int | None) -> list[HeatEntry]:
    # sorted() is stable and dicts keep insertion order, so ties stay
    # in first-encountered order
    ordered = sorted(tallies.items(), key=lambda kv: -kv[1].score)
    if limit is not None:
        ordered = ordered[: max(limit, 0)]
    return [
        HeatEntry(tag=tag, accumulated_score=tally.score, occurrences=tally.count)
        for tag, tally in ordered
    ]


class HeatAggregator:
    """Accumulates topic heat and strategy heat in two separate maps.

    Topic heat measures emergent subject matter (category hint labels);
    strategy heat measures which classification rule fired. An aggregator
    is owned by one pass and never shared.
    """

    def __init__(self) -> None:
        """Initialize empty heat maps."""
        self._topic_heat: dict[str, _Tally] = {}
        self._strategy_heat: dict[str, _Tally] = {}

    def add(self, item: ClassifiedItem) -> None:
        """Add one item's weight to each of its topics and tags.

        Excluded items are ignored.

        Args:
            item: Classified item.
        """
        if not item.included:
            return
        weight = item_weight(item)
        for topic in item.topics:
            _accumulate(self._topic_heat, topic, weight)
        for tag in item.tags:
            _accumulate(self._strategy_heat, tag, weight)

    def add_all(self, items: Iterable[ClassifiedItem]) -> "HeatAggregator":
        """Add every item and return self for chaining."""
        for item in items:
            self.add(item)
        return self

    def topic_score(self, tag: str) -> float:
        """Current topic heat of a tag, 0.0 when unseen."""
        tally = self._topic_heat.get(tag)
        return tally.score if tally else 0.0

    def strategy_score(self, tag: str) -> float:
        """Current strategy heat of a tag, 0.0 when unseen."""
        tally = self._strategy_heat.get(tag)
        return tally.score if tally else 0.0

    def top(self, limit: int | None = None) -> list[HeatEntry]:
        """Topic heat entries by descending score.

        Args:
            limit: Maximum entries to return, None for all.

        Returns:
            Ordered HeatEntry list, ties in first-encountered order.
        """
        return _top(self._topic_heat, limit)

    def top_strategies(self, limit: int | None = None) -> list[HeatEntry]:
        """Strategy heat entries by descending score."""
        return _top(self._strategy_heat, limit)


def aggregate_heat(items: Iterable[ClassifiedItem]) -> HeatAggregator:
    """Build a fresh aggregator over the given items.

    Args:
        items: Classified items, included or not.

    Returns:
        Populated HeatAggregator.
    """
    return HeatAggregator().add_all(items)
