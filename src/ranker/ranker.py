"""Deterministic ranking, truncation and digest assembly."""

from collections.abc import Iterable, Sequence

from src.classifier.models import TIER_ORDER, ClassifiedItem
from src.heat.aggregator import HeatAggregator
from src.ranker.models import Digest


def rank_key(item: ClassifiedItem) -> tuple[int, float]:
    """Sort key: tier first, then descending quality."""
    tier_rank = TIER_ORDER[item.tier] if item.tier is not None else len(TIER_ORDER)
    return (tier_rank, -item.quality_metric)


def rank_items(items: Iterable[ClassifiedItem]) -> list[ClassifiedItem]:
    """Order accepted items for output.

    PRIMARY precedes SECONDARY; within a tier quality is non-increasing.
    The sort is stable, so equal keys keep their input order.

    Args:
        items: Included items in classification order.

    Returns:
        New ranked list.
    """
    return sorted(items, key=rank_key)


def truncate(items: Sequence[ClassifiedItem], limit: int) -> list[ClassifiedItem]:
    """Keep the first ``limit`` items without reordering them."""
    return list(items[: max(limit, 0)])


def build_histogram(
    items: Iterable[ClassifiedItem],
    uncategorized_tag: str | None = None,
) -> dict[str, int]:
    """Count tag occurrences over every classified item.

    Keeper tags (or the catch-all) and signal-only tags are both counted,
    whether or not the item was included. Items that fired no rule at all
    are counted under ``uncategorized_tag`` when one is given.

    Args:
        items: The full classified set.
        uncategorized_tag: Bucket for items with no tags of either kind.

    Returns:
        Tag -> count in first-seen order.
    """
    histogram: dict[str, int] = {}
    for item in items:
        tags = (*item.tags, *item.signal_tags)
        if not tags and uncategorized_tag:
            tags = (uncategorized_tag,)
        for tag in tags:
            histogram[tag] = histogram.get(tag, 0) + 1
    return histogram


def build_digest(
    classified: Sequence[ClassifiedItem],
    heat: HeatAggregator,
    max_items: int,
    max_top_tags: int,
    uncategorized_tag: str | None = None,
) -> Digest:
    """Assemble the Digest for one pass.

    Args:
        classified: Every deduplicated item with its classification.
        heat: Aggregator populated from the included items.
        max_items: Item cap.
        max_top_tags: Cap for both heat rankings.
        uncategorized_tag: Histogram bucket for items no rule matched.

    Returns:
        Digest with counts computed before truncation.
    """
    included = [c for c in classified if c.included]
    ranked = rank_items(included)

    return Digest(
        scanned_count=len(classified),
        included_count=len(included),
        top_tags=tuple(heat.top(max_top_tags)),
        top_strategy_tags=tuple(heat.top_strategies(max_top_tags)),
        strategy_histogram=build_histogram(classified, uncategorized_tag),
        items=tuple(truncate(ranked, max_items)),
    )
