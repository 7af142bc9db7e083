"""First-seen-wins deduplication across result batches."""

from collections.abc import Iterable, Sequence

import structlog

from src.intake.models import RawItem


logger = structlog.get_logger()


class Deduplicator:
    """Collapses several result batches sharing one identifier space.

    Batches are consumed in the order given; the first occurrence of an
    identifier wins, so a record from an earlier, higher-priority query
    shadows duplicates returned by later queries.
    """

    def __init__(self, run_id: str = "dedup") -> None:
        """Initialize the deduplicator.

        Args:
            run_id: Run identifier for logging.
        """
        self._duplicates_dropped = 0
        self._log = logger.bind(component="dedup", run_id=run_id)

    @property
    def duplicates_dropped(self) -> int:
        """Number of records dropped by the last merge."""
        return self._duplicates_dropped

    def merge(self, batches: Iterable[Sequence[RawItem]]) -> list[RawItem]:
        """Merge batches into one ordered list of unique items.

        Args:
            batches: One sequence of items per source query, in priority order.

        Returns:
            Unique items in order of first appearance.
        """
        seen: dict[str, RawItem] = {}
        total = 0

        for batch in batches:
            for item in batch:
                total += 1
                if item.identifier not in seen:
                    seen[item.identifier] = item

        self._duplicates_dropped = total - len(seen)
        self._log.debug(
            "batches_deduplicated",
            items_in=total,
            items_out=len(seen),
            duplicates_dropped=self._duplicates_dropped,
        )
        return list(seen.values())


def deduplicate(batches: Iterable[Sequence[RawItem]]) -> list[RawItem]:
    """Pure function API for deduplication.

    Args:
        batches: One sequence of items per source query, in priority order.

    Returns:
        Unique items in order of first appearance.
    """
    return Deduplicator().merge(batches)
