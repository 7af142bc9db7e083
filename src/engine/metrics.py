"""Per-pass metrics for the engine."""

from dataclasses import dataclass, field


@dataclass
class EngineMetrics:
    """Counters and timings for a single pass.

    A fresh instance is created by every pass, so repeated or parallel
    runs never share counters.

    Attributes:
        batches_in: Number of input batches.
        items_in: Items across all batches before deduplication.
        duplicates_dropped: Items dropped by deduplication.
        included_by_reason: Included count per inclusion reason.
        excluded_total: Items rejected by the decision list.
        rule_failures: Rule evaluations that raised.
        items_out: Items retained in the digest after truncation.
        stage_durations_ms: Duration per stage in milliseconds.
    """

    batches_in: int = 0
    items_in: int = 0
    duplicates_dropped: int = 0
    included_by_reason: dict[str, int] = field(default_factory=dict)
    excluded_total: int = 0
    rule_failures: int = 0
    items_out: int = 0
    stage_durations_ms: dict[str, float] = field(default_factory=dict)

    def record_inclusion(self, reason: str) -> None:
        """Record one included item.

        Args:
            reason: Inclusion reason value.
        """
        self.included_by_reason[reason] = self.included_by_reason.get(reason, 0) + 1

    def record_stage(self, stage: str, duration_ms: float) -> None:
        """Record how long a stage took."""
        self.stage_durations_ms[stage] = duration_ms

    @property
    def included_total(self) -> int:
        """Total included items."""
        return sum(self.included_by_reason.values())

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "batches_in": self.batches_in,
            "items_in": self.items_in,
            "duplicates_dropped": self.duplicates_dropped,
            "included_total": self.included_total,
            "included_by_reason": dict(self.included_by_reason),
            "excluded_total": self.excluded_total,
            "rule_failures": self.rule_failures,
            "items_out": self.items_out,
            "stage_durations_ms": dict(self.stage_durations_ms),
        }
