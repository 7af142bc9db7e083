"""Ordered decision list for the inclusion decision.

Steps are evaluated top to bottom and the first one that returns a
Decision wins. Items no step accepts are excluded.
"""

from dataclasses import dataclass
from typing import Protocol

from src.classifier.models import InclusionReason, Tier
from src.config.schemas.engine import EngineConfig
from src.intake.models import RawItem


@dataclass(frozen=True)
class DecisionContext:
    """Inputs available to every decision step.

    Attributes:
        item: The item under classification.
        keeper_tags: Tags fired by keeper rules.
    """

    item: RawItem
    keeper_tags: tuple[str, ...]


@dataclass(frozen=True)
class Decision:
    """Outcome of the decision list.

    Attributes:
        included: Whether the item is accepted.
        tier: Tier of an accepted item.
        reason: Justification for the outcome.
    """

    included: bool
    tier: Tier | None
    reason: InclusionReason


EXCLUDED = Decision(included=False, tier=None, reason=InclusionReason.EXCLUDED)


class DecisionStep(Protocol):
    """One row of the decision list."""

    name: str

    def decide(self, context: DecisionContext) -> Decision | None:
        """Return a Decision to stop, or None to fall through."""
        ...


@dataclass(frozen=True)
class AuthoritativeSourceStep:
    """Accept items whose venue or any category hint is allow-listed."""

    trusted: frozenset[str]
    name: str = "authoritative_source"

    def decide(self, context: DecisionContext) -> Decision | None:
        item = context.item
        labels = [item.venue or ""] + [hint.label for hint in item.category_hints]
        if any(label.casefold() in self.trusted for label in labels if label):
            return Decision(True, Tier.PRIMARY, InclusionReason.AUTHORITATIVE_SOURCE)
        return None


@dataclass(frozen=True)
class QualityThresholdStep:
    """Accept items whose impact metric reaches the authoritative threshold."""

    threshold: float
    name: str = "quality_threshold"

    def decide(self, context: DecisionContext) -> Decision | None:
        impact = context.item.impact_metric
        if impact is not None and impact >= self.threshold:
            return Decision(True, Tier.PRIMARY, InclusionReason.QUALITY_THRESHOLD)
        return None


@dataclass(frozen=True)
class HeuristicSignalStep:
    """Accept items over the quality floor that fired a keeper rule."""

    min_quality: float
    name: str = "heuristic_signal"

    def decide(self, context: DecisionContext) -> Decision | None:
        if context.keeper_tags and context.item.quality_metric >= self.min_quality:
            return Decision(True, Tier.SECONDARY, InclusionReason.HEURISTIC_VELOCITY)
        return None


@dataclass(frozen=True)
class ForceKeepStep:
    """Accept otherwise unmatched items with an extreme quality metric."""

    threshold: float
    name: str = "force_keep"

    def decide(self, context: DecisionContext) -> Decision | None:
        if context.item.quality_metric >= self.threshold:
            return Decision(True, Tier.SECONDARY, InclusionReason.FORCE_KEEP_OUTLIER)
        return None


class DecisionList:
    """Evaluates decision steps in order with early exit."""

    def __init__(self, steps: list[DecisionStep]) -> None:
        """Initialize the list.

        Args:
            steps: Steps in priority order.
        """
        self._steps = tuple(steps)

    @classmethod
    def from_config(cls, config: EngineConfig) -> "DecisionList":
        """Build the standard four-stage list from configuration.

        Args:
            config: Engine configuration.

        Returns:
            DecisionList: allow-list, impact, heuristic, force keep.
        """
        thresholds = config.thresholds
        return cls(
            [
                AuthoritativeSourceStep(
                    trusted=frozenset(s.casefold() for s in config.trusted_sources)
                ),
                QualityThresholdStep(threshold=thresholds.authoritative_impact),
                HeuristicSignalStep(min_quality=thresholds.min_heuristic_quality),
                ForceKeepStep(threshold=thresholds.force_keep_quality),
            ]
        )

    @property
    def step_names(self) -> list[str]:
        """Names of the steps in evaluation order."""
        return [step.name for step in self._steps]

    def decide(self, context: DecisionContext) -> Decision:
        """Run the steps until one accepts the item.

        Args:
            context: Item and fired keeper tags.

        Returns:
            The first step's Decision, or EXCLUDED.
        """
        for step in self._steps:
            decision = step.decide(context)
            if decision is not None:
                return decision
        return EXCLUDED
