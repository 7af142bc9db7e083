"""Classifier applying strategies and the inclusion decision list."""

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from src.classifier.decision import DecisionContext, DecisionList
from src.classifier.models import ClassifiedItem, InclusionReason
from src.config.schemas.engine import EngineConfig
from src.intake.models import RawItem
from src.strategies import RuleFailure, StrategyRegistry


logger = structlog.get_logger()


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying a deduplicated item set.

    Attributes:
        items: Classified items in input order, included and excluded.
        failures: Rule failures raised while evaluating the set.
    """

    items: tuple[ClassifiedItem, ...] = ()
    failures: tuple[RuleFailure, ...] = field(default_factory=tuple)

    @property
    def included(self) -> list[ClassifiedItem]:
        """Accepted items in input order."""
        return [c for c in self.items if c.included]

    @property
    def excluded_count(self) -> int:
        """Number of items the decision list rejected."""
        return sum(1 for c in self.items if not c.included)


class Classifier:
    """Decides inclusion, tier and tags for each item.

    Every keeper and signal rule is applied to every item. The decision
    list then picks the first matching inclusion path; fired keeper tags
    are attached whichever path wins.
    """

    def __init__(
        self,
        config: EngineConfig,
        registry: StrategyRegistry,
        run_id: str = "",
        decisions: DecisionList | None = None,
    ) -> None:
        """Initialize the classifier.

        Args:
            config: Engine configuration.
            registry: Keeper and signal rules.
            run_id: Run identifier for logging.
            decisions: Decision list, built from config when omitted.
        """
        self._config = config
        self._registry = registry
        self._decisions = decisions or DecisionList.from_config(config)
        self._min_hint_level = config.topics.min_hint_level
        self._log = logger.bind(component="classifier", run_id=run_id)

    def derive_topics(self, item: RawItem) -> tuple[str, ...]:
        """Topic-namespace labels for an item.

        Hints without a level (languages) are always admitted; leveled
        hints must reach the configured minimum depth.

        Args:
            item: Item to inspect.

        Returns:
            Labels in hint order, without duplicates.
        """
        topics: dict[str, None] = {}
        for hint in item.category_hints:
            if hint.level is None or hint.level >= self._min_hint_level:
                topics[hint.label] = None
        return tuple(topics)

    def classify(self, item: RawItem) -> tuple[ClassifiedItem, list[RuleFailure]]:
        """Classify a single item.

        Args:
            item: Item to classify.

        Returns:
            Tuple of (ClassifiedItem, rule failures for this item).
        """
        text = item.match_text
        keepers = self._registry.evaluate_keepers(text, item)
        signals = self._registry.evaluate_noise_signals(text, item)
        failures = [*keepers.failures, *signals.failures]

        decision = self._decisions.decide(
            DecisionContext(item=item, keeper_tags=keepers.tags)
        )

        tags = keepers.tags
        if decision.included and not tags:
            tags = (self._config.catch_all_tag,)

        classified = ClassifiedItem(
            item=item,
            tags=tags,
            signal_tags=signals.tags,
            topics=self.derive_topics(item),
            tier=decision.tier,
            inclusion_reason=decision.reason,
            included=decision.included,
        )
        return classified, failures

    def classify_all(self, items: Iterable[RawItem]) -> ClassificationResult:
        """Classify every item in order.

        Args:
            items: Deduplicated items.

        Returns:
            ClassificationResult with all items and collected failures.
        """
        classified: list[ClassifiedItem] = []
        failures: list[RuleFailure] = []
        reasons: dict[str, int] = {}

        for item in items:
            result, item_failures = self.classify(item)
            classified.append(result)
            failures.extend(item_failures)
            reasons[result.inclusion_reason.value] = (
                reasons.get(result.inclusion_reason.value, 0) + 1
            )

        self._log.info(
            "classification_complete",
            item_count=len(classified),
            included_count=len(classified) - reasons.get(InclusionReason.EXCLUDED.value, 0),
            reasons=reasons,
            rule_failures=len(failures),
        )
        return ClassificationResult(items=tuple(classified), failures=tuple(failures))
