"""Registry of keeper and signal-only strategies."""

from collections.abc import Sequence

import structlog

from src.config.schemas.engine import StrategiesConfig
from src.intake.models import RawItem
from src.strategies.models import (
    RuleEvaluation,
    RuleFailure,
    StrategyGroup,
    StrategyRule,
)
from src.strategies.rules import build_rule


logger = structlog.get_logger()

# error_type of a RuleFailure for a predicate that returned a non-string
INVALID_RULE_RESULT = "InvalidRuleResult"


class StrategyRegistry:
    """Holds two immutable groups of classification rules.

    Every rule in a group is applied to every item, and all non-null
    results are collected, so an item may carry several tags. A rule that
    raises, or returns something other than a tag string or None, counts
    as "no match" for that item only and is reported as a RuleFailure
    instead of aborting the pass.
    """

    def __init__(
        self,
        keepers: Sequence[StrategyRule] = (),
        signals: Sequence[StrategyRule] = (),
    ) -> None:
        """Initialize the registry.

        Args:
            keepers: Rules whose match can drive inclusion.
            signals: Rules used for statistics only.

        Raises:
            ValueError: If a rule is registered under the wrong group.
        """
        for rule in keepers:
            if rule.group != StrategyGroup.KEEPER:
                msg = f"Rule '{rule.name}' is not a keeper rule"
                raise ValueError(msg)
        for rule in signals:
            if rule.group != StrategyGroup.SIGNAL:
                msg = f"Rule '{rule.name}' is not a signal rule"
                raise ValueError(msg)

        self._keepers: tuple[StrategyRule, ...] = tuple(keepers)
        self._signals: tuple[StrategyRule, ...] = tuple(signals)

    @classmethod
    def from_config(cls, config: StrategiesConfig) -> "StrategyRegistry":
        """Build a registry from validated rule definitions.

        Args:
            config: Strategies section of the engine configuration.

        Returns:
            StrategyRegistry with compiled rules.
        """
        return cls(
            keepers=[build_rule(d, StrategyGroup.KEEPER) for d in config.keepers],
            signals=[build_rule(d, StrategyGroup.SIGNAL) for d in config.signals],
        )

    @property
    def keepers(self) -> tuple[StrategyRule, ...]:
        """Keeper rules in registration order."""
        return self._keepers

    @property
    def signals(self) -> tuple[StrategyRule, ...]:
        """Signal-only rules in registration order."""
        return self._signals

    def evaluate_keepers(self, text: str, item: RawItem) -> RuleEvaluation:
        """Apply every keeper rule.

        Args:
            text: Lowercased display text.
            item: The item being classified.

        Returns:
            RuleEvaluation with fired keeper tags.
        """
        return self._evaluate(self._keepers, text, item)

    def evaluate_noise_signals(self, text: str, item: RawItem) -> RuleEvaluation:
        """Apply every signal-only rule.

        Args:
            text: Lowercased display text.
            item: The item being classified.

        Returns:
            RuleEvaluation with fired signal tags.
        """
        return self._evaluate(self._signals, text, item)

    def _evaluate(
        self,
        rules: tuple[StrategyRule, ...],
        text: str,
        item: RawItem,
    ) -> RuleEvaluation:
        tags: dict[str, None] = {}
        failures: list[RuleFailure] = []

        for rule in rules:
            try:
                tag = rule.evaluate(text, item)
            except Exception as e:  # noqa: BLE001
                failures.append(_rule_failure(rule, item, type(e).__name__, str(e)))
                continue
            if tag is None or tag == "":
                continue
            if not isinstance(tag, str):
                failures.append(
                    _rule_failure(
                        rule,
                        item,
                        INVALID_RULE_RESULT,
                        f"Expected a tag string or None, got {type(tag).__name__}",
                    )
                )
                continue
            tags[tag] = None

        return RuleEvaluation(tags=tuple(tags), failures=tuple(failures))


def _rule_failure(
    rule: StrategyRule, item: RawItem, error_type: str, message: str
) -> RuleFailure:
    failure = RuleFailure(
        rule_name=rule.name,
        group=rule.group,
        identifier=item.identifier,
        error_type=error_type,
        message=message,
    )
    logger.warning("rule_failed", component="strategies", **failure.to_dict())
    return failure
