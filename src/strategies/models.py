"""Data models for classification strategies."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from src.intake.models import RawItem


# (lowercased display text, item) -> tag or None
Predicate = Callable[[str, RawItem], str | None]


class StrategyGroup(str, Enum):
    """Role of a rule in the classification decision.

    KEEPER rules can drive inclusion; SIGNAL rules only feed trend
    statistics and never cause inclusion by themselves.
    """

    KEEPER = "keeper"
    SIGNAL = "signal"


@dataclass(frozen=True)
class StrategyRule:
    """A named, side-effect-free classification predicate.

    Attributes:
        name: Rule name, unique within its group.
        group: Group the rule belongs to.
        predicate: Maps (text, item) to a tag, or None when it does not fire.
    """

    name: str
    group: StrategyGroup
    predicate: Predicate

    def evaluate(self, text: str, item: RawItem) -> str | None:
        """Apply the predicate.

        Args:
            text: Lowercased display text.
            item: The item being classified.

        Returns:
            Tag if the rule fires, None otherwise.
        """
        return self.predicate(text, item)


@dataclass(frozen=True)
class RuleFailure:
    """Diagnostic for a rule that misbehaved while evaluating one item.

    Attributes:
        rule_name: Name of the failing rule.
        group: Group of the failing rule.
        identifier: Identifier of the item being evaluated.
        error_type: Exception class name, or InvalidRuleResult.
        message: Exception message.
    """

    rule_name: str
    group: StrategyGroup
    identifier: str
    error_type: str
    message: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {
            "rule_name": self.rule_name,
            "group": self.group.value,
            "identifier": self.identifier,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(frozen=True)
class RuleEvaluation:
    """Outcome of applying one rule group to one item.

    Attributes:
        tags: Fired tags in rule order, without duplicates.
        failures: Rules that misbehaved and were treated as no match.
    """

    tags: tuple[str, ...] = ()
    failures: tuple[RuleFailure, ...] = ()

    @property
    def fired(self) -> bool:
        """Whether at least one rule fired."""
        return bool(self.tags)
