"""Strategy registry for keeper and signal-only classification rules."""

from src.strategies.models import (
    Predicate,
    RuleEvaluation,
    RuleFailure,
    StrategyGroup,
    StrategyRule,
)
from src.strategies.registry import INVALID_RULE_RESULT, StrategyRegistry
from src.strategies.rules import PatternPredicate, build_rule


__all__ = [
    "INVALID_RULE_RESULT",
    "PatternPredicate",
    "Predicate",
    "RuleEvaluation",
    "RuleFailure",
    "StrategyGroup",
    "StrategyRegistry",
    "StrategyRule",
    "build_rule",
]
