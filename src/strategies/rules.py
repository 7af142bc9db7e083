"""Pattern-based rule construction.

Rules are compiled once from configuration and hold no mutable state,
so one registry can be shared by any number of classification passes.
"""

import re
from dataclasses import dataclass

from src.config.schemas.engine import RuleDefinition
from src.intake.models import RawItem
from src.strategies.models import StrategyGroup, StrategyRule


FORKS_ATTRIBUTE = "forks"


@dataclass(frozen=True)
class PatternPredicate:
    """Fires a tag when the text matches and every gate passes.

    Matching is a case-insensitive substring search, so ``os`` also
    matches inside longer words the way the upstream keyword lists expect.

    Attributes:
        tag: Tag returned on a match.
        pattern: Compiled case-insensitive pattern.
        languages: Casefolded allowed languages; empty means any.
        min_forks: Minimum ``forks`` attribute, or None for no gate.
    """

    tag: str
    pattern: re.Pattern[str]
    languages: frozenset[str] = frozenset()
    min_forks: int | None = None

    def __call__(self, text: str, item: RawItem) -> str | None:
        if self.languages:
            language = (item.language or "").casefold()
            if language not in self.languages:
                return None
        if self.min_forks is not None:
            if item.attributes.get(FORKS_ATTRIBUTE, 0) < self.min_forks:
                return None
        return self.tag if self.pattern.search(text) else None


def build_rule(definition: RuleDefinition, group: StrategyGroup) -> StrategyRule:
    """Compile a rule definition into a StrategyRule.

    Args:
        definition: Validated rule definition.
        group: Group the rule belongs to.

    Returns:
        StrategyRule wrapping a PatternPredicate.
    """
    predicate = PatternPredicate(
        tag=definition.tag,
        pattern=re.compile(definition.pattern, re.IGNORECASE),
        languages=frozenset(lang.casefold() for lang in definition.languages),
        min_forks=definition.min_forks,
    )
    return StrategyRule(name=definition.name, group=group, predicate=predicate)
