"""Data models for the ranked digest."""

from typing import Annotated

from pydantic import Field, model_validator

from src.classifier.models import ClassifiedItem
from src.data_model import StrictBaseModel
from src.heat.models import HeatEntry


class Digest(StrictBaseModel):
    """Final output of one classification pass.

    Counts are taken before truncation, so ``included_count`` reflects
    true acceptance volume even when ``items`` is capped. The histogram
    covers the whole deduplicated set, excluded items included.

    Carries no timestamps: the same input always yields the same Digest.

    Attributes:
        scanned_count: Items after deduplication.
        included_count: Accepted items before truncation.
        top_tags: Topic heat, descending, bounded.
        top_strategy_tags: Strategy heat, descending, bounded.
        strategy_histogram: Tag -> occurrences, first-seen order.
        items: Ranked accepted items, bounded.
    """

    scanned_count: Annotated[int, Field(ge=0)] = 0
    included_count: Annotated[int, Field(ge=0)] = 0
    top_tags: tuple[HeatEntry, ...] = ()
    top_strategy_tags: tuple[HeatEntry, ...] = ()
    strategy_histogram: dict[str, int] = Field(default_factory=dict)
    items: tuple[ClassifiedItem, ...] = ()

    @model_validator(mode="after")
    def validate_digest_invariants(self) -> "Digest":
        """Check identifier uniqueness, item tags and heat order."""
        identifiers = [c.identifier for c in self.items]
        if len(identifiers) != len(set(identifiers)):
            msg = "Digest items must have unique identifiers"
            raise ValueError(msg)

        for classified in self.items:
            if not classified.included or not classified.tags:
                msg = f"Digest item '{classified.identifier}' must be included and tagged"
                raise ValueError(msg)

        for entries in (self.top_tags, self.top_strategy_tags):
            scores = [e.accumulated_score for e in entries]
            if any(a < b for a, b in zip(scores, scores[1:], strict=False)):
                msg = "Heat entries must be sorted by descending score"
                raise ValueError(msg)

        if len(self.items) > self.included_count:
            msg = "Digest holds more items than were included"
            raise ValueError(msg)
        return self

