"""Data models for classified items."""

from enum import Enum

from pydantic import model_validator

from src.data_model import StrictBaseModel
from src.intake.models import RawItem


class Tier(str, Enum):
    """Inclusion tier.

    PRIMARY is authoritative inclusion (trusted source or high impact);
    SECONDARY is heuristic or safety-net inclusion.
    """

    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"


# Sort position of each tier in the digest
TIER_ORDER: dict[Tier, int] = {Tier.PRIMARY: 0, Tier.SECONDARY: 1}


class InclusionReason(str, Enum):
    """Human-readable justification for a classification decision."""

    AUTHORITATIVE_SOURCE = "authoritative-source"
    QUALITY_THRESHOLD = "quality-threshold"
    HEURISTIC_VELOCITY = "heuristic-velocity"
    FORCE_KEEP_OUTLIER = "force-keep-outlier"
    EXCLUDED = "excluded"


class ClassifiedItem(StrictBaseModel):
    """A RawItem with its classification outcome.

    Attributes:
        item: The classified item.
        tags: Strategy-namespace tags (fired keeper rules or the catch-all).
        signal_tags: Fired signal-only tags, for statistics.
        topics: Topic-namespace labels derived from category hints.
        tier: Inclusion tier, None when excluded.
        inclusion_reason: Why the item was included or excluded.
        included: Whether the item is accepted into the digest.
    """

    item: RawItem
    tags: tuple[str, ...] = ()
    signal_tags: tuple[str, ...] = ()
    topics: tuple[str, ...] = ()
    tier: Tier | None = None
    inclusion_reason: InclusionReason = InclusionReason.EXCLUDED
    included: bool = False

    @model_validator(mode="after")
    def validate_inclusion_consistency(self) -> "ClassifiedItem":
        """Included items carry a tier and at least one tag."""
        if self.included:
            if self.tier is None:
                msg = "Included items must have a tier"
                raise ValueError(msg)
            if not self.tags:
                msg = "Included items must carry at least one tag"
                raise ValueError(msg)
            if self.inclusion_reason == InclusionReason.EXCLUDED:
                msg = "Included items need an inclusion reason"
                raise ValueError(msg)
        elif self.tier is not None:
            msg = "Excluded items cannot have a tier"
            raise ValueError(msg)
        return self

    @property
    def identifier(self) -> str:
        """Identifier of the underlying item."""
        return self.item.identifier

    @property
    def quality_metric(self) -> float:
        """Quality metric of the underlying item."""
        return self.item.quality_metric
