"""Engine configuration schema."""

import re
from typing import Annotated

from pydantic import Field, field_validator, model_validator

from src.data_model import StrictBaseModel


class ThresholdsConfig(StrictBaseModel):
    """Numeric thresholds that drive the inclusion decision.

    Attributes:
        authoritative_impact: Impact metric at or above which an item is
            included as PRIMARY regardless of strategy matches.
        min_heuristic_quality: Quality floor for heuristic (keeper) inclusion.
        force_keep_quality: Quality at or above which an otherwise unmatched
            item is kept as an outlier.
    """

    authoritative_impact: Annotated[float, Field(ge=0.0)] = 15.0
    min_heuristic_quality: Annotated[float, Field(ge=0.0)] = 5.0
    force_keep_quality: Annotated[float, Field(ge=0.0)] = 200.0

    @model_validator(mode="after")
    def validate_force_keep_above_floor(self) -> "ThresholdsConfig":
        """Ensure the force-keep threshold sits above the heuristic floor."""
        if self.force_keep_quality <= self.min_heuristic_quality:
            msg = "force_keep_quality must be greater than min_heuristic_quality"
            raise ValueError(msg)
        return self


class OutputConfig(StrictBaseModel):
    """Digest size limits.

    Attributes:
        max_items: Maximum items retained in the digest.
        max_top_tags: Maximum heat entries reported per namespace.
    """

    max_items: Annotated[int, Field(ge=0, le=1000)] = 20
    max_top_tags: Annotated[int, Field(ge=0, le=100)] = 10


class TopicNamespaceConfig(StrictBaseModel):
    """Which category hints count as topics.

    Attributes:
        min_hint_level: Hints carrying a level below this are too broad to
            count as a topic. Hints without a level always count.
    """

    min_hint_level: Annotated[int, Field(ge=0, le=10)] = 2


class RuleDefinition(StrictBaseModel):
    """A single pattern-based classification rule.

    Attributes:
        name: Rule name, unique within its group.
        tag: Tag emitted when the rule fires.
        pattern: Case-insensitive regular expression matched against the
            item's display text.
        languages: If set, the item's language must be one of these.
        min_forks: If set, the item's ``forks`` attribute must reach this.
    """

    name: Annotated[str, Field(min_length=1, max_length=100)]
    tag: Annotated[str, Field(min_length=1, max_length=100)]
    pattern: Annotated[str, Field(min_length=1)]
    languages: list[str] = Field(default_factory=list)
    min_forks: Annotated[int | None, Field(ge=0)] = None

    @field_validator("pattern")
    @classmethod
    def validate_pattern_compiles(cls, value: str) -> str:
        """Reject patterns that are not valid regular expressions."""
        try:
            re.compile(value)
        except re.error as e:
            msg = f"Invalid regular expression: {e}"
            raise ValueError(msg) from e
        return value


class StrategiesConfig(StrictBaseModel):
    """Keeper and signal-only rule groups.

    Attributes:
        keepers: Rules whose match can drive inclusion.
        signals: Rules used for trend statistics only.
    """

    keepers: list[RuleDefinition] = Field(default_factory=list)
    signals: list[RuleDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_names(self) -> "StrategiesConfig":
        """Ensure rule names are unique within each group."""
        for rules in (self.keepers, self.signals):
            names = [r.name for r in rules]
            duplicates = [name for name in names if names.count(name) > 1]
            if duplicates:
                msg = f"Duplicate rule names found: {sorted(set(duplicates))}"
                raise ValueError(msg)
        return self


class EngineConfig(StrictBaseModel):
    """Root configuration for sentinel.yaml.

    Attributes:
        version: Schema version.
        thresholds: Inclusion thresholds.
        trusted_sources: Allow-list of venues or labels that are always kept.
        output: Digest size limits.
        topics: Topic namespace configuration.
        catch_all_tag: Tag given to included items no keeper rule matched.
        uncategorized_tag: Histogram bucket for items no keeper or signal
            rule matched; null disables the bucket.
        strategies: Keeper and signal-only rule definitions.
    """

    version: Annotated[str, Field(pattern=r"^\d+\.\d+$")] = "1.0"
    thresholds: ThresholdsConfig = Field(default_factory=ThresholdsConfig)
    trusted_sources: list[str] = Field(default_factory=list)
    output: OutputConfig = Field(default_factory=OutputConfig)
    topics: TopicNamespaceConfig = Field(default_factory=TopicNamespaceConfig)
    catch_all_tag: Annotated[str, Field(min_length=1, max_length=100)] = (
        "UNCATEGORIZED_OUTLIER"
    )
    uncategorized_tag: Annotated[str, Field(min_length=1, max_length=100)] | None = (
        "VIRAL_UNCATEGORIZED"
    )
    strategies: StrategiesConfig = Field(default_factory=StrategiesConfig)

    @field_validator("trusted_sources")
    @classmethod
    def validate_trusted_sources_non_empty(cls, values: list[str]) -> list[str]:
        """Ensure allow-list entries are non-empty strings."""
        for value in values:
            if not value.strip():
                msg = "Trusted sources must be non-empty strings"
                raise ValueError(msg)
        return values
