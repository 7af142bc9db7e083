"""Unit tests for configuration schemas."""

import pytest
from pydantic import ValidationError

from src.config.schemas.engine import (
    EngineConfig,
    OutputConfig,
    RuleDefinition,
    StrategiesConfig,
    ThresholdsConfig,
)


class TestThresholdsConfig:
    """Tests for ThresholdsConfig schema."""

    @pytest.mark.unit
    def test_defaults(self) -> None:
        """Defaults reproduce the upstream constants."""
        thresholds = ThresholdsConfig()
        assert thresholds.authoritative_impact == 15
        assert thresholds.min_heuristic_quality == 5
        assert thresholds.force_keep_quality == 200

    @pytest.mark.unit
    def test_force_keep_must_exceed_floor(self) -> None:
        """Force keep at or below the heuristic floor is rejected."""
        with pytest.raises(ValidationError, match="force_keep_quality"):
            ThresholdsConfig(min_heuristic_quality=10, force_keep_quality=10)

    @pytest.mark.unit
    def test_negative_threshold_rejected(self) -> None:
        """Thresholds cannot be negative."""
        with pytest.raises(ValidationError):
            ThresholdsConfig(authoritative_impact=-1)


class TestRuleDefinition:
    """Tests for RuleDefinition schema."""

    @pytest.mark.unit
    def test_valid_rule(self) -> None:
        """A rule with gates validates."""
        rule = RuleDefinition(
            name="TORVALDS",
            tag="CORE_PRAGMATISM",
            pattern="kernel|driver",
            languages=["Rust"],
        )
        assert rule.min_forks is None

    @pytest.mark.unit
    def test_invalid_pattern_rejected(self) -> None:
        """Patterns must compile."""
        with pytest.raises(ValidationError, match="Invalid regular expression"):
            RuleDefinition(name="X", tag="X", pattern="(unclosed")

    @pytest.mark.unit
    def test_extra_field_rejected(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            RuleDefinition(name="X", tag="X", pattern="x", weight=2)


class TestStrategiesConfig:
    """Tests for StrategiesConfig schema."""

    @pytest.mark.unit
    def test_duplicate_names_rejected(self) -> None:
        """Rule names are unique within a group."""
        rule = RuleDefinition(name="DUP", tag="A", pattern="a")
        with pytest.raises(ValidationError, match="Duplicate rule names"):
            StrategiesConfig(keepers=[rule, rule])

    @pytest.mark.unit
    def test_same_name_across_groups_allowed(self) -> None:
        """The same name may appear once per group."""
        rule = RuleDefinition(name="SAME", tag="A", pattern="a")
        config = StrategiesConfig(keepers=[rule], signals=[rule])
        assert len(config.keepers) == len(config.signals) == 1


class TestEngineConfig:
    """Tests for EngineConfig schema."""

    @pytest.mark.unit
    def test_defaults(self) -> None:
        """An empty mapping is a valid configuration."""
        config = EngineConfig.model_validate({})
        assert config.catch_all_tag == "UNCATEGORIZED_OUTLIER"
        assert config.uncategorized_tag == "VIRAL_UNCATEGORIZED"
        assert config.output == OutputConfig(max_items=20, max_top_tags=10)
        assert config.topics.min_hint_level == 2
        assert config.strategies.keepers == []

    @pytest.mark.unit
    def test_blank_trusted_source_rejected(self) -> None:
        """Allow-list entries must not be blank."""
        with pytest.raises(ValidationError):
            EngineConfig(trusted_sources=["Nature", "  "])

    @pytest.mark.unit
    def test_bad_version_rejected(self) -> None:
        """Versions look like 1.0."""
        with pytest.raises(ValidationError):
            EngineConfig(version="v1")

    @pytest.mark.unit
    def test_output_bounds(self) -> None:
        """Output caps are bounded."""
        with pytest.raises(ValidationError):
            OutputConfig(max_items=1001)

    @pytest.mark.unit
    def test_frozen(self) -> None:
        """Configuration is immutable once validated."""
        config = EngineConfig()
        with pytest.raises(ValidationError):
            config.catch_all_tag = "OTHER"  # type: ignore[misc]

    @pytest.mark.unit
    def test_uncategorized_bucket_can_be_disabled(self) -> None:
        """A null uncategorized tag is allowed; an empty one is not."""
        assert EngineConfig(uncategorized_tag=None).uncategorized_tag is None
        with pytest.raises(ValidationError):
            EngineConfig(uncategorized_tag="")
