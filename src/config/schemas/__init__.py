"""Configuration schema definitions."""

from src.config.schemas.engine import (
    EngineConfig,
    OutputConfig,
    RuleDefinition,
    StrategiesConfig,
    ThresholdsConfig,
    TopicNamespaceConfig,
)


__all__ = [
    "EngineConfig",
    "OutputConfig",
    "RuleDefinition",
    "StrategiesConfig",
    "ThresholdsConfig",
    "TopicNamespaceConfig",
]
