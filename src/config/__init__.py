"""Configuration loading and validation module."""

from src.config.loader import ConfigLoader, LoadedConfig
from src.config.state_machine import ConfigState, ConfigStateError


__all__ = [
    "ConfigLoader",
    "ConfigState",
    "ConfigStateError",
    "LoadedConfig",
]
