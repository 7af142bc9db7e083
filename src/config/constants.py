"""Constants for the configuration module."""

# Log component names
COMPONENT_CONFIG = "config"
COMPONENT_CLI = "cli"
COMPONENT_ENGINE = "engine"

# Default configuration file, relative to the working directory
DEFAULT_CONFIG_PATH = "config/sentinel.yaml"

# Validation result values
VALIDATION_PASSED = "PASSED"
VALIDATION_FAILED = "FAILED"
