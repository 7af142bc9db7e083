"""Application settings powered by Pydantic BaseSettings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.config.constants import DEFAULT_CONFIG_PATH


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SENTINEL_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config: Path = Field(default=Path(DEFAULT_CONFIG_PATH))
    log_level: str = "INFO"
    json_logs: bool = True
    # Session labels and output dates are reported in this offset (UTC+8 by default).
    utc_offset_hours: int = Field(default=8, ge=-12, le=14)


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
