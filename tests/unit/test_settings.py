"""Unit tests for environment settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.settings import AppSettings


class TestAppSettings:
    """Tests for AppSettings."""

    @pytest.mark.unit
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults apply when no variables are set."""
        for name in ("SENTINEL_CONFIG", "SENTINEL_LOG_LEVEL", "SENTINEL_JSON_LOGS"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv("SENTINEL_UTC_OFFSET_HOURS", raising=False)

        settings = AppSettings(_env_file=None)

        assert settings.config == Path("config/sentinel.yaml")
        assert settings.utc_offset_hours == 8
        assert settings.json_logs is True

    @pytest.mark.unit
    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Prefixed variables override defaults."""
        monkeypatch.setenv("SENTINEL_CONFIG", "/etc/sentinel.yaml")
        monkeypatch.setenv("SENTINEL_UTC_OFFSET_HOURS", "0")
        monkeypatch.setenv("SENTINEL_JSON_LOGS", "false")

        settings = AppSettings(_env_file=None)

        assert settings.config == Path("/etc/sentinel.yaml")
        assert settings.utc_offset_hours == 0
        assert settings.json_logs is False

    @pytest.mark.unit
    def test_offset_bounds(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Offsets outside real time zones are rejected."""
        monkeypatch.setenv("SENTINEL_UTC_OFFSET_HOURS", "20")

        with pytest.raises(ValidationError):
            AppSettings(_env_file=None)
