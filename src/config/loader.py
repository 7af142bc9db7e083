"""Configuration loader with validation and state machine."""

import hashlib
import time
from dataclasses import dataclass
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from src.config.constants import COMPONENT_CONFIG
from src.config.schemas.engine import EngineConfig
from src.config.state_machine import ConfigState, ConfigStateMachine


logger = structlog.get_logger()


@dataclass(frozen=True)
class LoadedConfig:
    """Validated engine configuration with its provenance.

    Attributes:
        engine: The validated engine configuration.
        file_path: Resolved path of the loaded file.
        file_sha256: SHA-256 of the raw file bytes.
    """

    engine: EngineConfig
    file_path: str
    file_sha256: str

    def compute_checksum(self) -> str:
        """Compute SHA-256 of the normalized configuration.

        Two files that differ only in formatting produce the same checksum.

        Returns:
            Hex-encoded SHA-256 checksum.
        """
        return self.engine.checksum()


class ConfigLoader:
    """Loads and validates the engine configuration file.

    Implements a state machine for configuration loading:
    UNLOADED -> LOADING -> VALIDATED -> READY

    Configuration is immutable once VALIDATED.
    """

    def __init__(self, run_id: str) -> None:
        """Initialize the loader.

        Args:
            run_id: Unique identifier for the current run.
        """
        self._run_id = run_id
        self._state_machine = ConfigStateMachine()
        self._validation_errors: list[dict[str, str]] = []
        self._validation_duration_ms: float = 0.0

    @property
    def state(self) -> ConfigState:
        """Get the current loader state."""
        return self._state_machine.state

    @property
    def validation_errors(self) -> list[dict[str, str]]:
        """Get validation errors if any."""
        return self._validation_errors.copy()

    @property
    def validation_duration_ms(self) -> float:
        """Get validation duration in milliseconds."""
        return self._validation_duration_ms

    def load(self, config_path: Path) -> LoadedConfig:
        """Load and validate the engine configuration.

        Args:
            config_path: Path to sentinel.yaml.

        Returns:
            LoadedConfig with the validated configuration.

        Raises:
            ValidationError: If schema validation fails.
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not UTF-8.
            yaml.YAMLError: If YAML parsing fails.
        """
        start_time = time.perf_counter()
        self._state_machine.transition(ConfigState.LOADING)

        log = logger.bind(
            run_id=self._run_id,
            component=COMPONENT_CONFIG,
            file_path=str(config_path),
        )
        log.info("loading_config_file")

        try:
            content_bytes = config_path.read_bytes()
            checksum = hashlib.sha256(content_bytes).hexdigest()
            data = yaml.safe_load(content_bytes.decode("utf-8")) or {}
            engine = EngineConfig.model_validate(data)
        except ValidationError as e:
            self._fail(log, "config_validation_failed", e.errors())
            raise
        except FileNotFoundError as e:
            self._fail(
                log,
                "config_file_not_found",
                [{"loc": ("file",), "msg": str(e), "type": "file_not_found"}],
            )
            raise
        except OSError as e:
            self._fail(
                log,
                "config_file_unreadable",
                [{"loc": ("file",), "msg": str(e), "type": "file_unreadable"}],
            )
            raise
        except UnicodeDecodeError as e:
            self._fail(
                log,
                "config_file_not_utf8",
                [
                    {
                        "loc": ("file",),
                        "msg": f"Not UTF-8 text: {e.reason}",
                        "type": "unicode_decode_error",
                    }
                ],
            )
            raise
        except yaml.YAMLError as e:
            self._fail(
                log,
                "config_yaml_parse_error",
                [{"loc": ("yaml",), "msg": str(e), "type": "yaml_parse_error"}],
            )
            raise

        self._state_machine.transition(ConfigState.VALIDATED)
        self._validation_duration_ms = (time.perf_counter() - start_time) * 1000

        log.info(
            "config_validation_complete",
            file_sha256=checksum,
            keeper_rules=len(engine.strategies.keepers),
            signal_rules=len(engine.strategies.signals),
            trusted_sources=len(engine.trusted_sources),
            config_validation_duration_ms=self._validation_duration_ms,
        )

        loaded = LoadedConfig(
            engine=engine,
            file_path=str(config_path.resolve()),
            file_sha256=checksum,
        )
        self._state_machine.transition(ConfigState.READY)
        return loaded

    def _fail(
        self,
        log: structlog.stdlib.BoundLogger,
        event: str,
        errors: list,
    ) -> None:
        """Record errors and move the loader into FAILED."""
        self._state_machine.transition(ConfigState.FAILED)
        for err in errors:
            self._validation_errors.append(
                {
                    "loc": ".".join(str(loc) for loc in err["loc"]),
                    "msg": err["msg"],
                    "type": err["type"],
                }
            )
        log.error(
            event,
            validation_error_count=len(self._validation_errors),
            errors=self._validation_errors,
        )

    def get_validation_summary(self) -> dict[str, object]:
        """Get a summary of the validation process.

        Returns:
            Dictionary with validation summary.
        """
        return {
            "run_id": self._run_id,
            "state": self._state_machine.state.value,
            "validation_error_count": len(self._validation_errors),
            "validation_errors": self._validation_errors,
            "validation_duration_ms": self._validation_duration_ms,
        }
