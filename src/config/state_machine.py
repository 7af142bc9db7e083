"""Configuration loading state machine."""

from enum import Enum
from typing import ClassVar


class ConfigState(str, Enum):
    """Configuration loading states.

    State transitions:
        UNLOADED -> LOADING: Start reading the configuration file
        LOADING -> VALIDATED: File parsed and validated
        VALIDATED -> READY: Configuration handed to the caller
        Any non-terminal -> FAILED: Read, parse or validation error
    """

    UNLOADED = "UNLOADED"
    LOADING = "LOADING"
    VALIDATED = "VALIDATED"
    READY = "READY"
    FAILED = "FAILED"


class ConfigStateError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_state: ConfigState, to_state: ConfigState) -> None:
        """Initialize the error.

        Args:
            from_state: The current state.
            to_state: The attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid config state transition: {from_state.value} -> {to_state.value}"
        )


class ConfigStateMachine:
    """Guards the order of configuration loading steps."""

    TRANSITIONS: ClassVar[dict[ConfigState, frozenset[ConfigState]]] = {
        ConfigState.UNLOADED: frozenset({ConfigState.LOADING, ConfigState.FAILED}),
        ConfigState.LOADING: frozenset({ConfigState.VALIDATED, ConfigState.FAILED}),
        ConfigState.VALIDATED: frozenset({ConfigState.READY, ConfigState.FAILED}),
        ConfigState.READY: frozenset(),
        ConfigState.FAILED: frozenset(),
    }

    def __init__(self) -> None:
        self._state = ConfigState.UNLOADED

    @property
    def state(self) -> ConfigState:
        """Get the current state."""
        return self._state

    def can_transition(self, to_state: ConfigState) -> bool:
        """Check whether a transition is allowed from the current state."""
        return to_state in self.TRANSITIONS[self._state]

    def transition(self, to_state: ConfigState) -> None:
        """Move to a new state.

        Args:
            to_state: The target state.

        Raises:
            ConfigStateError: If the transition is not allowed.
        """
        if not self.can_transition(to_state):
            raise ConfigStateError(self._state, to_state)
        self._state = to_state

    def is_terminal(self) -> bool:
        """Check if no further transitions are possible."""
        return not self.TRANSITIONS[self._state]

    def is_ready(self) -> bool:
        """Check if configuration is ready for use."""
        return self._state == ConfigState.READY

    def is_failed(self) -> bool:
        """Check if configuration loading has failed."""
        return self._state == ConfigState.FAILED
