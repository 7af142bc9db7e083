"""Unit tests for configuration state machine."""

import pytest

from src.config.state_machine import (
    ConfigState,
    ConfigStateError,
    ConfigStateMachine,
)


class TestConfigState:
    """Tests for ConfigState enum."""

    @pytest.mark.unit
    def test_all_states_defined(self) -> None:
        """Test that all expected states are defined."""
        expected_states = {"UNLOADED", "LOADING", "VALIDATED", "READY", "FAILED"}
        assert {state.name for state in ConfigState} == expected_states


class TestConfigStateMachine:
    """Tests for ConfigStateMachine."""

    @pytest.mark.unit
    def test_initial_state(self) -> None:
        """Test that initial state is UNLOADED."""
        assert ConfigStateMachine().state == ConfigState.UNLOADED

    @pytest.mark.unit
    def test_happy_path(self) -> None:
        """Test UNLOADED -> LOADING -> VALIDATED -> READY."""
        machine = ConfigStateMachine()
        machine.transition(ConfigState.LOADING)
        machine.transition(ConfigState.VALIDATED)
        machine.transition(ConfigState.READY)
        assert machine.is_ready() is True
        assert machine.is_terminal() is True

    @pytest.mark.unit
    def test_failed_from_non_terminal_states(self) -> None:
        """Test that every non-terminal state can fail."""
        paths = [
            [],
            [ConfigState.LOADING],
            [ConfigState.LOADING, ConfigState.VALIDATED],
        ]
        for path in paths:
            machine = ConfigStateMachine()
            for state in path:
                machine.transition(state)
            machine.transition(ConfigState.FAILED)
            assert machine.is_failed() is True

    @pytest.mark.unit
    def test_invalid_transition_unloaded_to_validated(self) -> None:
        """Test invalid transition from UNLOADED directly to VALIDATED."""
        machine = ConfigStateMachine()
        with pytest.raises(ConfigStateError) as exc_info:
            machine.transition(ConfigState.VALIDATED)
        assert exc_info.value.from_state == ConfigState.UNLOADED
        assert exc_info.value.to_state == ConfigState.VALIDATED

    @pytest.mark.unit
    def test_no_transitions_from_failed(self) -> None:
        """Test that FAILED is terminal."""
        machine = ConfigStateMachine()
        machine.transition(ConfigState.FAILED)
        assert machine.is_terminal() is True
        assert machine.can_transition(ConfigState.LOADING) is False
        with pytest.raises(ConfigStateError):
            machine.transition(ConfigState.LOADING)

    @pytest.mark.unit
    def test_can_transition(self) -> None:
        """Test can_transition for valid and invalid targets."""
        machine = ConfigStateMachine()
        assert machine.can_transition(ConfigState.LOADING) is True
        assert machine.can_transition(ConfigState.READY) is False


class TestConfigStateError:
    """Tests for ConfigStateError."""

    @pytest.mark.unit
    def test_error_message(self) -> None:
        """Test error message format."""
        error = ConfigStateError(ConfigState.UNLOADED, ConfigState.READY)
        assert "UNLOADED -> READY" in str(error)
