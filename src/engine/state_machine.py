"""State machine for one classification pass."""

from enum import Enum

import structlog


logger = structlog.get_logger()


class EngineState(str, Enum):
    """State of the engine during one pass.

    - BATCHES_READY: Input batches are ready for processing
    - DEDUPLICATED: Batches have been merged on identifier
    - CLASSIFIED: Every item has a tier decision and tags
    - AGGREGATED: Heat has been accumulated from included items
    - DIGEST_EMITTED: The ranked Digest has been assembled
    """

    BATCHES_READY = "BATCHES_READY"
    DEDUPLICATED = "DEDUPLICATED"
    CLASSIFIED = "CLASSIFIED"
    AGGREGATED = "AGGREGATED"
    DIGEST_EMITTED = "DIGEST_EMITTED"


_VALID_TRANSITIONS: dict[EngineState, set[EngineState]] = {
    EngineState.BATCHES_READY: {EngineState.DEDUPLICATED},
    EngineState.DEDUPLICATED: {EngineState.CLASSIFIED},
    EngineState.CLASSIFIED: {EngineState.AGGREGATED},
    EngineState.AGGREGATED: {EngineState.DIGEST_EMITTED},
    EngineState.DIGEST_EMITTED: set(),  # Terminal state
}


class EngineStateTransitionError(Exception):
    """Raised when an illegal state transition is attempted."""

    def __init__(
        self,
        run_id: str,
        from_state: EngineState,
        to_state: EngineState,
    ) -> None:
        """Initialize the transition error.

        Args:
            run_id: Identifier of the run.
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.run_id = run_id
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Illegal engine state transition for run '{run_id}': "
            f"{from_state.value} -> {to_state.value}"
        )


class EngineStateMachine:
    """Enforces stage order within a pass and logs each change."""

    def __init__(
        self,
        run_id: str,
        initial_state: EngineState = EngineState.BATCHES_READY,
    ) -> None:
        """Initialize the state machine.

        Args:
            run_id: Identifier for the current run.
            initial_state: Starting state.
        """
        self._run_id = run_id
        self._state = initial_state
        self._log = logger.bind(component="engine", run_id=run_id)

    @property
    def state(self) -> EngineState:
        """Get the current state."""
        return self._state

    @property
    def is_terminal(self) -> bool:
        """Check if current state is terminal."""
        return self._state == EngineState.DIGEST_EMITTED

    def can_transition_to(self, target: EngineState) -> bool:
        """Check if a transition to the target state is valid."""
        return target in _VALID_TRANSITIONS.get(self._state, set())

    def transition_to(self, target: EngineState) -> None:
        """Transition to a new state.

        Args:
            target: The target state.

        Raises:
            EngineStateTransitionError: If the transition is invalid.
        """
        if not self.can_transition_to(target):
            self._log.error(
                "illegal_engine_state_transition",
                from_state=self._state.value,
                to_state=target.value,
            )
            raise EngineStateTransitionError(self._run_id, self._state, target)

        old_state = self._state
        self._state = target
        self._log.debug(
            "engine_state_transition",
            from_state=old_state.value,
            to_state=target.value,
        )

    def to_deduplicated(self) -> None:
        """Transition to DEDUPLICATED state."""
        self.transition_to(EngineState.DEDUPLICATED)

    def to_classified(self) -> None:
        """Transition to CLASSIFIED state."""
        self.transition_to(EngineState.CLASSIFIED)

    def to_aggregated(self) -> None:
        """Transition to AGGREGATED state."""
        self.transition_to(EngineState.AGGREGATED)

    def to_digest_emitted(self) -> None:
        """Transition to DIGEST_EMITTED state."""
        self.transition_to(EngineState.DIGEST_EMITTED)
