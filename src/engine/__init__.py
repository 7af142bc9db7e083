"""Signal classification and ranking engine.

Threads one pass through Deduplicator, Classifier, HeatAggregator and
the ranker, and returns the Digest with diagnostics and metrics.
"""

from src.engine.engine import EngineResult, SignalEngine, run_pass
from src.engine.metrics import EngineMetrics
from src.engine.state_machine import (
    EngineState,
    EngineStateMachine,
    EngineStateTransitionError,
)


__all__ = [
    "EngineMetrics",
    "EngineResult",
    "EngineState",
    "EngineStateMachine",
    "EngineStateTransitionError",
    "SignalEngine",
    "run_pass",
]
