"""Signal classification and ranking engine."""

import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import structlog

from src.classifier import Classifier
from src.config.schemas.engine import EngineConfig
from src.engine.metrics import EngineMetrics
from src.engine.state_machine import EngineStateMachine
from src.heat import HeatAggregator
from src.intake import Deduplicator, RawItem
from src.ranker import Digest, build_digest
from src.strategies import RuleFailure, StrategyRegistry


logger = structlog.get_logger()


@dataclass(frozen=True)
class EngineResult:
    """Outcome of one pass.

    Attributes:
        digest: The ranked digest.
        diagnostics: Rule failures observed during classification.
        metrics: Counters and stage timings for the pass.
    """

    digest: Digest
    diagnostics: tuple[RuleFailure, ...] = ()
    metrics: EngineMetrics = field(default_factory=EngineMetrics)


class SignalEngine:
    """Runs one pass over fetched batches.

    Implements a state machine flow:
        BATCHES_READY -> DEDUPLICATED -> CLASSIFIED -> AGGREGATED -> DIGEST_EMITTED

    The engine holds configuration and rules only. Heat maps, metrics
    and the state machine are created per call to ``run``, so one engine
    can serve repeated passes without carrying state between them.
    """

    def __init__(
        self,
        config: EngineConfig,
        registry: StrategyRegistry | None = None,
        run_id: str = "engine",
    ) -> None:
        """Initialize the engine.

        Args:
            config: Validated engine configuration.
            registry: Rules to apply, built from config when omitted.
            run_id: Run identifier for logging and state.
        """
        self._config = config
        self._registry = registry or StrategyRegistry.from_config(config.strategies)
        self._run_id = run_id
        self._log = logger.bind(component="engine", run_id=run_id)

    @property
    def config(self) -> EngineConfig:
        """Engine configuration."""
        return self._config

    @property
    def registry(self) -> StrategyRegistry:
        """Registered rules."""
        return self._registry

    def run(self, batches: Iterable[Sequence[RawItem]]) -> EngineResult:
        """Deduplicate, classify, aggregate and rank one set of batches.

        Args:
            batches: One sequence of items per source query, in priority order.

        Returns:
            EngineResult with digest, diagnostics and metrics.
        """
        batch_list = [list(batch) for batch in batches]
        metrics = EngineMetrics(
            batches_in=len(batch_list),
            items_in=sum(len(batch) for batch in batch_list),
        )
        machine = EngineStateMachine(self._run_id)

        self._log.info(
            "engine_started",
            batches_in=metrics.batches_in,
            items_in=metrics.items_in,
            keeper_rules=len(self._registry.keepers),
            signal_rules=len(self._registry.signals),
        )

        # Phase 1: Deduplicate
        start = time.perf_counter()
        deduplicator = Deduplicator(run_id=self._run_id)
        unique = deduplicator.merge(batch_list)
        metrics.duplicates_dropped = deduplicator.duplicates_dropped
        machine.to_deduplicated()
        metrics.record_stage("dedup", (time.perf_counter() - start) * 1000)

        # Phase 2: Classify
        start = time.perf_counter()
        classifier = Classifier(self._config, self._registry, run_id=self._run_id)
        classification = classifier.classify_all(unique)
        for classified in classification.items:
            if classified.included:
                metrics.record_inclusion(classified.inclusion_reason.value)
            else:
                metrics.excluded_total += 1
        metrics.rule_failures = len(classification.failures)
        machine.to_classified()
        metrics.record_stage("classify", (time.perf_counter() - start) * 1000)

        # Phase 3: Aggregate heat
        start = time.perf_counter()
        heat = HeatAggregator().add_all(classification.items)
        machine.to_aggregated()
        metrics.record_stage("aggregate", (time.perf_counter() - start) * 1000)

        # Phase 4: Rank and emit
        start = time.perf_counter()
        output = self._config.output
        digest = build_digest(
            classification.items,
            heat,
            max_items=output.max_items,
            max_top_tags=output.max_top_tags,
            uncategorized_tag=self._config.uncategorized_tag,
        )
        metrics.items_out = len(digest.items)
        machine.to_digest_emitted()
        metrics.record_stage("rank", (time.perf_counter() - start) * 1000)

        self._log.info(
            "engine_complete",
            state=machine.state.value,
            scanned_count=digest.scanned_count,
            included_count=digest.included_count,
            items_out=metrics.items_out,
            rule_failures=metrics.rule_failures,
        )

        return EngineResult(
            digest=digest,
            diagnostics=classification.failures,
            metrics=metrics,
        )


def run_pass(
    batches: Iterable[Sequence[RawItem]],
    config: EngineConfig,
    registry: StrategyRegistry | None = None,
    run_id: str = "pure",
) -> EngineResult:
    """Pure function API for one classification pass.

    Args:
        batches: One sequence of items per source query, in priority order.
        config: Engine configuration.
        registry: Rules to apply, built from config when omitted.
        run_id: Run identifier.

    Returns:
        EngineResult for the pass.
    """
    return SignalEngine(config, registry=registry, run_id=run_id).run(batches)
