"""Heat aggregation of topics and strategy tags."""

from src.heat.aggregator import (
    BASELINE_WEIGHT,
    HeatAggregator,
    aggregate_heat,
    item_weight,
)
from src.heat.models import HeatEntry


__all__ = [
    "BASELINE_WEIGHT",
    "HeatAggregator",
    "HeatEntry",
    "aggregate_heat",
    "item_weight",
]
