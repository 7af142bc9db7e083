"""Ranking and digest emission.

Sorts accepted items by tier then quality, truncates to the configured
size, and assembles the Digest with counts, heat and tag histogram.
"""

from src.ranker.models import Digest
from src.ranker.ranker import (
    build_digest,
    build_histogram,
    rank_items,
    rank_key,
    truncate,
)


__all__ = [
    "Digest",
    "build_digest",
    "build_histogram",
    "rank_items",
    "rank_key",
    "truncate",
]
