"""Intake module: candidate item models, boundary normalization, deduplication."""

from src.intake.dedup import Deduplicator, deduplicate
from src.intake.errors import BatchValidationError, RecordShapeError
from src.intake.models import CategoryHint, RawItem, SourceKind
from src.intake.normalize import (
    load_batch,
    normalize_batch,
    raw_item_from_github,
    raw_item_from_openalex,
)


__all__ = [
    "BatchValidationError",
    "CategoryHint",
    "Deduplicator",
    "RawItem",
    "RecordShapeError",
    "SourceKind",
    "deduplicate",
    "load_batch",
    "normalize_batch",
    "raw_item_from_github",
    "raw_item_from_openalex",
]
