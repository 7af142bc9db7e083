"""Data models for heat aggregation."""

from typing import Annotated

from pydantic import Field

from src.data_model import StrictBaseModel


class HeatEntry(StrictBaseModel):
    """Accumulated heat of one tag.

    Attributes:
        tag: Topic label or strategy tag.
        accumulated_score: Sum of ``quality_metric + 1`` over included
            items carrying the tag.
        occurrences: Number of included items carrying the tag.
    """

    tag: Annotated[str, Field(min_length=1)]
    accumulated_score: Annotated[float, Field(ge=0.0)]
    occurrences: Annotated[int, Field(ge=0)]
