"""Data models for candidate items entering the engine."""

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import Field, field_validator

from src.data_model import StrictBaseModel


class SourceKind(str, Enum):
    """Upstream catalog an item was retrieved from."""

    PUBLICATION = "publication"
    REPOSITORY = "repository"


class CategoryHint(StrictBaseModel):
    """A weighted label attached to an item by its source.

    Attributes:
        label: Display label (concept name, primary language, ...).
        weight: Source-assigned confidence or relevance of the label.
        level: Hierarchy depth when the source has one (0 is broadest).
    """

    label: Annotated[str, Field(min_length=1)]
    weight: Annotated[float, Field(ge=0.0)] = 1.0
    level: Annotated[int | None, Field(ge=0)] = None


class RawItem(StrictBaseModel):
    """One candidate record from a source.

    Immutable once built. Construction is the validation boundary:
    an empty identifier or a negative quality metric is rejected here,
    before any classification happens.

    Attributes:
        identifier: Source-unique key used for deduplication.
        display_text: Title or name plus description, used for rule matching.
        quality_metric: Citation count or star count.
        source_kind: Which catalog the item came from.
        category_hints: Ordered weighted labels (concepts, language).
        published_at: Publication or creation timestamp.
        venue: Source-identity field (journal name, repository owner).
        impact_metric: Optional venue impact figure.
        language: Primary language for repositories.
        url: Link to the item.
        attributes: Numeric extras such as ``forks``.
    """

    identifier: Annotated[str, Field(min_length=1)]
    display_text: str = ""
    quality_metric: Annotated[float, Field(ge=0.0)]
    source_kind: SourceKind
    category_hints: tuple[CategoryHint, ...] = ()
    published_at: datetime | None = None
    venue: str | None = None
    impact_metric: Annotated[float | None, Field(ge=0.0)] = None
    language: str | None = None
    url: str | None = None
    attributes: dict[str, float] = Field(default_factory=dict)

    @field_validator("category_hints", mode="before")
    @classmethod
    def coerce_missing_hints(cls, v: object) -> object:
        """Treat a null hint list as empty."""
        return () if v is None else v

    @field_validator("attributes", mode="before")
    @classmethod
    def coerce_missing_attributes(cls, v: object) -> object:
        """Treat null attributes as empty."""
        return {} if v is None else v

    @property
    def match_text(self) -> str:
        """Lowercased display text used by strategy rules."""
        return self.display_text.lower()
