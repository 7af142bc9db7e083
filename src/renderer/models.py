"""Data models for the digest renderer."""

from typing import Annotated

from pydantic import Field

from src.data_model import StrictBaseModel


class GeneratedFile(StrictBaseModel):
    """Record of a file written by the renderer.

    Attributes:
        path: Target path as given.
        bytes_written: Size of the written content.
        sha256: SHA-256 of the written content.
    """

    path: Annotated[str, Field(min_length=1)]
    bytes_written: Annotated[int, Field(ge=0)]
    sha256: Annotated[str, Field(pattern=r"^[0-9a-f]{64}$")]
