"""Digest rendering to JSON reports."""

from src.renderer.io import AtomicWriter
from src.renderer.json_renderer import (
    JsonRenderer,
    format_heat,
    local_time,
    render_digest_payload,
    run_label,
)
from src.renderer.models import GeneratedFile


__all__ = [
    "AtomicWriter",
    "GeneratedFile",
    "JsonRenderer",
    "format_heat",
    "local_time",
    "render_digest_payload",
    "run_label",
]
