"""Structured logging helpers."""

from src.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
    resolve_level,
)


__all__ = [
    "bind_run_context",
    "clear_run_context",
    "configure_logging",
    "resolve_level",
]
