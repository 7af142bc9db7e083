"""Structured logging for sentinel runs.

Logs go to stderr so a report echoed on stdout stays machine-readable.
"""

import logging
import sys
from typing import TextIO

import structlog


# Context keys bound for the lifetime of one CLI invocation
RUN_CONTEXT_KEYS = ("run_id", "command")


def resolve_level(level: int | str) -> int:
    """Map a level name such as "debug" or a numeric level to an int.

    Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: int | str = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structlog for a sentinel run.

    Args:
        level: Minimum level, numeric or by name.
        output: Stream receiving log lines.
        json_format: Emit JSON lines instead of console output.
    """
    numeric_level = resolve_level(level)
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )
    logging.basicConfig(format="%(message)s", stream=output, level=numeric_level)


def bind_run_context(run_id: str, command: str | None = None) -> None:
    """Attach the run identifier (and CLI command) to every log line.

    Args:
        run_id: Unique run identifier.
        command: CLI command name, when known.
    """
    context: dict[str, str] = {"run_id": run_id}
    if command is not None:
        context["command"] = command
    structlog.contextvars.bind_contextvars(**context)


def clear_run_context() -> None:
    """Remove keys bound by bind_run_context."""
    structlog.contextvars.unbind_contextvars(*RUN_CONTEXT_KEYS)
