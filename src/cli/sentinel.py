"""CLI commands for the signal sentinel."""

import json
import logging
import sys
import uuid
from datetime import UTC, datetime
from pathlib import Path

import click
import structlog

from src.config import ConfigLoader, ConfigState, LoadedConfig
from src.config.constants import COMPONENT_CLI, VALIDATION_PASSED
from src.config.error_hints import format_validation_error
from src.engine import SignalEngine
from src.intake import BatchValidationError, RawItem, SourceKind, load_batch
from src.observability.logging import bind_run_context, configure_logging
from src.renderer import JsonRenderer, format_heat, render_digest_payload
from src.settings import get_settings


logger = structlog.get_logger()

# Hot topics echoed in the run summary
SUMMARY_TOP_TOPICS = 3


def _echo_config_errors(loader: ConfigLoader) -> None:
    click.echo("Configuration validation failed:", err=True)
    for error in loader.validation_errors:
        formatted = format_validation_error(
            location=error["loc"],
            message=error["msg"],
            error_type=error.get("type", "unknown"),
            include_hint=True,
        )
        click.echo(f"  - {formatted}", err=True)


def _load_configuration(config_path: Path, run_id: str) -> LoadedConfig:
    """Load and validate configuration, exit on failure.

    Args:
        config_path: Path to sentinel.yaml.
        run_id: Run identifier.

    Returns:
        Validated configuration.
    """
    log = logger.bind(run_id=run_id, component=COMPONENT_CLI)
    loader = ConfigLoader(run_id=run_id)

    try:
        loaded = loader.load(config_path)
    except Exception as e:  # noqa: BLE001
        log.warning(
            "config_load_failed",
            error=str(e),
            validation_errors=loader.validation_errors,
        )
        _echo_config_errors(loader)
        sys.exit(1)

    if loader.state != ConfigState.READY:
        log.error("unexpected_state", state=loader.state.name)
        sys.exit(1)

    return loaded


def _load_batches(
    papers: tuple[Path, ...],
    repos: tuple[Path, ...],
) -> list[list[RawItem]]:
    """Load batch files in priority order: publications, then repositories.

    Exits with status 1 on a malformed file.
    """
    sources = [(p, SourceKind.PUBLICATION) for p in papers] + [
        (r, SourceKind.REPOSITORY) for r in repos
    ]
    batches: list[list[RawItem]] = []
    for path, kind in sources:
        try:
            batches.append(load_batch(path, kind))
        except BatchValidationError as e:
            click.echo(f"Error: {e}", err=True)
            for error in e.errors:
                click.echo(f"  - {error['loc']}: {error['msg']}", err=True)
            sys.exit(1)
        except json.JSONDecodeError as e:
            click.echo(f"Error: {path} is not valid JSON: {e}", err=True)
            sys.exit(1)
        except OSError as e:
            click.echo(f"Error: cannot read {path}: {e}", err=True)
            sys.exit(1)
    return batches


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Signal sentinel: classify and rank research and repository signals."""


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to sentinel.yaml (default: $SENTINEL_CONFIG or config/sentinel.yaml).",
)
@click.option(
    "--papers",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON batch of publication records. May be repeated.",
)
@click.option(
    "--repos",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON batch of repository records. May be repeated.",
)
@click.option(
    "--out",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the report here instead of stdout.",
)
@click.option(
    "--utc-offset",
    "utc_offset_hours",
    type=click.IntRange(-12, 14),
    default=None,
    help="Reporting offset in hours for the session label (default: 8).",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=None,
    help="Use JSON format for logs (default: true).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
def classify(  # noqa: PLR0913
    config_path: Path | None,
    papers: tuple[Path, ...],
    repos: tuple[Path, ...],
    output_path: Path | None,
    utc_offset_hours: int | None,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Run one classification pass over fetched batch files.

    Earlier batches win on duplicate identifiers, so publication files
    are merged first, in the order given.
    """
    if not papers and not repos:
        raise click.UsageError("Provide at least one --papers or --repos batch.")

    settings = get_settings()
    run_id = str(uuid.uuid4())
    configure_logging(
        level=logging.DEBUG if verbose else settings.log_level,
        json_format=settings.json_logs if json_logs is None else json_logs,
    )
    bind_run_context(run_id, command="classify")
    log = logger.bind(component=COMPONENT_CLI)

    config_path = config_path or settings.config
    offset = settings.utc_offset_hours if utc_offset_hours is None else utc_offset_hours
    log.info(
        "classify_started",
        config_path=str(config_path),
        papers=[str(p) for p in papers],
        repos=[str(r) for r in repos],
    )

    loaded = _load_configuration(config_path, run_id)
    batches = _load_batches(papers, repos)

    result = SignalEngine(loaded.engine, run_id=run_id).run(batches)
    digest = result.digest

    payload = render_digest_payload(
        digest,
        loaded.engine,
        now=datetime.now(UTC),
        utc_offset_hours=offset,
        run_id=run_id,
    )

    if output_path is None:
        click.echo(JsonRenderer.dumps(payload), nl=False)
    else:
        sha256 = JsonRenderer(run_id).write(output_path, payload)
        click.echo(f"Report written: {output_path} ({sha256[:12]})", err=True)

    click.echo(
        f"Scanned: {digest.scanned_count}  Included: {digest.included_count}  "
        f"Kept: {len(digest.items)}",
        err=True,
    )
    if result.diagnostics:
        click.echo(f"Rule failures: {len(result.diagnostics)}", err=True)
    for rank, entry in enumerate(digest.top_tags[:SUMMARY_TOP_TOPICS], start=1):
        click.echo(f"  {rank}. {format_heat(entry)}", err=True)

    log.info("classify_complete", **result.metrics.to_dict())


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to sentinel.yaml (default: $SENTINEL_CONFIG or config/sentinel.yaml).",
)
def validate(config_path: Path | None) -> None:
    """Validate the configuration file without running a pass."""
    run_id = str(uuid.uuid4())
    configure_logging(json_format=False)
    bind_run_context(run_id, command="validate")

    loader = ConfigLoader(run_id=run_id)
    try:
        loaded = loader.load(config_path or get_settings().config)
    except Exception:  # noqa: BLE001
        _echo_config_errors(loader)
        sys.exit(1)

    engine = loaded.engine
    click.echo(f"Configuration is valid! ({VALIDATION_PASSED})")
    click.echo(f"  Keeper rules: {len(engine.strategies.keepers)}")
    click.echo(f"  Signal rules: {len(engine.strategies.signals)}")
    click.echo(f"  Trusted sources: {len(engine.trusted_sources)}")
    click.echo(f"  Checksum: {loaded.compute_checksum()}")
