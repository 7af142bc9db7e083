"""Boundary normalizers from catalog payloads to RawItem.

Records are validated here, before the engine runs. A record that cannot
become a valid RawItem raises BatchValidationError; the engine never sees
partial items.
"""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from src.intake.errors import BatchValidationError, RecordShapeError
from src.intake.models import CategoryHint, RawItem, SourceKind


logger = structlog.get_logger()

# Envelope keys used by the upstream search APIs
_OPENALEX_RESULTS_KEY = "results"
_GITHUB_ITEMS_KEY = "items"
_OPENALEX_IMPACT_KEY = "2yr_mean_citedness"


def _nested(record: dict[str, Any], key: str, loc: str | None = None) -> dict[str, Any]:
    """Return a nested object field, treating null or absent as empty."""
    value = record.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise RecordShapeError(loc or key, "an object")
    return value


def _parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO date or datetime string, assuming UTC when naive.

    Args:
        value: Raw timestamp value.

    Returns:
        Aware datetime, or None if absent or unparseable.
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def raw_item_from_openalex(work: dict[str, Any]) -> RawItem:
    """Normalize an OpenAlex ``works`` record.

    Args:
        work: One element of the OpenAlex ``results`` list.

    Returns:
        Validated RawItem of kind PUBLICATION.

    Raises:
        ValidationError: If the record lacks an id or a citation count.
        RecordShapeError: If a nested field is not an object or list.
    """
    primary_location = _nested(work, "primary_location")
    venue = _nested(primary_location, "source", "primary_location.source")
    summary_stats = _nested(venue, "summary_stats", "primary_location.source.summary_stats")
    open_access = _nested(work, "open_access")

    concepts = work.get("concepts") or []
    if not isinstance(concepts, list):
        raise RecordShapeError("concepts", "a list")

    hints = []
    for position, concept in enumerate(concepts):
        if not isinstance(concept, dict):
            raise RecordShapeError(f"concepts.{position}", "an object")
        if concept.get("display_name"):
            hints.append(
                CategoryHint(
                    label=concept["display_name"],
                    weight=concept.get("score", 1.0),
                    level=concept.get("level"),
                )
            )

    return RawItem(
        identifier=work.get("id") or "",
        display_text=work.get("title") or work.get("display_name") or "",
        quality_metric=work.get("cited_by_count"),
        source_kind=SourceKind.PUBLICATION,
        category_hints=tuple(hints),
        published_at=_parse_timestamp(work.get("publication_date")),
        venue=venue.get("display_name"),
        impact_metric=summary_stats.get(_OPENALEX_IMPACT_KEY),
        url=open_access.get("oa_url") or work.get("doi"),
    )


def raw_item_from_github(repo: dict[str, Any]) -> RawItem:
    """Normalize a GitHub repository search record.

    Args:
        repo: One element of the GitHub search ``items`` list.

    Returns:
        Validated RawItem of kind REPOSITORY.

    Raises:
        ValidationError: If the record lacks a name or a star count.
        RecordShapeError: If ``owner`` is not an object.
    """
    owner = _nested(repo, "owner")
    language = repo.get("language")
    text = " ".join(part for part in (repo.get("name"), repo.get("description")) if part)

    attributes: dict[str, float] = {}
    forks = repo.get("forks_count", repo.get("forks"))
    if forks is not None:
        attributes["forks"] = forks

    return RawItem(
        identifier=repo.get("full_name") or "",
        display_text=text,
        quality_metric=repo.get("stargazers_count"),
        source_kind=SourceKind.REPOSITORY,
        category_hints=(CategoryHint(label=language),) if language else (),
        published_at=_parse_timestamp(repo.get("created_at")),
        venue=owner.get("login"),
        language=language,
        url=repo.get("html_url"),
        attributes=attributes,
    )


def normalize_record(record: dict[str, Any], source_kind: SourceKind) -> RawItem:
    """Normalize one record, detecting catalog payloads by their fields.

    Records that already have the RawItem shape are validated as-is.

    Args:
        record: Raw record.
        source_kind: Kind of the batch the record belongs to.

    Returns:
        Validated RawItem.

    Raises:
        ValidationError: If the record is malformed.
    """
    if source_kind == SourceKind.PUBLICATION and "cited_by_count" in record:
        return raw_item_from_openalex(record)
    if source_kind == SourceKind.REPOSITORY and "stargazers_count" in record:
        return raw_item_from_github(record)
    return RawItem.model_validate({"source_kind": source_kind, **record})


def _rejected(source: str, index: int, errors: list[dict[str, str]]) -> BatchValidationError:
    logger.warning(
        "record_rejected",
        component="intake",
        source=source,
        index=index,
        errors=errors,
    )
    return BatchValidationError(source, index, errors)


def normalize_batch(
    records: list[dict[str, Any]],
    source_kind: SourceKind,
    source: str = "batch",
) -> list[RawItem]:
    """Normalize a batch of records, failing on the first malformed one.

    Args:
        records: Raw records in query order.
        source_kind: Kind of the batch.
        source: Batch label for error messages.

    Returns:
        RawItems in input order.

    Raises:
        BatchValidationError: If a record is malformed.
    """
    items: list[RawItem] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise BatchValidationError(
                source,
                index,
                [{"loc": "record", "msg": "Record must be an object", "type": "dict_type"}],
            )
        try:
            items.append(normalize_record(record, source_kind))
        except ValidationError as e:
            errors = [
                {
                    "loc": ".".join(str(loc) for loc in err["loc"]),
                    "msg": err["msg"],
                    "type": err["type"],
                }
                for err in e.errors()
            ]
            raise _rejected(source, index, errors) from e
        except RecordShapeError as e:
            raise _rejected(source, index, [e.to_error()]) from e
        except TypeError as e:
            error = {"loc": "record", "msg": str(e), "type": "record_shape"}
            raise _rejected(source, index, [error]) from e
    return items


def load_batch(path: Path, source_kind: SourceKind) -> list[RawItem]:
    """Load a JSON batch file written by a retrieval collaborator.

    Accepts a bare list of records or an OpenAlex / GitHub search envelope.

    Args:
        path: Path to the JSON file.
        source_kind: Kind of the batch.

    Returns:
        RawItems in file order.

    Raises:
        BatchValidationError: If the file shape or any record is malformed,
            or the file is not UTF-8.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise BatchValidationError(
            str(path),
            -1,
            [{"loc": "file", "msg": f"Not UTF-8 text: {e.reason}", "type": "unicode_decode_error"}],
        ) from e
    data = json.loads(text)

    if isinstance(data, dict):
        data = data.get(_OPENALEX_RESULTS_KEY, data.get(_GITHUB_ITEMS_KEY))

    if not isinstance(data, list):
        raise BatchValidationError(
            str(path),
            -1,
            [{"loc": "root", "msg": "Expected a list of records", "type": "list_type"}],
        )

    items = normalize_batch(data, source_kind, source=str(path))
    logger.info(
        "batch_loaded",
        component="intake",
        source=str(path),
        source_kind=source_kind.value,
        item_count=len(items),
    )
    return items
