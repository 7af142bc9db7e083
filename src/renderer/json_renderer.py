"""JSON renderer for digest reports."""

import json
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import structlog

from src.classifier.models import ClassifiedItem
from src.config.schemas.engine import EngineConfig
from src.heat.models import HeatEntry
from src.ranker.models import Digest
from src.renderer.io import AtomicWriter
from src.renderer.models import GeneratedFile


logger = structlog.get_logger()

# Concepts shown per item in the report
MAX_ITEM_TOPICS = 5


def local_time(now: datetime, utc_offset_hours: int) -> datetime:
    """Convert a timestamp to the configured reporting offset."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(timezone(timedelta(hours=utc_offset_hours)))


def run_label(now: datetime, utc_offset_hours: int = 8) -> str:
    """Session label such as ``AM-8h`` in the reporting offset.

    Args:
        now: Scan time.
        utc_offset_hours: Offset of the reporting time zone.

    Returns:
        ``AM`` or ``PM``, then the 24-hour local hour.
    """
    hour = local_time(now, utc_offset_hours).hour
    session = "AM" if hour < 12 else "PM"
    return f"{session}-{hour}h"


def format_heat(entry: HeatEntry) -> str:
    """Human-readable heat line, e.g. ``Deep learning (Heat: 12)``."""
    score = entry.accumulated_score
    shown = int(score) if score.is_integer() else round(score, 2)
    return f"{entry.tag} (Heat: {shown})"


def _item_to_dict(classified: ClassifiedItem) -> dict[str, Any]:
    item = classified.item
    return {
        "identifier": item.identifier,
        "display_text": item.display_text,
        "source_kind": item.source_kind.value,
        "quality_metric": item.quality_metric,
        "tier": classified.tier.value if classified.tier else None,
        "inclusion_reason": classified.inclusion_reason.value,
        "tags": list(classified.tags),
        "signal_tags": list(classified.signal_tags),
        "topics": list(classified.topics[:MAX_ITEM_TOPICS]),
        "venue": item.venue,
        "impact_metric": item.impact_metric,
        "language": item.language,
        "published_at": item.published_at.isoformat() if item.published_at else None,
        "url": item.url,
    }


def render_digest_payload(
    digest: Digest,
    config: EngineConfig,
    now: datetime,
    utc_offset_hours: int = 8,
    run_id: str | None = None,
) -> dict[str, Any]:
    """Build the report payload for a Digest.

    Args:
        digest: Digest to render.
        config: Configuration the digest was produced with.
        now: Scan time.
        utc_offset_hours: Offset of the reporting time zone.
        run_id: Optional run identifier recorded in the metadata.

    Returns:
        Dictionary with ``meta``, ``top_tags``, ``strategy_histogram``
        and ``items`` keys.
    """
    local = local_time(now, utc_offset_hours)
    label = run_label(now, utc_offset_hours)

    meta: dict[str, Any] = {
        "scanned_at": local_time(now, 0).isoformat(),
        "scanned_at_local": local.isoformat(),
        "run_date": local.date().isoformat(),
        "session": label.split("-", 1)[0],
        "run_label": label,
        "scanned_count": digest.scanned_count,
        "included_count": digest.included_count,
        "thresholds": config.thresholds.model_dump(mode="json"),
        "hot_directions": [format_heat(e) for e in digest.top_tags],
        "digest_checksum": digest.checksum(),
    }
    if run_id:
        meta["run_id"] = run_id

    return {
        "meta": meta,
        "top_tags": [e.model_dump(mode="json") for e in digest.top_tags],
        "top_strategy_tags": [e.model_dump(mode="json") for e in digest.top_strategy_tags],
        "strategy_histogram": dict(digest.strategy_histogram),
        "items": [_item_to_dict(c) for c in digest.items],
    }


class JsonRenderer:
    """Serializes report payloads with stable formatting."""

    def __init__(self, run_id: str | None = None) -> None:
        """Initialize the JSON renderer.

        Args:
            run_id: Optional run identifier for logging.
        """
        self._log = logger.bind(component="renderer", run_id=run_id)
        self._writer = AtomicWriter(run_id)

    @staticmethod
    def dumps(payload: dict[str, Any]) -> str:
        """Serialize a payload.

        Key order is preserved so the histogram keeps first-seen order.
        """
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

    def write(self, path: Path, payload: dict[str, Any]) -> str:
        """Write a payload atomically.

        Args:
            path: Target file path.
            payload: Payload from ``render_digest_payload``.

        Returns:
            SHA-256 of the written content.
        """
        generated: GeneratedFile = self._writer.write(path, self.dumps(payload))
        self._log.info(
            "json_render_complete",
            path=generated.path,
            bytes=generated.bytes_written,
            sha256=generated.sha256[:12],
        )
        return generated.sha256
