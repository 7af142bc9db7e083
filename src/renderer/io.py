"""Atomic file writing for rendered output."""

import hashlib
from pathlib import Path

import structlog

from src.renderer.models import GeneratedFile


logger = structlog.get_logger()


class AtomicWriter:
    """Writes content to a temporary file first, then renames it into place.

    Readers see either the complete old file or the complete new file,
    never a partial write.
    """

    def __init__(self, run_id: str | None = None) -> None:
        """Initialize the atomic writer.

        Args:
            run_id: Optional run ID for logging context.
        """
        self._log = logger.bind(component="atomic_writer")
        if run_id:
            self._log = self._log.bind(run_id=run_id)

    def write(self, path: Path, content: str) -> GeneratedFile:
        """Write content to file with atomic semantics.

        Args:
            path: Target file path. Missing parent directories are created.
            content: Content to write (will be encoded as UTF-8).

        Returns:
            GeneratedFile with path, size and checksum.
        """
        content_bytes = content.encode("utf-8")
        sha256 = hashlib.sha256(content_bytes).hexdigest()

        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        temp_path.write_bytes(content_bytes)
        temp_path.replace(path)

        self._log.debug(
            "file_written",
            path=str(path),
            bytes=len(content_bytes),
            sha256=sha256[:12],
        )

        return GeneratedFile(
            path=str(path),
            bytes_written=len(content_bytes),
            sha256=sha256,
        )
