"""Base model shared by configuration, item and digest models."""

import hashlib
import json

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Immutable model that rejects unknown fields.

    Every value flowing through a pass (raw items, classified items,
    heat entries, the digest) derives from this, so once built a value
    cannot drift between stages.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_json_dict(self) -> dict[str, object]:
        """Convert to a JSON-serializable dictionary."""
        return self.model_dump(mode="json")

    def canonical_json(self) -> str:
        """Compact JSON with sorted keys, independent of field order."""
        return json.dumps(self.to_json_dict(), sort_keys=True, separators=(",", ":"))

    def checksum(self) -> str:
        """SHA-256 hex digest of the canonical JSON form."""
        return hashlib.sha256(self.canonical_json().encode("utf-8")).hexdigest()
