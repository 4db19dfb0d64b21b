# ============================================================================
# THING MODEL
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Domain model - the single managed entity
# PURPOSE: API shape of a thing and its translation to a table entity
# CREATED: 14 OCT 2026
# ============================================================================
"""
Thing Model

A thing is a caller-supplied name/description pair. Identity, etag and
timestamp are assigned by the table service.

Storage layout:
    PartitionKey = id
    RowKey       = id
    name, description stored as plain string properties.

The etag and timestamp live in the entity metadata returned by
azure-data-tables, not in the entity properties.
"""

import re
import uuid
from datetime import datetime
from typing import Any, ClassVar, Dict, Mapping, Optional

from pydantic import BaseModel, Field

# Characters the table service rejects in PartitionKey and RowKey
_FORBIDDEN_KEY_CHARS = re.compile(r"[/\\#?\x00-\x1f\x7f-\x9f]")
KEY_MAX_BYTES = 1024


def new_thing_id() -> str:
    """Generate a new thing identifier."""
    return str(uuid.uuid4())


def is_valid_thing_id(value: Optional[str]) -> bool:
    """True if value can be used as a table key (and so could name a stored thing)."""
    if not value or len(value.encode("utf-16-le")) > KEY_MAX_BYTES:
        return False
    return _FORBIDDEN_KEY_CHARS.search(value) is None


class Thing(BaseModel):
    """
    A stored thing as returned by the API.

    Maps to: one entity in the things table.
    """

    # Table keys that never leave the repository
    KEY_PROPERTIES: ClassVar[tuple] = ("PartitionKey", "RowKey")

    id: str = Field(..., description="Service-assigned identifier (partition and row key)")
    name: str = Field(..., description="Caller-supplied name")
    description: str = Field(default="", description="Caller-supplied description")
    etag: Optional[str] = Field(default=None, description="Opaque concurrency token")
    timestamp: Optional[datetime] = Field(default=None, description="Last modification time")

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any]) -> "Thing":
        """
        Build a Thing from a table entity.

        Accepts a TableEntity (dict with a .metadata attribute) or a plain
        dict; metadata is read when present.
        """
        metadata = getattr(entity, "metadata", None) or {}
        return cls(
            id=entity.get("RowKey") or entity.get("PartitionKey"),
            name=entity.get("name", ""),
            description=entity.get("description") or "",
            etag=metadata.get("etag"),
            timestamp=metadata.get("timestamp"),
        )

    @staticmethod
    def to_entity(thing_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Build a table entity for thing_id carrying the given fields."""
        entity: Dict[str, Any] = {"PartitionKey": thing_id, "RowKey": thing_id}
        for key, value in fields.items():
            if key in Thing.KEY_PROPERTIES or key in ("id", "etag", "timestamp"):
                continue
            entity[key] = value
        return entity


__all__ = ["Thing", "new_thing_id", "is_valid_thing_id"]
