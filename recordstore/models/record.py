"""
RecordStore — Record Model
===========================

What:  The semi-structured value type for one stored record.
How:   A pydantic model whose reserved keys (`id`, `createdAt`, `updatedAt`)
       are declared fields; every other top-level key is kept verbatim in the
       model's extra map (`extra="allow"`). Values are never type-checked:
       any JSON value is accepted, reserved keys included.
Who:   Built by the record store when loading and by the record service when
       creating or merging; rendered back to plain JSON with `to_document()`.

Document shape on disk and on the wire:
    {
        "name": "Alice",                      ← open extension keys
        "id": "record_1705320000123",
        "createdAt": "2024-01-15T12:00:00.123Z",
        "updatedAt": "2024-01-15T12:05:00.456Z"
    }

Key presence and key order are both part of the document: a reserved key
stored as `null` stays `null`, an absent one stays absent, and keys come back
in the order they were read.
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

RECORD_ID_PREFIX = "record_"

# field name → JSON key
RESERVED_KEYS = (
    ("id", "id"),
    ("created_at", "createdAt"),
    ("updated_at", "updatedAt"),
)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a `Z` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_record_id() -> str:
    """Builds `record_<epoch milliseconds>` for records created without an id."""
    return f"{RECORD_ID_PREFIX}{int(time.time() * 1000)}"


class Record(BaseModel):
    """
    One entity in the collection.

    Reserved fields:
        id:          Caller-assigned or generated identifier. Usually a string,
                     but whatever JSON value a file or client supplied is kept.
        created_at:  Set by the service on create (JSON key `createdAt`).
        updated_at:  Set by the service on update (JSON key `updatedAt`).

    Anything else lives in `model_extra` untouched; nested objects and arrays
    are stored as-is and never merged.
    """

    model_config = ConfigDict(extra="allow")

    id: Any = None
    created_at: Any = Field(default=None, alias="createdAt")
    updated_at: Any = Field(default=None, alias="updatedAt")

    _key_order: List[str] = PrivateAttr(default_factory=list)

    @classmethod
    def from_document(cls, document: Any) -> "Record":
        """
        Build a Record from one JSON object, remembering its key order.

        Raises:
            ValueError: `document` is not a JSON object
        """
        if not isinstance(document, dict):
            raise ValueError(
                f"record must be a JSON object, found {type(document).__name__}"
            )
        record = cls.model_validate(document)
        record._key_order = list(document)
        return record

    @property
    def extra_fields(self) -> Dict[str, Any]:
        """The open extension map (all non-reserved keys)."""
        return dict(self.model_extra or {})

    def to_document(self) -> Dict[str, Any]:
        """Plain JSON-compatible dict in the original key order."""
        values = self.extra_fields
        for name, key in RESERVED_KEYS:
            if name in self.model_fields_set:
                values[key] = getattr(self, name)

        ordered = [key for key in self._key_order if key in values]
        ordered += [key for key in values if key not in self._key_order]
        return {key: values[key] for key in ordered}
