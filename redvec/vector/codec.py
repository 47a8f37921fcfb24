"""Encoding of vectors and metadata into Redis hash fields.

RediSearch reads VECTOR fields as raw little-endian float32 bytes and its
query parser treats ``-`` in TEXT fields as a negation operator, so metadata
JSON is stored with every ``-`` escaped.
"""

import json
from datetime import date, datetime
from enum import Enum
from typing import Any
from uuid import UUID

import numpy as np
from pydantic import BaseModel

from redvec.errors import MetadataDecodeError

FLOAT32_LE = np.dtype("<f4")

SPECIAL_CHAR = "-"
ESCAPED_SPECIAL_CHAR = "\\-"


def escape_special_chars(value: str) -> str:
    """Escape every ``-`` so RediSearch does not parse it as negation."""
    return value.replace(SPECIAL_CHAR, ESCAPED_SPECIAL_CHAR)


def unescape_special_chars(value: str) -> str:
    """Inverse of escape_special_chars."""
    return value.replace(ESCAPED_SPECIAL_CHAR, SPECIAL_CHAR)


def to_float32_bytes(vector: list[float]) -> bytes:
    """Pack a vector as little-endian float32 bytes."""
    return np.asarray(vector, dtype=FLOAT32_LE).tobytes()


def from_float32_bytes(data: bytes) -> list[float]:
    """Unpack little-endian float32 bytes into a list of floats."""
    return np.frombuffer(data, dtype=FLOAT32_LE).tolist()


def _json_default(obj: Any) -> Any:
    """JSON serializer for objects not serializable by default."""
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


def dump_metadata(metadata: dict[str, Any] | None) -> str:
    """Serialize metadata to escaped JSON for the metadata field.

    Non-ASCII characters are kept as-is so filter tags can match them.
    """
    return escape_special_chars(
        json.dumps(metadata or {}, default=_json_default, ensure_ascii=False)
    )


def load_metadata(raw: str | bytes) -> dict[str, Any]:
    """Parse a stored metadata field back into a dict.

    Raises:
        MetadataDecodeError: If the field is not UTF-8, not valid escaped
            JSON, or not a JSON object
    """
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        metadata = json.loads(unescape_special_chars(raw))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MetadataDecodeError(f"Invalid stored metadata: {e}", cause=e) from e

    if not isinstance(metadata, dict):
        raise MetadataDecodeError(
            f"Stored metadata must be a JSON object, got {type(metadata).__name__}"
        )
    return metadata
