"""Deterministic serialization and SHA-256 helpers.

Hashes over structured data are computed on canonical JSON: keys sorted at
every level, no insignificant whitespace. UUIDs, enums and datetimes are
rendered as strings.
"""

from __future__ import annotations

import hashlib
import json
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID


def _default(value: Any) -> Any:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(item.value if isinstance(item, Enum) else str(item) for item in value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def canonical_json(value: Any) -> str:
    """Serialize a value to canonical JSON."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=_default)


def sha256_hex(data: str | bytes) -> str:
    """Return the lowercase hex SHA-256 digest of text or bytes."""
    raw = data.encode("utf-8") if isinstance(data, str) else data
    return hashlib.sha256(raw).hexdigest()
