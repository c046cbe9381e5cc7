"""Audit log entry model.

Entries keep a SHA-256 digest of the payload rather than the payload
itself so the log can be shared without leaking attestation details.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID


class AuditAction(Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    REVOKE = "revoke"
    SUBMIT = "submit"
    APPROVE = "approve"
    REJECT = "reject"
    ASSIGN = "assign"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class AuditLogEntry:
    """A persisted audit record.

    Attributes:
        id: UUIDv7 unique identifier.
        entity_type: Entity the action touched (e.g. ``"Attestation"``).
        entity_id: Identifier of that entity.
        action: What happened.
        actor_did: DID of the caller that caused the action.
        payload_hash: SHA-256 hex digest of the canonical JSON payload.
        created_at: Timestamp (UTC).
    """

    id: UUID
    entity_type: str
    entity_id: str
    action: AuditAction
    actor_did: str
    payload_hash: str
    created_at: datetime = field(default_factory=_utc_now)
