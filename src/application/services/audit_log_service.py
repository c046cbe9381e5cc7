"""Audit log service.

Writes are fire-and-forget: ``log`` schedules the append and returns at
once, so a slow or failing audit store never blocks or fails the business
operation that produced the entry. ``flush`` awaits every pending write.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from uuid6 import uuid7

from src.application.ports.audit_log_repository import AuditLogRepositoryProtocol
from src.application.services.base import LoggingMixin
from src.domain.models.audit_log import AuditAction, AuditLogEntry
from src.domain.services.hashing import canonical_json, sha256_hex

# Actor DID recorded for actions the system takes on its own behalf
SYSTEM_ACTOR_DID = "system"


class AuditLogService(LoggingMixin):
    """Records hashed audit entries for every state change."""

    def __init__(self, repository: AuditLogRepositoryProtocol) -> None:
        self._repository = repository
        self._pending: set[asyncio.Task[None]] = set()
        self._init_logger(component="audit")

    def log(
        self,
        entity_type: str,
        entity_id: object,
        action: AuditAction,
        actor_did: str,
        payload: Mapping[str, Any] | None = None,
    ) -> None:
        """Schedule an audit entry.

        Must be called from a running event loop.

        Args:
            entity_type: Entity the action touched.
            entity_id: Identifier of the entity.
            action: What happened.
            actor_did: DID of the caller.
            payload: Context of the action; only its SHA-256 is stored.
        """
        entry = AuditLogEntry(
            id=uuid7(),
            entity_type=entity_type,
            entity_id=str(entity_id),
            action=action,
            actor_did=actor_did,
            payload_hash=sha256_hex(canonical_json(dict(payload or {}))),
        )
        task = asyncio.get_running_loop().create_task(self._write(entry))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, entry: AuditLogEntry) -> None:
        try:
            await self._repository.append(entry)
        except Exception:
            self._log_operation(
                "write",
                entity_type=entry.entity_type,
                entity_id=entry.entity_id,
                action=entry.action.value,
            ).exception("audit_log_write_failed")

    async def flush(self) -> None:
        """Wait until every scheduled write has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def query(
        self,
        entity_type: str | None = None,
        entity_id: object | None = None,
        actor_did: str | None = None,
        action: AuditAction | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[AuditLogEntry], int]:
        """Query stored entries. Pending writes are not included."""
        return await self._repository.list_page(
            entity_type=entity_type,
            entity_id=None if entity_id is None else str(entity_id),
            actor_did=actor_did,
            action=action,
            limit=limit,
            offset=offset,
        )
