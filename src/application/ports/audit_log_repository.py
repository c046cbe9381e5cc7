"""Audit log repository port."""

from __future__ import annotations

from typing import Protocol

from src.domain.models.audit_log import AuditAction, AuditLogEntry


class AuditLogRepositoryProtocol(Protocol):
    """Protocol for the append-only audit log."""

    async def append(self, entry: AuditLogEntry) -> None:
        ...

    async def list_page(
        self,
        entity_type: str | None = None,
        entity_id: str | None = None,
        actor_did: str | None = None,
        action: AuditAction | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[AuditLogEntry], int]:
        """List entries oldest first, filtered by any given field.

        Returns:
            Tuple of (entries page, total matching count).
        """
        ...
