"""In-memory audit log for development and testing."""

from __future__ import annotations

from src.application.ports.audit_log_repository import AuditLogRepositoryProtocol
from src.domain.models.audit_log import AuditAction, AuditLogEntry


class AuditLogRepositoryStub(AuditLogRepositoryProtocol):
    """Append-only in-memory stub for AuditLogRepositoryProtocol.

    Set ``fail_writes`` to simulate an unavailable audit sink.
    """

    def __init__(self) -> None:
        self._entries: list[AuditLogEntry] = []
        self.fail_writes = False

    async def append(self, entry: AuditLogEntry) -> None:
        if self.fail_writes:
            raise RuntimeError("Simulated audit log write failure")
        self._entries.append(entry)

    async def list_page(
        self,
        entity_type: str | None = None,
        entity_id: str | None = None,
        actor_did: str | None = None,
        action: AuditAction | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[AuditLogEntry], int]:
        matching = [
            e
            for e in self._entries
            if (entity_type is None or e.entity_type == entity_type)
            and (entity_id is None or e.entity_id == entity_id)
            and (actor_did is None or e.actor_did == actor_did)
            and (action is None or e.action is action)
        ]
        return matching[offset : offset + limit], len(matching)

    @property
    def entries(self) -> list[AuditLogEntry]:
        """All stored entries in append order (for test assertions)."""
        return list(self._entries)

    def clear(self) -> None:
        """Clear all entries for test isolation."""
        self._entries.clear()
