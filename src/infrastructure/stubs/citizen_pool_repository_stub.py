"""In-memory citizen pool repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.citizen_pool_repository import CitizenPoolRepositoryProtocol
from src.domain.errors.assignment import DuplicateAssignmentError
from src.domain.errors.taxonomy import NotFoundError
from src.domain.models.citizen_pool import CitizenPoolEntry


class CitizenPoolRepositoryStub(CitizenPoolRepositoryProtocol):
    """In-memory stub for CitizenPoolRepositoryProtocol.

    Holds exactly one entry per (milestone, citizen), whatever its status.
    """

    def __init__(self) -> None:
        self._entries: dict[UUID, CitizenPoolEntry] = {}

    async def save(self, entry: CitizenPoolEntry) -> None:
        if await self.find(entry.milestone_id, entry.citizen_id) is not None:
            raise DuplicateAssignmentError(
                "CitizenPool entry", entry.milestone_id, entry.citizen_id
            )
        self._entries[entry.id] = entry

    async def get(self, entry_id: UUID) -> CitizenPoolEntry | None:
        return self._entries.get(entry_id)

    async def update(self, entry: CitizenPoolEntry) -> None:
        if entry.id not in self._entries:
            raise NotFoundError("CitizenPool", entry.id)
        self._entries[entry.id] = entry

    async def find(self, milestone_id: UUID, citizen_id: UUID) -> CitizenPoolEntry | None:
        for e in self._entries.values():
            if e.milestone_id == milestone_id and e.citizen_id == citizen_id:
                return e
        return None

    async def list_by_milestone(self, milestone_id: UUID) -> list[CitizenPoolEntry]:
        return [e for e in self._entries.values() if e.milestone_id == milestone_id]

    async def count_capped(self, citizen_id: UUID) -> int:
        return sum(
            1
            for e in self._entries.values()
            if e.citizen_id == citizen_id and e.status.counts_toward_cap
        )

    async def latest_for_citizen(self, citizen_id: UUID) -> CitizenPoolEntry | None:
        entries = [e for e in self._entries.values() if e.citizen_id == citizen_id]
        return max(entries, key=lambda e: e.enrolled_at, default=None)

    def clear(self) -> None:
        """Clear all pool entries for test isolation."""
        self._entries.clear()
