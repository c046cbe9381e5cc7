"""Citizen pool repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.citizen_pool import CitizenPoolEntry


class CitizenPoolRepositoryProtocol(Protocol):
    """Protocol for citizen pool storage.

    Implementations hold exactly one entry per (milestone, citizen).
    """

    async def save(self, entry: CitizenPoolEntry) -> None:
        """Store a new pool entry.

        Raises:
            DuplicateAssignmentError: If the citizen is already in the
                milestone's pool.
        """
        ...

    async def get(self, entry_id: UUID) -> CitizenPoolEntry | None:
        ...

    async def update(self, entry: CitizenPoolEntry) -> None:
        ...

    async def find(self, milestone_id: UUID, citizen_id: UUID) -> CitizenPoolEntry | None:
        ...

    async def list_by_milestone(self, milestone_id: UUID) -> list[CitizenPoolEntry]:
        ...

    async def count_capped(self, citizen_id: UUID) -> int:
        """Count the citizen's enrolled or attested entries across all milestones."""
        ...

    async def latest_for_citizen(self, citizen_id: UUID) -> CitizenPoolEntry | None:
        """Most recently enrolled entry of the citizen on any milestone."""
        ...
