"""Auditor assignment repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.auditor_assignment import AuditorAssignment


class AuditorAssignmentRepositoryProtocol(Protocol):
    """Protocol for auditor assignment storage.

    Implementations hold at most one active (not recused, not replaced)
    assignment per (milestone, auditor).
    """

    async def save(self, assignment: AuditorAssignment) -> None:
        """Store a new assignment.

        Raises:
            DuplicateAssignmentError: If an active assignment exists for
                the same milestone and auditor.
        """
        ...

    async def get(self, assignment_id: UUID) -> AuditorAssignment | None:
        ...

    async def update(self, assignment: AuditorAssignment) -> None:
        ...

    async def find_active(
        self, milestone_id: UUID, auditor_id: UUID
    ) -> AuditorAssignment | None:
        ...

    async def list_by_milestone(self, milestone_id: UUID) -> list[AuditorAssignment]:
        """List every assignment of a milestone, any status."""
        ...

    async def list_by_project(
        self, project_id: UUID, min_round: int = 1
    ) -> list[AuditorAssignment]:
        """List assignments on any milestone of the project from ``min_round`` on."""
        ...

    async def max_round(self, milestone_id: UUID) -> int:
        """Highest rotation round used on the milestone, 0 when none."""
        ...
