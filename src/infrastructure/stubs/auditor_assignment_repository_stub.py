"""In-memory auditor assignment repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.auditor_assignment_repository import (
    AuditorAssignmentRepositoryProtocol,
)
from src.domain.errors.assignment import DuplicateAssignmentError
from src.domain.errors.taxonomy import NotFoundError
from src.domain.models.auditor_assignment import AuditorAssignment
from src.infrastructure.stubs.milestone_repository_stub import MilestoneRepositoryStub


class AuditorAssignmentRepositoryStub(AuditorAssignmentRepositoryProtocol):
    """In-memory stub for AuditorAssignmentRepositoryProtocol.

    Holds at most one active assignment per (milestone, auditor).
    Project lookups go through the milestone store.
    """

    def __init__(self, milestones: MilestoneRepositoryStub) -> None:
        self._assignments: dict[UUID, AuditorAssignment] = {}
        self._milestones = milestones

    async def save(self, assignment: AuditorAssignment) -> None:
        if await self.find_active(assignment.milestone_id, assignment.auditor_id):
            raise DuplicateAssignmentError(
                "Auditor assignment", assignment.milestone_id, assignment.auditor_id
            )
        self._assignments[assignment.id] = assignment

    async def get(self, assignment_id: UUID) -> AuditorAssignment | None:
        return self._assignments.get(assignment_id)

    async def update(self, assignment: AuditorAssignment) -> None:
        if assignment.id not in self._assignments:
            raise NotFoundError("AuditorAssignment", assignment.id)
        self._assignments[assignment.id] = assignment

    async def find_active(
        self, milestone_id: UUID, auditor_id: UUID
    ) -> AuditorAssignment | None:
        for a in self._assignments.values():
            if a.milestone_id == milestone_id and a.auditor_id == auditor_id and a.is_active:
                return a
        return None

    async def list_by_milestone(self, milestone_id: UUID) -> list[AuditorAssignment]:
        return [a for a in self._assignments.values() if a.milestone_id == milestone_id]

    async def list_by_project(
        self, project_id: UUID, min_round: int = 1
    ) -> list[AuditorAssignment]:
        return [
            a
            for a in self._assignments.values()
            if a.rotation_round >= min_round
            and self._milestones.project_of(a.milestone_id) == project_id
        ]

    async def max_round(self, milestone_id: UUID) -> int:
        rounds = [
            a.rotation_round
            for a in self._assignments.values()
            if a.milestone_id == milestone_id
        ]
        return max(rounds, default=0)

    def clear(self) -> None:
        """Clear all assignments for test isolation."""
        self._assignments.clear()
