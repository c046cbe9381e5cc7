"""In-memory milestone repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.milestone_repository import MilestoneRepositoryProtocol
from src.domain.errors.taxonomy import ConflictError, NotFoundError
from src.domain.models.milestone import Milestone


class MilestoneRepositoryStub(MilestoneRepositoryProtocol):
    """In-memory stub for MilestoneRepositoryProtocol.

    Enforces the (project, sequence number) uniqueness constraint.
    """

    def __init__(self) -> None:
        self._milestones: dict[UUID, Milestone] = {}

    async def save(self, milestone: Milestone) -> None:
        if milestone.id in self._milestones:
            raise ConflictError("Milestone already exists", {"id": str(milestone.id)})
        if await self.get_by_sequence(milestone.project_id, milestone.sequence_number):
            raise ConflictError(
                "Milestone sequence number already exists for this project",
                {
                    "projectId": str(milestone.project_id),
                    "sequenceNumber": milestone.sequence_number,
                },
            )
        self._milestones[milestone.id] = milestone

    async def get(self, milestone_id: UUID) -> Milestone | None:
        return self._milestones.get(milestone_id)

    async def get_by_sequence(
        self, project_id: UUID, sequence_number: int
    ) -> Milestone | None:
        for milestone in self._milestones.values():
            if (
                milestone.project_id == project_id
                and milestone.sequence_number == sequence_number
            ):
                return milestone
        return None

    async def update(self, milestone: Milestone) -> None:
        if milestone.id not in self._milestones:
            raise NotFoundError("Milestone", milestone.id)
        self._milestones[milestone.id] = milestone

    async def list_by_project(self, project_id: UUID) -> list[Milestone]:
        return sorted(
            (m for m in self._milestones.values() if m.project_id == project_id),
            key=lambda m: m.sequence_number,
        )

    def project_of(self, milestone_id: UUID) -> UUID | None:
        """Return the project of a stored milestone, if any."""
        milestone = self._milestones.get(milestone_id)
        return milestone.project_id if milestone is not None else None

    def clear(self) -> None:
        """Clear all milestones for test isolation."""
        self._milestones.clear()
