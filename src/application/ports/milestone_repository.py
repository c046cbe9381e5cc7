"""Milestone repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.milestone import Milestone


class MilestoneRepositoryProtocol(Protocol):
    """Protocol for milestone storage.

    Methods:
        save: Store a new milestone
        get: Retrieve a milestone by ID
        get_by_sequence: Find a project's milestone by sequence number
        update: Replace a stored milestone
        list_by_project: Milestones of a project ordered by sequence number
    """

    async def save(self, milestone: Milestone) -> None:
        """Store a new milestone.

        Raises:
            ConflictError: If the project already has the sequence number.
        """
        ...

    async def get(self, milestone_id: UUID) -> Milestone | None:
        ...

    async def get_by_sequence(
        self, project_id: UUID, sequence_number: int
    ) -> Milestone | None:
        ...

    async def update(self, milestone: Milestone) -> None:
        """Replace a stored milestone.

        Raises:
            NotFoundError: If the milestone does not exist.
        """
        ...

    async def list_by_project(self, project_id: UUID) -> list[Milestone]:
        ...
