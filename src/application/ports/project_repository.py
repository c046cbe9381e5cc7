"""Project repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.project import Project


class ProjectRepositoryProtocol(Protocol):
    """Protocol for project storage."""

    async def save(self, project: Project) -> None:
        ...

    async def get(self, project_id: UUID) -> Project | None:
        ...
