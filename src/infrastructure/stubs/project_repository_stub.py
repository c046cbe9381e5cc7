"""In-memory project repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.project_repository import ProjectRepositoryProtocol
from src.domain.errors.taxonomy import ConflictError
from src.domain.models.project import Project


class ProjectRepositoryStub(ProjectRepositoryProtocol):
    """In-memory stub for ProjectRepositoryProtocol."""

    def __init__(self) -> None:
        self._projects: dict[UUID, Project] = {}

    async def save(self, project: Project) -> None:
        if project.id in self._projects:
            raise ConflictError("Project already exists", {"id": str(project.id)})
        self._projects[project.id] = project

    async def get(self, project_id: UUID) -> Project | None:
        return self._projects.get(project_id)

    def clear(self) -> None:
        """Clear all projects for test isolation."""
        self._projects.clear()
