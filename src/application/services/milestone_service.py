"""Milestone service: creation and externally driven status changes.

Only the transitions in EXTERNAL_TRANSITIONS may be requested here.
Completing a milestone is left to the quorum resolver and reopening a
completed one to the dispute coordinator.
"""

from __future__ import annotations

from uuid import UUID

from uuid6 import uuid7

from src.application.dtos.milestone import CreateMilestoneInput
from src.application.ports.milestone_lock import MilestoneLockProtocol
from src.application.ports.milestone_repository import MilestoneRepositoryProtocol
from src.application.ports.project_repository import ProjectRepositoryProtocol
from src.application.services.audit_log_service import AuditLogService
from src.application.services.base import LoggingMixin
from src.domain.errors.taxonomy import (
    ConflictError,
    InvalidStatusTransitionError,
    NotFoundError,
)
from src.domain.models.audit_log import AuditAction
from src.domain.models.milestone import EXTERNAL_TRANSITIONS, Milestone, MilestoneStatus


class MilestoneService(LoggingMixin):
    """Creates milestones and applies external status transitions."""

    def __init__(
        self,
        milestones: MilestoneRepositoryProtocol,
        projects: ProjectRepositoryProtocol,
        audit_log: AuditLogService,
        lock: MilestoneLockProtocol,
    ) -> None:
        self._milestones = milestones
        self._projects = projects
        self._audit_log = audit_log
        self._lock = lock
        self._init_logger(component="milestones")

    async def create(self, data: CreateMilestoneInput, actor_did: str) -> Milestone:
        """Create a pending milestone.

        Raises:
            NotFoundError: If the project does not exist.
            ConflictError: If the project already uses the sequence number.
        """
        project = await self._projects.get(data.project_id)
        if project is None or project.is_deleted:
            raise NotFoundError("Project", data.project_id)

        if await self._milestones.get_by_sequence(project.id, data.sequence_number):
            raise ConflictError(
                "Milestone sequence number already exists for this project",
                {"projectId": str(project.id), "sequenceNumber": data.sequence_number},
            )

        milestone = Milestone(
            id=uuid7(),
            project_id=project.id,
            sequence_number=data.sequence_number,
            description=data.description,
            required_inspector_count=data.required_inspector_count,
            required_auditor_count=data.required_auditor_count,
            required_citizen_count=data.required_citizen_count,
        )
        await self._milestones.save(milestone)
        self._audit_log.log(
            "Milestone",
            milestone.id,
            AuditAction.CREATE,
            actor_did,
            {"projectId": str(project.id), "sequenceNumber": data.sequence_number},
        )
        return milestone

    async def get(self, milestone_id: UUID) -> Milestone:
        milestone = await self._milestones.get(milestone_id)
        if milestone is None or milestone.is_deleted:
            raise NotFoundError("Milestone", milestone_id)
        return milestone

    async def list_for_project(self, project_id: UUID) -> list[Milestone]:
        return await self._milestones.list_by_project(project_id)

    async def transition(
        self, milestone_id: UUID, target: MilestoneStatus, actor_did: str
    ) -> Milestone:
        """Move a milestone along an externally driven transition.

        Raises:
            NotFoundError: If the milestone does not exist.
            InvalidStatusTransitionError: If the transition is not allowed
                for external callers.
        """
        async with self._lock.hold(milestone_id):
            current = await self.get(milestone_id)
            if target not in EXTERNAL_TRANSITIONS[current.status]:
                raise InvalidStatusTransitionError(
                    "Milestone", milestone_id, current.status.value, target.value
                )
            updated = current.with_status(target)
            await self._milestones.update(updated)

        self._audit_log.log(
            "Milestone",
            milestone_id,
            AuditAction.UPDATE,
            actor_did,
            {"previousStatus": current.status.value, "status": target.value},
        )
        self._log_operation("transition", milestone_id=str(milestone_id)).info(
            "milestone_transitioned",
            previous_status=current.status.value,
            status=target.value,
        )
        return updated
