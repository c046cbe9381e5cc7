"""Auditor assignment service.

Selection draws auditors uniformly at random, without replacement, from
the independent auditors left after three exclusions:

    already assigned:     any assignment on this milestone, any status
    rotation:             assigned on any milestone of the same project in
                          round >= max(1, current_max - (window - 1))
    conflict of interest: shares an organization with a contractor who
                          submitted an inspector verification on the project

Selection is all or nothing: when fewer auditors remain than requested,
nothing is persisted. Selections for one milestone run under its lock so
two callers never reuse the same rotation round.
"""

from __future__ import annotations

from uuid import UUID

from uuid6 import uuid7

from src.application.ports.actor_repository import ActorRepositoryProtocol
from src.application.ports.attestation_repository import AttestationRepositoryProtocol
from src.application.ports.auditor_assignment_repository import (
    AuditorAssignmentRepositoryProtocol,
)
from src.application.ports.milestone_lock import MilestoneLockProtocol
from src.application.ports.milestone_repository import MilestoneRepositoryProtocol
from src.application.ports.trusted_issuer_repository import (
    TrustedIssuerRepositoryProtocol,
)
from src.application.services.audit_log_service import AuditLogService
from src.application.services.base import LoggingMixin
from src.domain.errors.assignment import DuplicateAssignmentError, InsufficientPoolError
from src.domain.errors.taxonomy import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.domain.models.actor import Actor, ActorRole
from src.domain.models.attestation import AttestationType
from src.domain.models.audit_log import AuditAction
from src.domain.models.auditor_assignment import AssignmentStatus, AuditorAssignment
from src.domain.models.milestone import Milestone
from src.domain.models.trusted_issuer import TrustedIssuer
from src.domain.ports.random_source import RandomSourceProtocol
from src.domain.services.random_selection import draw_without_replacement

DEFAULT_ROTATION_WINDOW = 3


class AuditorAssignmentService(LoggingMixin):
    """Selects, manages and revokes independent auditors."""

    def __init__(
        self,
        assignments: AuditorAssignmentRepositoryProtocol,
        actors: ActorRepositoryProtocol,
        milestones: MilestoneRepositoryProtocol,
        attestations: AttestationRepositoryProtocol,
        trusted_issuers: TrustedIssuerRepositoryProtocol,
        rng: RandomSourceProtocol,
        audit_log: AuditLogService,
        lock: MilestoneLockProtocol,
        rotation_window: int = DEFAULT_ROTATION_WINDOW,
    ) -> None:
        if rotation_window < 1:
            raise ValueError("rotation_window must be at least 1")
        self._assignments = assignments
        self._actors = actors
        self._milestones = milestones
        self._attestations = attestations
        self._trusted_issuers = trusted_issuers
        self._rng = rng
        self._audit_log = audit_log
        self._lock = lock
        self._rotation_window = rotation_window
        self._init_logger(component="assignments")

    async def select_auditors(
        self, milestone_id: UUID, count: int, actor_did: str
    ) -> list[AuditorAssignment]:
        """Randomly assign ``count`` eligible auditors in a new rotation round.

        Raises:
            ValidationError: If count is not positive.
            NotFoundError: If the milestone does not exist.
            InsufficientPoolError: If fewer than ``count`` auditors are eligible.
        """
        if count < 1:
            raise ValidationError("count must be at least 1", {"count": count})
        async with self._lock.hold(milestone_id):
            milestone = await self._load_milestone(milestone_id)
            return await self._select(milestone, count, actor_did)

    async def _select(
        self, milestone: Milestone, count: int, actor_did: str
    ) -> list[AuditorAssignment]:
        log = self._log_operation(
            "select_auditors", milestone_id=str(milestone.id), count=count
        )
        candidates = await self._actors.list_by_role(ActorRole.INDEPENDENT_AUDITOR)
        candidate_ids = {auditor.id for auditor in candidates}

        already_assigned = {
            a.auditor_id for a in await self._assignments.list_by_milestone(milestone.id)
        }
        max_round = await self._assignments.max_round(milestone.id)
        cutoff = max(1, max_round - (self._rotation_window - 1))
        recently_served = {
            a.auditor_id
            for a in await self._assignments.list_by_project(
                milestone.project_id, min_round=cutoff
            )
        }
        conflicted = await self._conflicted_auditors(milestone, candidates)

        excluded = already_assigned | recently_served | conflicted
        eligible = [auditor for auditor in candidates if auditor.id not in excluded]
        exclusions = {
            "alreadyAssigned": len(already_assigned & candidate_ids),
            "rotation": len(recently_served & candidate_ids),
            "conflictOfInterest": len(conflicted),
        }

        if len(eligible) < count:
            log.warning(
                "auditor_pool_insufficient",
                pool_size=len(candidates),
                available=len(eligible),
                exclusions=exclusions,
            )
            raise InsufficientPoolError("auditors", len(eligible), count, exclusions)

        selected = draw_without_replacement(eligible, count, self._rng)
        new_round = max_round + 1
        created: list[AuditorAssignment] = []
        for auditor in selected:
            assignment = AuditorAssignment(
                id=uuid7(),
                milestone_id=milestone.id,
                auditor_id=auditor.id,
                rotation_round=new_round,
            )
            await self._assignments.save(assignment)
            created.append(assignment)

        rationale = {
            "milestoneId": str(milestone.id),
            "count": count,
            "auditorIds": [str(a.auditor_id) for a in created],
            "rotationRound": new_round,
            "poolSize": len(candidates),
            "eligible": len(eligible),
            "exclusions": exclusions,
        }
        self._audit_log.log(
            "AuditorAssignment", milestone.id, AuditAction.ASSIGN, actor_did, rationale
        )
        log.info("auditor_selection_completed", **rationale)
        return created

    async def _conflicted_auditors(
        self, milestone: Milestone, candidates: list[Actor]
    ) -> set[UUID]:
        inspector_ids = await self._attestations.list_actor_ids_for_project(
            milestone.project_id, AttestationType.INSPECTOR_VERIFICATION
        )
        contractors: list[Actor] = []
        for inspector_id in inspector_ids:
            inspector = await self._actors.get(inspector_id)
            if inspector is not None:
                contractors.append(inspector)
        return {
            auditor.id
            for auditor in candidates
            if any(auditor.shares_organization_with(c) for c in contractors)
        }

    async def assign_directly(
        self, milestone: Milestone, auditor_id: UUID, actor_did: str
    ) -> AuditorAssignment:
        """Assign a named auditor in a new round, bypassing selection.

        The caller must hold the milestone lock.

        Raises:
            NotFoundError: If the auditor does not exist.
            ValidationError: If the actor is not an independent auditor.
            DuplicateAssignmentError: If the auditor already holds an active
                assignment on the milestone. Nothing is written.
        """
        auditor = await self._actors.get(auditor_id)
        if auditor is None or auditor.is_deleted:
            raise NotFoundError("Actor", auditor_id)
        if not auditor.has_role(ActorRole.INDEPENDENT_AUDITOR):
            raise ValidationError(
                "Reassigned actor must be an independent auditor",
                {"actorId": str(auditor_id), "roles": auditor.role_values},
            )
        if await self._assignments.find_active(milestone.id, auditor_id) is not None:
            raise DuplicateAssignmentError(
                "Auditor assignment", milestone.id, auditor_id
            )

        for existing in await self._assignments.list_by_milestone(milestone.id):
            if existing.is_active and existing.status is not AssignmentStatus.COMPLETED:
                await self._assignments.update(
                    existing.with_status(AssignmentStatus.REPLACED)
                )

        assignment = AuditorAssignment(
            id=uuid7(),
            milestone_id=milestone.id,
            auditor_id=auditor_id,
            rotation_round=await self._assignments.max_round(milestone.id) + 1,
        )
        await self._assignments.save(assignment)
        self._audit_log.log(
            "AuditorAssignment",
            assignment.id,
            AuditAction.ASSIGN,
            actor_did,
            {
                "milestoneId": str(milestone.id),
                "auditorId": str(auditor_id),
                "rotationRound": assignment.rotation_round,
                "manual": True,
            },
        )
        return assignment

    async def get(self, assignment_id: UUID) -> AuditorAssignment:
        assignment = await self._assignments.get(assignment_id)
        if assignment is None:
            raise NotFoundError("AuditorAssignment", assignment_id)
        return assignment

    async def list_for_milestone(self, milestone_id: UUID) -> list[AuditorAssignment]:
        return await self._assignments.list_by_milestone(milestone_id)

    async def accept(self, assignment_id: UUID, actor_did: str) -> AuditorAssignment:
        """Accept an assignment; required before the auditor may review."""
        return await self._change_status(
            assignment_id, AssignmentStatus.ACCEPTED, actor_did
        )

    async def declare_conflict(
        self, assignment_id: UUID, reason: str, actor_did: str
    ) -> AuditorAssignment:
        """Recuse the auditor, recording the declared conflict."""
        if not reason.strip():
            raise ValidationError("A conflict reason is required")
        return await self._change_status(
            assignment_id, AssignmentStatus.RECUSED, actor_did, conflict_reason=reason
        )

    async def complete(self, assignment_id: UUID, actor_did: str) -> AuditorAssignment:
        return await self._change_status(
            assignment_id, AssignmentStatus.COMPLETED, actor_did
        )

    async def _change_status(
        self,
        assignment_id: UUID,
        target: AssignmentStatus,
        actor_did: str,
        conflict_reason: str | None = None,
    ) -> AuditorAssignment:
        current = await self.get(assignment_id)
        await self._authorize_auditor(current, actor_did)
        async with self._lock.hold(current.milestone_id):
            current = await self.get(assignment_id)
            updated = current.with_status(target, conflict_reason=conflict_reason)
            await self._assignments.update(updated)

        payload: dict[str, object] = {
            "previousStatus": current.status.value,
            "status": target.value,
        }
        if conflict_reason:
            payload["conflictReason"] = conflict_reason
        self._audit_log.log(
            "AuditorAssignment", assignment_id, AuditAction.UPDATE, actor_did, payload
        )
        self._log_operation("change_status", assignment_id=str(assignment_id)).info(
            "auditor_assignment_updated",
            previous_status=current.status.value,
            status=target.value,
        )
        return updated

    async def _authorize_auditor(
        self, assignment: AuditorAssignment, actor_did: str
    ) -> None:
        caller = await self._actors.get_by_did(actor_did)
        if caller is None or caller.is_deleted:
            raise AuthorizationError("Unknown caller", {"actorDid": actor_did})
        if caller.has_role(ActorRole.ADMIN) or caller.id == assignment.auditor_id:
            return
        raise AuthorizationError(
            "Only the assigned auditor or an admin may update this assignment",
            {"assignmentId": str(assignment.id)},
        )

    async def reassign(self, assignment_id: UUID, actor_did: str) -> AuditorAssignment:
        """Replace a recused assignment with one newly selected auditor.

        Raises:
            NotFoundError: If the assignment does not exist.
            ConflictError: If the assignment is not recused.
            InsufficientPoolError: If no eligible auditor remains.
        """
        original = await self.get(assignment_id)
        async with self._lock.hold(original.milestone_id):
            original = await self.get(assignment_id)
            if original.status is not AssignmentStatus.RECUSED:
                raise ConflictError(
                    "Only recused assignments can be reassigned",
                    {"currentStatus": original.status.value},
                )
            milestone = await self._load_milestone(original.milestone_id)
            (replacement,) = await self._select(milestone, 1, actor_did)
            await self._assignments.update(
                original.with_status(AssignmentStatus.REPLACED)
            )

        self._audit_log.log(
            "AuditorAssignment",
            assignment_id,
            AuditAction.ASSIGN,
            actor_did,
            {"originalId": str(assignment_id), "newAssignmentId": str(replacement.id)},
        )
        return replacement

    async def revoke_for_fraud(
        self, auditor_id: UUID, reason: str, actor_did: str
    ) -> TrustedIssuer:
        """Deactivate the auditor's DID in the trusted issuer registry.

        This invalidates the auditor's credentials everywhere, independent
        of any single assignment.

        Raises:
            NotFoundError: If the auditor or their registry entry is missing.
            ConflictError: If the issuer is already inactive.
        """
        auditor = await self._actors.get(auditor_id)
        if auditor is None or auditor.is_deleted:
            raise NotFoundError("Actor", auditor_id)
        issuer = await self._trusted_issuers.get_by_did(auditor.did)
        if issuer is None:
            raise NotFoundError("TrustedIssuer", auditor.did)
        if not issuer.active:
            raise ConflictError(
                "Trusted issuer is already revoked", {"issuerDid": auditor.did}
            )

        revoked = issuer.deactivated(reason)
        await self._trusted_issuers.update(revoked)
        self._audit_log.log(
            "TrustedIssuer",
            issuer.id,
            AuditAction.REVOKE,
            actor_did,
            {"auditorId": str(auditor_id), "reason": reason},
        )
        self._log_operation("revoke_for_fraud", auditor_id=str(auditor_id)).warning(
            "auditor_credential_revoked", reason=reason
        )
        return revoked

    async def _load_milestone(self, milestone_id: UUID) -> Milestone:
        milestone = await self._milestones.get(milestone_id)
        if milestone is None or milestone.is_deleted:
            raise NotFoundError("Milestone", milestone_id)
        return milestone
