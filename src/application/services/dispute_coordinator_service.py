"""Dispute coordinator service.

Filing a dispute reopens the milestone: any current certificate is revoked
and a completed milestone returns to attestation_in_progress. Resolving a
dispute may also assign a named auditor in a new rotation round.

State Machine:
    open -> under_review -> resolved | dismissed
"""

from __future__ import annotations

from uuid import UUID

from uuid6 import uuid7

from src.application.dtos.dispute import FileDisputeInput, ResolveDisputeInput
from src.application.ports.actor_repository import ActorRepositoryProtocol
from src.application.ports.dispute_repository import DisputeRepositoryProtocol
from src.application.ports.event_publisher import EventPublisherProtocol
from src.application.ports.milestone_lock import MilestoneLockProtocol
from src.application.ports.milestone_repository import MilestoneRepositoryProtocol
from src.application.services.audit_log_service import AuditLogService
from src.application.services.auditor_assignment_service import (
    AuditorAssignmentService,
)
from src.application.services.base import LoggingMixin
from src.application.services.certificate_service import CertificateService
from src.domain.errors.taxonomy import AuthorizationError, ConflictError, NotFoundError
from src.domain.models.audit_log import AuditAction
from src.domain.models.dispute import Dispute, DisputeStatus
from src.domain.models.milestone import Milestone, MilestoneStatus
from src.domain.models.webhook import WebhookEventType

DISPUTABLE_STATUSES: frozenset[MilestoneStatus] = frozenset(
    {MilestoneStatus.ATTESTATION_IN_PROGRESS, MilestoneStatus.COMPLETED}
)


class DisputeCoordinatorService(LoggingMixin):
    """Files, reviews and resolves milestone disputes."""

    def __init__(
        self,
        disputes: DisputeRepositoryProtocol,
        milestones: MilestoneRepositoryProtocol,
        actors: ActorRepositoryProtocol,
        certificates: CertificateService,
        assignments: AuditorAssignmentService,
        audit_log: AuditLogService,
        events: EventPublisherProtocol,
        lock: MilestoneLockProtocol,
    ) -> None:
        self._disputes = disputes
        self._milestones = milestones
        self._actors = actors
        self._certificates = certificates
        self._assignments = assignments
        self._audit_log = audit_log
        self._events = events
        self._lock = lock
        self._init_logger(component="disputes")

    async def file(self, data: FileDisputeInput, actor_did: str) -> Dispute:
        """File a dispute and reopen the milestone.

        Raises:
            AuthorizationError: If the caller is not a registered actor.
            NotFoundError: If the milestone does not exist.
            ConflictError: If the milestone is not attestation_in_progress
                or completed.
        """
        raiser = await self._actors.get_by_did(actor_did)
        if raiser is None or raiser.is_deleted:
            raise AuthorizationError(
                "Only registered actors may file disputes", {"actorDid": actor_did}
            )

        log = self._log_operation("file", milestone_id=str(data.milestone_id))
        async with self._lock.hold(data.milestone_id):
            milestone = await self._load_milestone(data.milestone_id)
            if milestone.status not in DISPUTABLE_STATUSES:
                raise ConflictError(
                    "Disputes can only be filed against milestones in "
                    "attestation_in_progress or completed status",
                    {
                        "milestoneId": str(milestone.id),
                        "currentStatus": milestone.status.value,
                    },
                )

            dispute = Dispute(
                id=uuid7(),
                milestone_id=milestone.id,
                raised_by_id=raiser.id,
                reason=data.reason,
                evidence_hash=data.evidence_hash.lower() if data.evidence_hash else None,
            )
            await self._disputes.save(dispute)

            revoked = await self._certificates.revoke_current(
                milestone.id, f"Dispute filed: {dispute.id}", actor_did
            )
            reopened = await self._reopen(milestone, actor_did)

        self._audit_log.log(
            "Dispute",
            dispute.id,
            AuditAction.CREATE,
            actor_did,
            {
                "milestoneId": str(milestone.id),
                "reason": dispute.reason,
                "evidenceHash": dispute.evidence_hash,
                "revokedCertificateId": str(revoked.id) if revoked else None,
            },
        )
        self._events.dispatch(
            WebhookEventType.DISPUTE_OPENED,
            {
                "disputeId": str(dispute.id),
                "milestoneId": str(milestone.id),
                "raisedById": str(raiser.id),
            },
        )
        log.info(
            "dispute_filed",
            dispute_id=str(dispute.id),
            certificate_revoked=revoked is not None,
            milestone_reopened=reopened,
        )
        return dispute

    async def review(self, dispute_id: UUID, actor_did: str) -> Dispute:
        """Move an open dispute under review.

        Raises:
            NotFoundError: If the dispute does not exist.
            InvalidStatusTransitionError: If it is not open.
        """
        current = await self.get(dispute_id)
        updated = current.with_status(DisputeStatus.UNDER_REVIEW)
        await self._disputes.update(updated)
        self._audit_log.log(
            "Dispute",
            dispute_id,
            AuditAction.UPDATE,
            actor_did,
            {"previousStatus": current.status.value, "status": updated.status.value},
        )
        return updated

    async def resolve(
        self, dispute_id: UUID, data: ResolveDisputeInput, actor_did: str
    ) -> Dispute:
        """Resolve or dismiss a dispute under review.

        A resolution naming ``reassigned_auditor_id`` assigns that auditor
        in a new rotation round, bypassing random selection. Only a
        resolution reopens a milestone that was completed again while the
        dispute was open; its certificate is revoked first.

        Raises:
            NotFoundError: If the dispute, milestone or auditor does not exist.
            InvalidStatusTransitionError: If the dispute is not under review.
            ValidationError: If the reassigned actor is not an auditor.
            DuplicateAssignmentError: If the auditor already holds an active
                assignment on the milestone.
        """
        target = DisputeStatus(data.status)
        reassigned_id = (
            data.reassigned_auditor_id if target is DisputeStatus.RESOLVED else None
        )
        current = await self.get(dispute_id)
        log = self._log_operation("resolve", dispute_id=str(dispute_id))

        async with self._lock.hold(current.milestone_id):
            current = await self.get(dispute_id)
            updated = current.with_status(
                target,
                resolution_notes=data.resolution_notes,
                reassigned_auditor_id=reassigned_id,
            )
            milestone = await self._load_milestone(current.milestone_id)
            if reassigned_id is not None:
                await self._assignments.assign_directly(
                    milestone, reassigned_id, actor_did
                )
            await self._disputes.update(updated)

            # Dismissal leaves a milestone completed while the dispute was
            # open, together with its certificate, untouched
            reopened = False
            if (
                target is DisputeStatus.RESOLVED
                and milestone.status is MilestoneStatus.COMPLETED
            ):
                await self._certificates.revoke_current(
                    milestone.id, f"Dispute resolved: {dispute_id}", actor_did
                )
                reopened = await self._reopen(milestone, actor_did)

        self._audit_log.log(
            "Dispute",
            dispute_id,
            AuditAction.APPROVE if target is DisputeStatus.RESOLVED else AuditAction.REJECT,
            actor_did,
            {
                "status": target.value,
                "resolutionNotes": data.resolution_notes,
                "reassignedAuditorId": str(reassigned_id) if reassigned_id else None,
            },
        )
        self._events.dispatch(
            WebhookEventType.DISPUTE_RESOLVED,
            {
                "disputeId": str(dispute_id),
                "milestoneId": str(updated.milestone_id),
                "status": target.value,
            },
        )
        log.info("dispute_resolved", status=target.value, milestone_reopened=reopened)
        return updated

    async def get(self, dispute_id: UUID) -> Dispute:
        dispute = await self._disputes.get(dispute_id)
        if dispute is None:
            raise NotFoundError("Dispute", dispute_id)
        return dispute

    async def list_disputes(
        self,
        milestone_id: UUID | None = None,
        status: DisputeStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Dispute], int]:
        return await self._disputes.list_page(milestone_id, status, limit, offset)

    async def _reopen(self, milestone: Milestone, actor_did: str) -> bool:
        # Caller holds the milestone lock
        if milestone.status is not MilestoneStatus.COMPLETED:
            return False
        reopened = milestone.with_status(MilestoneStatus.ATTESTATION_IN_PROGRESS)
        await self._milestones.update(reopened)
        self._audit_log.log(
            "Milestone",
            milestone.id,
            AuditAction.UPDATE,
            actor_did,
            {
                "previousStatus": milestone.status.value,
                "status": reopened.status.value,
            },
        )
        return True

    async def _load_milestone(self, milestone_id: UUID) -> Milestone:
        milestone = await self._milestones.get(milestone_id)
        if milestone is None or milestone.is_deleted:
            raise NotFoundError("Milestone", milestone_id)
        return milestone
