"""Quorum resolver service.

Computes a milestone's quorum from its active attestations and finalizes
the milestone once all three quorum types are met:

    inspector: active inspector verifications >= required_inspector_count
    auditor:   active auditor reviews        >= required_auditor_count
    citizen:   sum of tier weights           >= required_citizen_count

Finalization mints the certificate first and only then completes the
milestone, so a failed mint leaves the milestone untouched and publishes
nothing. Callers must hold the milestone lock while finalizing.
"""

from __future__ import annotations

from uuid import UUID

from src.application.ports.attestation_repository import AttestationRepositoryProtocol
from src.application.ports.citizen_pool_repository import CitizenPoolRepositoryProtocol
from src.application.ports.event_publisher import EventPublisherProtocol
from src.application.ports.milestone_repository import MilestoneRepositoryProtocol
from src.application.services.audit_log_service import AuditLogService
from src.application.services.base import LoggingMixin
from src.application.services.certificate_service import CertificateService
from src.domain.errors.certificate import CertificateAlreadyIssuedError
from src.domain.errors.taxonomy import NotFoundError
from src.domain.models.attestation import AttestationType
from src.domain.models.audit_log import AuditAction
from src.domain.models.certificate import Certificate
from src.domain.models.citizen_pool import DEFAULT_TIER, AssuranceTier
from src.domain.models.milestone import Milestone, MilestoneStatus
from src.domain.models.quorum import CountQuorum, QuorumBreakdown
from src.domain.models.webhook import WebhookEventType
from src.domain.services.quorum_weights import evaluate_citizen_quorum


class QuorumResolverService(LoggingMixin):
    """Evaluates quorum and auto-finalizes milestones."""

    def __init__(
        self,
        milestones: MilestoneRepositoryProtocol,
        attestations: AttestationRepositoryProtocol,
        citizen_pools: CitizenPoolRepositoryProtocol,
        certificates: CertificateService,
        audit_log: AuditLogService,
        events: EventPublisherProtocol,
    ) -> None:
        self._milestones = milestones
        self._attestations = attestations
        self._citizen_pools = citizen_pools
        self._certificates = certificates
        self._audit_log = audit_log
        self._events = events
        self._init_logger(component="quorum")

    async def evaluate(self, milestone_id: UUID) -> QuorumBreakdown:
        """Compute the quorum breakdown of a milestone.

        Raises:
            NotFoundError: If the milestone does not exist or is deleted.
        """
        return await self._evaluate(await self._load_milestone(milestone_id))

    async def check_and_finalize(
        self, milestone_id: UUID, actor_did: str
    ) -> Certificate | None:
        """Finalize the milestone if its quorum is fully met.

        Finalization only happens while the milestone is
        ``attestation_in_progress`` and no non-revoked certificate exists.

        Args:
            milestone_id: Milestone to check.
            actor_did: DID of the caller whose action triggered the check.

        Returns:
            The issued certificate, or None when nothing was finalized.

        Raises:
            NotFoundError: If the milestone does not exist.
            CertificateIssuanceError: If minting failed. The milestone
                status is unchanged and no events were published.
        """
        milestone = await self._load_milestone(milestone_id)
        breakdown = await self._evaluate(milestone)
        log = self._log_operation("check_and_finalize", milestone_id=str(milestone_id))

        if not breakdown.overall_met:
            log.debug("quorum_not_met", breakdown=breakdown.to_dict())
            return None
        if milestone.status is not MilestoneStatus.ATTESTATION_IN_PROGRESS:
            log.info("quorum_met_but_not_finalizable", status=milestone.status.value)
            return None

        try:
            certificate = await self._certificates.issue(milestone, actor_did)
        except CertificateAlreadyIssuedError as exc:
            log.warning(
                "certificate_already_issued",
                certificate_id=exc.details.get("certificateId"),
            )
            return None

        completed = milestone.with_status(MilestoneStatus.COMPLETED)
        await self._milestones.update(completed)

        self._audit_log.log(
            "Milestone",
            milestone.id,
            AuditAction.UPDATE,
            actor_did,
            {
                "previousStatus": milestone.status.value,
                "status": completed.status.value,
                "certificateId": str(certificate.id),
            },
        )
        self._events.dispatch(
            WebhookEventType.MILESTONE_COMPLETED,
            {
                "milestoneId": str(milestone.id),
                "projectId": str(milestone.project_id),
                "certificateId": str(certificate.id),
            },
        )
        self._events.dispatch(
            WebhookEventType.CERTIFICATE_ISSUED,
            {
                "certificateId": str(certificate.id),
                "milestoneId": str(milestone.id),
                "certificateHash": certificate.certificate_hash,
            },
        )
        log.info(
            "milestone_finalized",
            certificate_id=str(certificate.id),
            weighted_score=breakdown.citizen.weighted_score,
        )
        return certificate

    async def _load_milestone(self, milestone_id: UUID) -> Milestone:
        milestone = await self._milestones.get(milestone_id)
        if milestone is None or milestone.is_deleted:
            raise NotFoundError("Milestone", milestone_id)
        return milestone

    async def _evaluate(self, milestone: Milestone) -> QuorumBreakdown:
        active = await self._attestations.list_active(milestone.id)

        inspectors = sum(
            1 for a in active if a.type is AttestationType.INSPECTOR_VERIFICATION
        )
        auditors = sum(1 for a in active if a.type is AttestationType.AUDITOR_REVIEW)

        tiers: list[AssuranceTier] = []
        for attestation in active:
            if attestation.type is not AttestationType.CITIZEN_APPROVAL:
                continue
            entry = await self._citizen_pools.find(milestone.id, attestation.actor_id)
            tiers.append(entry.assurance_tier if entry is not None else DEFAULT_TIER)

        return QuorumBreakdown(
            milestone_id=milestone.id,
            inspector=CountQuorum(milestone.required_inspector_count, inspectors),
            auditor=CountQuorum(milestone.required_auditor_count, auditors),
            citizen=evaluate_citizen_quorum(tiers, milestone.required_citizen_count),
        )
