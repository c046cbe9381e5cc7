"""Attestation ledger service: the submission pipeline.

Submission checks run in a fixed order and the first failure stops the
pipeline:

    1. milestone exists and is attestation_in_progress     (NotFound/Conflict)
    2. actor exists and matches the authenticated caller   (NotFound/Authorization)
    3. actor role may submit the attestation type          (Authorization)
    4. the type's predecessor has an active attestation    (Validation)
    5. auditor reviews need an accepted assignment         (Authorization)
    6. citizen approvals need an enrolled pool entry       (Authorization)
    7. GPS point lies inside the project boundary          (Validation)
    8. signature check, recorded but never fatal
    9. one attestation per (milestone, actor, type)        (Conflict)
   10. one citizen approval per device token per milestone (Conflict)
   11. persist, re-evaluate quorum, audit

The whole pipeline runs under the milestone lock, so concurrent
submissions cannot both observe a pre-finalization quorum.
"""

from __future__ import annotations

from uuid import UUID

from uuid6 import uuid7

from src.application.dtos.attestation import SubmitAttestationInput
from src.application.ports.actor_repository import ActorRepositoryProtocol
from src.application.ports.attestation_repository import AttestationRepositoryProtocol
from src.application.ports.auditor_assignment_repository import (
    AuditorAssignmentRepositoryProtocol,
)
from src.application.ports.citizen_pool_repository import CitizenPoolRepositoryProtocol
from src.application.ports.milestone_lock import MilestoneLockProtocol
from src.application.ports.milestone_repository import MilestoneRepositoryProtocol
from src.application.ports.project_repository import ProjectRepositoryProtocol
from src.application.ports.signature_oracle import SignatureOracleProtocol
from src.application.services.audit_log_service import AuditLogService
from src.application.services.base import LoggingMixin
from src.application.services.quorum_resolver_service import QuorumResolverService
from src.domain.errors.attestation import (
    DeviceReuseError,
    DuplicateAttestationError,
    GeofenceViolationError,
    MilestoneNotAcceptingAttestationsError,
    MissingPredecessorError,
)
from src.domain.errors.certificate import CertificateIssuanceError
from src.domain.errors.taxonomy import AuthorizationError, ConflictError, NotFoundError
from src.domain.models.actor import Actor
from src.domain.models.attestation import Attestation, AttestationStatus
from src.domain.models.audit_log import AuditAction
from src.domain.models.auditor_assignment import AssignmentStatus
from src.domain.models.citizen_pool import PoolEntryStatus
from src.domain.models.milestone import Milestone, MilestoneStatus
from src.domain.models.project import GeoPoint
from src.domain.services.attestation_rules import AttestationRule, rule_for
from src.domain.services.geofence import is_within_boundary


class AttestationLedgerService(LoggingMixin):
    """Accepts, reviews and revokes attestations."""

    def __init__(
        self,
        attestations: AttestationRepositoryProtocol,
        milestones: MilestoneRepositoryProtocol,
        projects: ProjectRepositoryProtocol,
        actors: ActorRepositoryProtocol,
        assignments: AuditorAssignmentRepositoryProtocol,
        citizen_pools: CitizenPoolRepositoryProtocol,
        oracle: SignatureOracleProtocol,
        resolver: QuorumResolverService,
        audit_log: AuditLogService,
        lock: MilestoneLockProtocol,
    ) -> None:
        self._attestations = attestations
        self._milestones = milestones
        self._projects = projects
        self._actors = actors
        self._assignments = assignments
        self._citizen_pools = citizen_pools
        self._oracle = oracle
        self._resolver = resolver
        self._audit_log = audit_log
        self._lock = lock
        self._init_logger(component="attestations")

    async def submit(self, data: SubmitAttestationInput, actor_did: str) -> Attestation:
        """Run the submission pipeline.

        Args:
            data: Validated attestation fields.
            actor_did: DID of the authenticated caller.

        Returns:
            The stored attestation, status ``submitted``.

        Raises:
            NotFoundError: Milestone, actor or project missing.
            AuthorizationError: Identity, role, assignment or enrollment mismatch.
            MissingPredecessorError: Ordering violated.
            GeofenceViolationError: GPS point outside the boundary.
            ConflictError: Milestone not accepting attestations, duplicate
                triple or reused device.
        """
        async with self._lock.hold(data.milestone_id):
            return await self._submit(data, actor_did)

    async def _submit(self, data: SubmitAttestationInput, actor_did: str) -> Attestation:
        log = self._log_operation(
            "submit",
            milestone_id=str(data.milestone_id),
            actor_id=str(data.actor_id),
            attestation_type=data.type.value,
        )
        rule = rule_for(data.type)

        milestone = await self._load_milestone(data.milestone_id)
        if milestone.status is not MilestoneStatus.ATTESTATION_IN_PROGRESS:
            raise MilestoneNotAcceptingAttestationsError(
                milestone.id, milestone.status.value
            )

        actor = await self._actors.get(data.actor_id)
        if actor is None or actor.is_deleted:
            raise NotFoundError("Actor", data.actor_id)
        if actor.did != actor_did:
            raise AuthorizationError(
                "Actor identity does not match the authenticated caller",
                {"actorId": str(actor.id)},
            )
        self._check_role(actor, rule, data)

        if rule.predecessor is not None:
            predecessors = await self._attestations.list_active(
                milestone.id, rule.predecessor
            )
            if not predecessors:
                raise MissingPredecessorError(
                    milestone.id, data.type.value, rule.predecessor.value
                )

        if rule.requires_accepted_assignment:
            assignment = await self._assignments.find_active(milestone.id, actor.id)
            if assignment is None or assignment.status is not AssignmentStatus.ACCEPTED:
                raise AuthorizationError(
                    "Auditor must have an accepted assignment for this milestone",
                    {"milestoneId": str(milestone.id), "actorId": str(actor.id)},
                )

        pool_entry = None
        if rule.requires_enrollment:
            pool_entry = await self._citizen_pools.find(milestone.id, actor.id)
            if pool_entry is None or pool_entry.status is not PoolEntryStatus.ENROLLED:
                raise AuthorizationError(
                    "Citizen must be enrolled in the citizen pool for this milestone",
                    {"milestoneId": str(milestone.id), "actorId": str(actor.id)},
                )

        project = await self._projects.get(milestone.project_id)
        if project is None or project.is_deleted:
            raise NotFoundError("Project", milestone.project_id)
        gps = GeoPoint(lat=data.gps_latitude, lng=data.gps_longitude)
        if not is_within_boundary(gps, project.boundary):
            raise GeofenceViolationError(project.id, gps.lat, gps.lng)

        signature_verified = await self._verify_signature(data, actor)

        existing = await self._attestations.find_by_milestone_actor_type(
            milestone.id, actor.id, data.type
        )
        if existing is not None:
            raise DuplicateAttestationError(milestone.id, actor.id, data.type.value)

        if rule.device_capped:
            reused = await self._attestations.find_by_device_token(
                milestone.id, data.type, data.device_attestation_token
            )
            if reused is not None:
                raise DeviceReuseError(milestone.id, data.device_attestation_token)

        attestation = Attestation(
            id=uuid7(),
            milestone_id=milestone.id,
            actor_id=actor.id,
            type=data.type,
            gps=gps,
            evidence_hash=data.evidence_hash,
            device_attestation_token=data.device_attestation_token,
            digital_signature=data.digital_signature,
            signature_verified=signature_verified,
        )
        await self._attestations.save(attestation)

        if pool_entry is not None:
            await self._citizen_pools.update(
                pool_entry.with_status(PoolEntryStatus.ATTESTED)
            )

        await self._finalize(milestone.id, actor_did)

        self._audit_log.log(
            "Attestation",
            attestation.id,
            AuditAction.SUBMIT,
            actor_did,
            {
                "milestoneId": str(milestone.id),
                "type": data.type.value,
                "signatureVerified": signature_verified,
            },
        )
        log.info(
            "attestation_submitted",
            attestation_id=str(attestation.id),
            signature_verified=signature_verified,
        )
        return attestation

    async def verify(self, attestation_id: UUID, actor_did: str) -> Attestation:
        """Mark a submitted attestation verified and re-check quorum.

        Raises:
            NotFoundError: If the attestation does not exist.
            ConflictError: If it is not in ``submitted`` status.
        """
        current = await self.get(attestation_id)
        async with self._lock.hold(current.milestone_id):
            current = await self.get(attestation_id)
            if current.status is not AttestationStatus.SUBMITTED:
                raise ConflictError(
                    "Attestation must be in 'submitted' status to verify, "
                    f"current: '{current.status.value}'",
                    {"id": str(attestation_id), "currentStatus": current.status.value},
                )
            verified = current.with_status(AttestationStatus.VERIFIED)
            await self._attestations.update(verified)
            self._audit_log.log(
                "Attestation",
                attestation_id,
                AuditAction.APPROVE,
                actor_did,
                {"previousStatus": AttestationStatus.SUBMITTED.value},
            )
            await self._finalize(verified.milestone_id, actor_did)

        self._log_operation("verify", attestation_id=str(attestation_id)).info(
            "attestation_verified"
        )
        return verified

    async def revoke(self, attestation_id: UUID, actor_did: str) -> Attestation:
        """Revoke an attestation so it stops counting toward quorum.

        Revocation does not recompute quorum; a completed milestone stays
        completed until a dispute reopens it.

        Raises:
            NotFoundError: If the attestation does not exist.
            ConflictError: If it is already revoked.
        """
        current = await self.get(attestation_id)
        async with self._lock.hold(current.milestone_id):
            current = await self.get(attestation_id)
            if current.status is AttestationStatus.REVOKED:
                raise ConflictError(
                    "Attestation is already revoked", {"id": str(attestation_id)}
                )
            revoked = current.with_status(AttestationStatus.REVOKED)
            await self._attestations.update(revoked)

        self._audit_log.log(
            "Attestation", attestation_id, AuditAction.REVOKE, actor_did, {}
        )
        self._log_operation("revoke", attestation_id=str(attestation_id)).info(
            "attestation_revoked"
        )
        return revoked

    async def get(self, attestation_id: UUID) -> Attestation:
        attestation = await self._attestations.get(attestation_id)
        if attestation is None:
            raise NotFoundError("Attestation", attestation_id)
        return attestation

    async def list_attestations(
        self, milestone_id: UUID, limit: int = 100, offset: int = 0
    ) -> tuple[list[Attestation], int]:
        return await self._attestations.list_by_milestone(
            milestone_id, limit=limit, offset=offset
        )

    async def _load_milestone(self, milestone_id: UUID) -> Milestone:
        milestone = await self._milestones.get(milestone_id)
        if milestone is None or milestone.is_deleted:
            raise NotFoundError("Milestone", milestone_id)
        return milestone

    @staticmethod
    def _check_role(
        actor: Actor, rule: AttestationRule, data: SubmitAttestationInput
    ) -> None:
        if not actor.has_role(*rule.allowed_roles):
            raise AuthorizationError(
                f"Roles {actor.role_values} cannot submit {data.type.value}",
                {
                    "roles": actor.role_values,
                    "type": data.type.value,
                    "allowedRoles": sorted(r.value for r in rule.allowed_roles),
                },
            )

    async def _verify_signature(
        self, data: SubmitAttestationInput, actor: Actor
    ) -> bool:
        """Check the attestation signature without ever failing the submission.

        Client and server payload construction may not match byte for byte,
        so a failed check is only logged and stored on the attestation.
        """
        log = self._log_operation("verify_signature", actor_id=str(actor.id))
        try:
            valid = await self._oracle.verify_attestation_signature(
                data.signing_payload(), data.digital_signature, actor.did
            )
        except Exception as exc:
            log.warning("attestation_signature_check_errored", error=str(exc))
            return False
        if not valid:
            log.warning("attestation_signature_unverified")
        return valid

    async def _finalize(self, milestone_id: UUID, actor_did: str) -> None:
        try:
            await self._resolver.check_and_finalize(milestone_id, actor_did)
        except CertificateIssuanceError as exc:
            # Milestone stays attestation_in_progress; the next submission
            # or verification retries finalization.
            self._log_operation("finalize", milestone_id=str(milestone_id)).error(
                "milestone_finalization_failed", error=exc.message
            )
