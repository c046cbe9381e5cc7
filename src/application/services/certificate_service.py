"""Compliance certificate service.

Issues certificates for milestones that reached quorum, verifies them by
hash and revokes them. Issuance relies on the repository refusing a second
non-revoked certificate for a milestone, so two racing finalizations can
never both persist one.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from uuid6 import uuid7

from src.application.ports.actor_repository import ActorRepositoryProtocol
from src.application.ports.attestation_repository import AttestationRepositoryProtocol
from src.application.ports.certificate_repository import CertificateRepositoryProtocol
from src.application.ports.event_publisher import EventPublisherProtocol
from src.application.ports.signature_oracle import SignatureOracleProtocol
from src.application.services.audit_log_service import AuditLogService
from src.application.services.base import LoggingMixin
from src.domain.errors.certificate import CertificateIssuanceError
from src.domain.errors.taxonomy import NotFoundError
from src.domain.models.audit_log import AuditAction
from src.domain.models.certificate import (
    Certificate,
    CertificateAttestation,
    CertificateStatus,
)
from src.domain.models.milestone import Milestone
from src.domain.models.webhook import WebhookEventType


@dataclass(frozen=True)
class CertificateVerification:
    """Result of verifying a certificate by its hash."""

    valid: bool
    certificate: Certificate


class CertificateService(LoggingMixin):
    """Issues, verifies and revokes compliance certificates."""

    def __init__(
        self,
        certificates: CertificateRepositoryProtocol,
        attestations: AttestationRepositoryProtocol,
        actors: ActorRepositoryProtocol,
        oracle: SignatureOracleProtocol,
        audit_log: AuditLogService,
        events: EventPublisherProtocol,
    ) -> None:
        self._certificates = certificates
        self._attestations = attestations
        self._actors = actors
        self._oracle = oracle
        self._audit_log = audit_log
        self._events = events
        self._init_logger(component="certificates")

    async def issue(self, milestone: Milestone, actor_did: str) -> Certificate:
        """Mint and persist a certificate over the milestone's active attestations.

        Args:
            milestone: Milestone that reached full quorum.
            actor_did: DID of the caller whose action triggered issuance.

        Returns:
            The stored certificate with status ``issued``.

        Raises:
            CertificateIssuanceError: If the oracle fails to mint.
            CertificateAlreadyIssuedError: If a non-revoked certificate exists.
        """
        log = self._log_operation("issue", milestone_id=str(milestone.id))

        embedded: list[CertificateAttestation] = []
        for attestation in await self._attestations.list_active(milestone.id):
            actor = await self._actors.get(attestation.actor_id)
            embedded.append(
                CertificateAttestation(
                    attestation_id=attestation.id,
                    actor_did=actor.did if actor is not None else "",
                    type=attestation.type,
                    evidence_hash=attestation.evidence_hash,
                    digital_signature=attestation.digital_signature,
                    submitted_at=attestation.submitted_at,
                )
            )

        try:
            minted = await self._oracle.mint_certificate(
                milestone.id, milestone.project_id, embedded
            )
        except Exception as exc:
            log.error("certificate_mint_failed", error=str(exc))
            raise CertificateIssuanceError(milestone.id, str(exc)) from exc

        certificate = Certificate(
            id=uuid7(),
            milestone_id=milestone.id,
            certificate_hash=minted.certificate_hash,
            digital_signature=minted.digital_signature,
        )
        await self._certificates.save(certificate)

        self._audit_log.log(
            "ComplianceCertificate",
            certificate.id,
            AuditAction.CREATE,
            actor_did,
            {"milestoneId": str(milestone.id), "projectId": str(milestone.project_id)},
        )
        log.info(
            "certificate_issued",
            certificate_id=str(certificate.id),
            attestation_count=len(embedded),
        )
        return certificate

    async def get(self, certificate_id: UUID) -> Certificate:
        certificate = await self._certificates.get(certificate_id)
        if certificate is None:
            raise NotFoundError("ComplianceCertificate", certificate_id)
        return certificate

    async def list_certificates(
        self,
        status: CertificateStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Certificate], int]:
        return await self._certificates.list_page(status=status, limit=limit, offset=offset)

    async def verify_by_hash(self, certificate_hash: str) -> CertificateVerification:
        """Check a certificate's signature against the system public key.

        Any oracle failure reports the certificate as invalid instead of
        raising.

        Raises:
            NotFoundError: If no certificate has the hash.
        """
        certificate = await self._certificates.get_by_hash(certificate_hash)
        if certificate is None:
            raise NotFoundError("ComplianceCertificate", certificate_hash)

        try:
            valid = await self._oracle.verify_certificate_signature(
                certificate.certificate_hash,
                certificate.digital_signature,
                self._oracle.system_public_key(),
            )
        except Exception as exc:
            self._log_operation(
                "verify_by_hash", certificate_id=str(certificate.id)
            ).warning("certificate_verification_errored", error=str(exc))
            valid = False
        return CertificateVerification(valid=valid, certificate=certificate)

    async def revoke(
        self, certificate_id: UUID, reason: str, actor_did: str
    ) -> Certificate:
        """Revoke a certificate and publish ``certificate_revoked``.

        Raises:
            NotFoundError: If the certificate does not exist.
            ConflictError: If it is already revoked.
        """
        current = await self.get(certificate_id)
        return await self._revoke(current, reason, actor_did)

    async def revoke_current(
        self, milestone_id: UUID, reason: str, actor_did: str
    ) -> Certificate | None:
        """Revoke the milestone's non-revoked certificate, if it has one."""
        current = await self._certificates.find_current(milestone_id)
        if current is None:
            return None
        return await self._revoke(current, reason, actor_did)

    async def _revoke(
        self, certificate: Certificate, reason: str, actor_did: str
    ) -> Certificate:
        revoked = certificate.revoked(reason)
        await self._certificates.update(revoked)
        self._audit_log.log(
            "ComplianceCertificate",
            revoked.id,
            AuditAction.REVOKE,
            actor_did,
            {"reason": reason},
        )
        self._events.dispatch(
            WebhookEventType.CERTIFICATE_REVOKED,
            {
                "certificateId": str(revoked.id),
                "milestoneId": str(revoked.milestone_id),
                "certificateHash": revoked.certificate_hash,
                "reason": reason,
            },
        )
        self._log_operation("revoke", certificate_id=str(revoked.id)).info(
            "certificate_revoked", reason=reason
        )
        return revoked
