"""Compliance certificate domain model.

A certificate is minted once a milestone reaches full quorum. At most one
non-revoked certificate exists per milestone at any time.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID

from src.domain.errors.taxonomy import ConflictError
from src.domain.models.attestation import AttestationType


class CertificateStatus(Enum):
    """Delivery status of a certificate."""

    ISSUED = "issued"
    DELIVERED_TO_TGR = "delivered_to_tgr"
    ACKNOWLEDGED = "acknowledged"
    REVOKED = "revoked"


@dataclass(frozen=True, eq=True)
class CertificateAttestation:
    """One attestation as it is embedded in a certificate body."""

    attestation_id: UUID
    actor_did: str
    type: AttestationType
    evidence_hash: str
    digital_signature: str
    submitted_at: datetime

    def to_payload(self) -> dict[str, str]:
        """Render the attestation with JSON-safe values."""
        return {
            "attestationId": str(self.attestation_id),
            "actorDid": self.actor_did,
            "type": self.type.value,
            "evidenceHash": self.evidence_hash,
            "digitalSignature": self.digital_signature,
            "submittedAt": self.submitted_at.isoformat(),
        }


@dataclass(frozen=True, eq=True)
class MintedCertificate:
    """Output of the signature oracle when a certificate is minted.

    Attributes:
        certificate_hash: SHA-256 hex digest of the canonical body.
        digital_signature: Signature over the hash.
        body: The signed certificate body.
    """

    certificate_hash: str
    digital_signature: str
    body: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Certificate:
    """A stored compliance certificate.

    Attributes:
        id: UUIDv7 unique identifier.
        milestone_id: Certified milestone.
        certificate_hash: SHA-256 hex digest of the certificate body.
        digital_signature: System signature over the hash.
        status: Delivery status.
        issued_at: Issuance timestamp (UTC).
        revoked_at: Revocation timestamp.
        revocation_reason: Why the certificate was revoked.
    """

    id: UUID
    milestone_id: UUID
    certificate_hash: str
    digital_signature: str
    status: CertificateStatus = field(default=CertificateStatus.ISSUED)
    issued_at: datetime = field(default_factory=_utc_now)
    revoked_at: datetime | None = field(default=None)
    revocation_reason: str | None = field(default=None)

    @property
    def is_revoked(self) -> bool:
        return self.status is CertificateStatus.REVOKED

    def revoked(self, reason: str) -> Certificate:
        """Create a revoked copy of this certificate.

        Raises:
            ConflictError: If the certificate is already revoked.
        """
        if self.is_revoked:
            raise ConflictError(
                "Certificate is already revoked", {"id": str(self.id)}
            )
        return replace(
            self,
            status=CertificateStatus.REVOKED,
            revoked_at=_utc_now(),
            revocation_reason=reason,
        )
