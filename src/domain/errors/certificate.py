"""Certificate issuance and signing errors."""

from __future__ import annotations

from uuid import UUID

from src.domain.errors.taxonomy import ConflictError
from src.domain.exceptions import TMLError


class CertificateAlreadyIssuedError(ConflictError):
    """Raised when a non-revoked certificate already exists for a milestone."""

    def __init__(self, milestone_id: UUID, certificate_id: UUID) -> None:
        self.milestone_id = milestone_id
        self.certificate_id = certificate_id
        super().__init__(
            "Certificate already exists for this milestone",
            {"milestoneId": str(milestone_id), "certificateId": str(certificate_id)},
        )


class SignatureOracleError(TMLError):
    """Raised by signature oracle adapters when signing infrastructure fails."""

    code = "SIGNATURE_ORACLE_ERROR"


class CertificateIssuanceError(TMLError):
    """Raised when minting a certificate fails during finalization.

    The milestone is left untouched and no events are dispatched.
    """

    code = "CERTIFICATE_ISSUANCE_FAILED"

    def __init__(self, milestone_id: UUID, reason: str) -> None:
        self.milestone_id = milestone_id
        self.reason = reason
        super().__init__(
            f"Certificate issuance failed for milestone {milestone_id}: {reason}",
            {"milestoneId": str(milestone_id), "reason": reason},
        )
