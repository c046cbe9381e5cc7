"""In-memory certificate repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.certificate_repository import CertificateRepositoryProtocol
from src.domain.errors.certificate import CertificateAlreadyIssuedError
from src.domain.errors.taxonomy import NotFoundError
from src.domain.models.certificate import Certificate, CertificateStatus


class CertificateRepositoryStub(CertificateRepositoryProtocol):
    """In-memory stub for CertificateRepositoryProtocol.

    ``save`` refuses a second non-revoked certificate for a milestone,
    standing in for a partial unique index on (milestone_id).
    """

    def __init__(self) -> None:
        self._certificates: dict[UUID, Certificate] = {}

    async def save(self, certificate: Certificate) -> None:
        current = await self.find_current(certificate.milestone_id)
        if current is not None:
            raise CertificateAlreadyIssuedError(certificate.milestone_id, current.id)
        self._certificates[certificate.id] = certificate

    async def get(self, certificate_id: UUID) -> Certificate | None:
        return self._certificates.get(certificate_id)

    async def get_by_hash(self, certificate_hash: str) -> Certificate | None:
        for c in self._certificates.values():
            if c.certificate_hash == certificate_hash:
                return c
        return None

    async def find_current(self, milestone_id: UUID) -> Certificate | None:
        for c in self._certificates.values():
            if c.milestone_id == milestone_id and not c.is_revoked:
                return c
        return None

    async def update(self, certificate: Certificate) -> None:
        if certificate.id not in self._certificates:
            raise NotFoundError("ComplianceCertificate", certificate.id)
        self._certificates[certificate.id] = certificate

    async def list_page(
        self,
        status: CertificateStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Certificate], int]:
        matching = sorted(
            (c for c in self._certificates.values() if status is None or c.status is status),
            key=lambda c: c.issued_at,
            reverse=True,
        )
        return matching[offset : offset + limit], len(matching)

    def get_certificate_count(self) -> int:
        """Get the number of stored certificates (for testing)."""
        return len(self._certificates)

    def clear(self) -> None:
        """Clear all certificates for test isolation."""
        self._certificates.clear()
