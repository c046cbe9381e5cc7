"""Certificate repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.certificate import Certificate, CertificateStatus


class CertificateRepositoryProtocol(Protocol):
    """Protocol for certificate storage.

    ``save`` is the atomic guard for issuance: it must refuse a second
    non-revoked certificate for a milestone.
    """

    async def save(self, certificate: Certificate) -> None:
        """Store a new certificate.

        Raises:
            CertificateAlreadyIssuedError: If a non-revoked certificate
                exists for the milestone.
        """
        ...

    async def get(self, certificate_id: UUID) -> Certificate | None:
        ...

    async def get_by_hash(self, certificate_hash: str) -> Certificate | None:
        ...

    async def find_current(self, milestone_id: UUID) -> Certificate | None:
        """Return the milestone's non-revoked certificate, if any."""
        ...

    async def update(self, certificate: Certificate) -> None:
        ...

    async def list_page(
        self,
        status: CertificateStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Certificate], int]:
        ...
