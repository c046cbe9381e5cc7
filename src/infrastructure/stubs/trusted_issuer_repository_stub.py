"""In-memory trusted issuer registry for development and testing."""

from __future__ import annotations

from src.application.ports.trusted_issuer_repository import (
    TrustedIssuerRepositoryProtocol,
)
from src.domain.errors.taxonomy import ConflictError, NotFoundError
from src.domain.models.trusted_issuer import TrustedIssuer


class TrustedIssuerRepositoryStub(TrustedIssuerRepositoryProtocol):
    """In-memory stub for TrustedIssuerRepositoryProtocol, keyed by DID."""

    def __init__(self) -> None:
        self._issuers: dict[str, TrustedIssuer] = {}

    async def save(self, issuer: TrustedIssuer) -> None:
        if issuer.issuer_did in self._issuers:
            raise ConflictError(
                "Trusted issuer already registered", {"issuerDid": issuer.issuer_did}
            )
        self._issuers[issuer.issuer_did] = issuer

    async def get_by_did(self, issuer_did: str) -> TrustedIssuer | None:
        return self._issuers.get(issuer_did)

    async def update(self, issuer: TrustedIssuer) -> None:
        if issuer.issuer_did not in self._issuers:
            raise NotFoundError("TrustedIssuer", issuer.issuer_did)
        self._issuers[issuer.issuer_did] = issuer

    def clear(self) -> None:
        """Clear all issuers for test isolation."""
        self._issuers.clear()
