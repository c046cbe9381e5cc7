"""Trusted issuer registry port."""

from __future__ import annotations

from typing import Protocol

from src.domain.models.trusted_issuer import TrustedIssuer


class TrustedIssuerRepositoryProtocol(Protocol):
    """Protocol for the trusted issuer registry."""

    async def save(self, issuer: TrustedIssuer) -> None:
        ...

    async def get_by_did(self, issuer_did: str) -> TrustedIssuer | None:
        ...

    async def update(self, issuer: TrustedIssuer) -> None:
        ...
