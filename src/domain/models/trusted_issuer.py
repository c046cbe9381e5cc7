"""Trusted issuer registry entry.

Credentials are only honoured while their issuer's DID is active in the
registry. Deactivation is the credential-level kill switch used when an
auditor is found to have acted fraudulently.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from uuid import UUID


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class TrustedIssuer:
    """A DID whose credentials are trusted.

    Attributes:
        id: UUIDv7 unique identifier.
        issuer_did: Decentralized identifier of the issuer.
        active: False once revoked.
        revocation_reason: Why the issuer was revoked.
        revoked_at: Revocation timestamp.
    """

    id: UUID
    issuer_did: str
    active: bool = field(default=True)
    revocation_reason: str | None = field(default=None)
    revoked_at: datetime | None = field(default=None)

    def deactivated(self, reason: str) -> TrustedIssuer:
        """Create an inactive copy carrying the revocation reason."""
        return replace(
            self, active=False, revocation_reason=reason, revoked_at=_utc_now()
        )
