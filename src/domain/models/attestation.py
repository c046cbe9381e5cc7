"""Attestation domain model.

An attestation is a signed, geolocated statement by one actor that a
milestone has been delivered. Attestations are never deleted; review
actions move them to ``verified`` or ``revoked``.

State Machine:
    submitted -> verified | rejected | revoked
    verified -> revoked
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from src.domain.errors.taxonomy import InvalidStatusTransitionError
from src.domain.models.project import GeoPoint


class AttestationType(Enum):
    """Kind of attestation, in the order they must arrive on a milestone."""

    INSPECTOR_VERIFICATION = "inspector_verification"
    AUDITOR_REVIEW = "auditor_review"
    CITIZEN_APPROVAL = "citizen_approval"


class AttestationStatus(Enum):
    """Review status of an attestation."""

    SUBMITTED = "submitted"
    VERIFIED = "verified"
    REJECTED = "rejected"
    REVOKED = "revoked"

    @property
    def is_active(self) -> bool:
        """Active attestations count toward ordering and quorum."""
        return self in ACTIVE_STATUSES


ACTIVE_STATUSES: frozenset[AttestationStatus] = frozenset(
    {AttestationStatus.SUBMITTED, AttestationStatus.VERIFIED}
)

STATUS_TRANSITION_MATRIX: dict[AttestationStatus, frozenset[AttestationStatus]] = {
    AttestationStatus.SUBMITTED: frozenset(
        {
            AttestationStatus.VERIFIED,
            AttestationStatus.REJECTED,
            AttestationStatus.REVOKED,
        }
    ),
    AttestationStatus.VERIFIED: frozenset({AttestationStatus.REVOKED}),
    AttestationStatus.REJECTED: frozenset({AttestationStatus.REVOKED}),
    AttestationStatus.REVOKED: frozenset(),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Attestation:
    """A stored attestation.

    Attributes:
        id: UUIDv7 unique identifier.
        milestone_id: Milestone being attested.
        actor_id: Submitting actor.
        type: Attestation type.
        gps: Location the attestation was captured at.
        evidence_hash: SHA-256 hex digest of the captured evidence.
        device_attestation_token: Opaque device identity token.
        digital_signature: Signature over the attestation payload.
        signature_verified: Outcome of the server-side signature check.
            A False value is stored for later audit, it never blocks.
        status: Review status.
        submitted_at: Submission timestamp (UTC).
        revoked_at: Revocation timestamp, set once revoked.
    """

    id: UUID
    milestone_id: UUID
    actor_id: UUID
    type: AttestationType
    gps: GeoPoint
    evidence_hash: str
    device_attestation_token: str
    digital_signature: str
    signature_verified: bool = field(default=False)
    status: AttestationStatus = field(default=AttestationStatus.SUBMITTED)
    submitted_at: datetime = field(default_factory=_utc_now)
    revoked_at: datetime | None = field(default=None)

    @property
    def is_active(self) -> bool:
        """True while the attestation counts toward quorum."""
        return self.status.is_active

    def with_status(self, target: AttestationStatus) -> Attestation:
        """Create a copy in the target status.

        Revocation stamps ``revoked_at``.

        Raises:
            InvalidStatusTransitionError: If the transition is not allowed.
        """
        if target not in STATUS_TRANSITION_MATRIX[self.status]:
            raise InvalidStatusTransitionError(
                "Attestation", self.id, self.status.value, target.value
            )
        revoked_at = _utc_now() if target is AttestationStatus.REVOKED else self.revoked_at
        return replace(self, status=target, revoked_at=revoked_at)
