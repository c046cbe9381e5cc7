"""Citizen pool domain model.

A citizen pool entry enrolls one citizen to attest one milestone. Entries
are weighted by the citizen's assurance tier when the quorum is computed.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from src.domain.errors.taxonomy import InvalidStatusTransitionError

# Maximum concurrent enrolled/attested entries one citizen may hold
DEFAULT_SIM_CAP: int = 5


class AssuranceTier(Enum):
    """Strength of the citizen's identity verification, strongest first."""

    BIOMETRIC = "biometric"
    USSD = "ussd"
    CSO_MEDIATED = "cso_mediated"

    @property
    def weight(self) -> float:
        """Quorum weight contributed by one approval at this tier."""
        return TIER_WEIGHTS[self]


TIER_WEIGHTS: dict[AssuranceTier, float] = {
    AssuranceTier.BIOMETRIC: 1.0,
    AssuranceTier.USSD: 0.6,
    AssuranceTier.CSO_MEDIATED: 0.4,
}

# Tier assumed when a citizen has no pool entry to read one from
DEFAULT_TIER: AssuranceTier = AssuranceTier.CSO_MEDIATED


class PoolEntryStatus(Enum):
    """Lifecycle status of a citizen pool entry."""

    ENROLLED = "enrolled"
    ATTESTED = "attested"
    WITHDRAWN = "withdrawn"
    EXCLUDED = "excluded"

    @property
    def counts_toward_cap(self) -> bool:
        """Enrolled and attested entries count toward the SIM cap."""
        return self in CAPPED_STATUSES


CAPPED_STATUSES: frozenset[PoolEntryStatus] = frozenset(
    {PoolEntryStatus.ENROLLED, PoolEntryStatus.ATTESTED}
)

STATUS_TRANSITION_MATRIX: dict[PoolEntryStatus, frozenset[PoolEntryStatus]] = {
    PoolEntryStatus.ENROLLED: frozenset(
        {
            PoolEntryStatus.ATTESTED,
            PoolEntryStatus.WITHDRAWN,
            PoolEntryStatus.EXCLUDED,
        }
    ),
    PoolEntryStatus.ATTESTED: frozenset({PoolEntryStatus.EXCLUDED}),
    PoolEntryStatus.WITHDRAWN: frozenset(),
    PoolEntryStatus.EXCLUDED: frozenset(),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class CitizenPoolEntry:
    """Enrollment of a citizen on a milestone.

    Attributes:
        id: UUIDv7 unique identifier.
        milestone_id: Milestone the citizen may attest.
        citizen_id: Enrolled citizen actor.
        proximity_proof_hash: SHA-256 hex digest proving proximity to the site.
        assurance_tier: Identity assurance tier of the citizen.
        status: Lifecycle status.
        enrolled_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    milestone_id: UUID
    citizen_id: UUID
    proximity_proof_hash: str
    assurance_tier: AssuranceTier
    status: PoolEntryStatus = field(default=PoolEntryStatus.ENROLLED)
    enrolled_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def with_status(self, target: PoolEntryStatus) -> CitizenPoolEntry:
        """Create a copy in the target status.

        Raises:
            InvalidStatusTransitionError: If the transition is not allowed.
        """
        if target not in STATUS_TRANSITION_MATRIX[self.status]:
            raise InvalidStatusTransitionError(
                "CitizenPool", self.id, self.status.value, target.value
            )
        return replace(self, status=target, updated_at=_utc_now())
