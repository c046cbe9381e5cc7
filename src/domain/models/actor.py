"""Actor domain model.

An actor is any party that can act on a milestone: contractor engineers
(inspectors), independent auditors, citizens, administrators and CSO
aggregators. Callers are identified by their decentralized identifier (DID).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID


class ActorRole(Enum):
    """Role an actor holds in the verification process."""

    CONTRACTOR_ENGINEER = "contractor_engineer"
    INDEPENDENT_AUDITOR = "independent_auditor"
    CITIZEN = "citizen"
    ADMIN = "admin"
    CSO_AGGREGATOR = "cso_aggregator"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Actor:
    """A registered participant.

    Attributes:
        id: UUIDv7 unique identifier.
        did: Decentralized identifier the actor authenticates with.
        roles: Roles held by the actor; at least one. An auditor who is
            also an administrator holds both.
        organization_ids: Organizations the actor is a member of. Used for
            conflict-of-interest exclusion during auditor selection.
        deleted_at: Soft-delete marker; deleted actors are treated as absent.
        created_at: Registration timestamp (UTC).
    """

    id: UUID
    did: str
    roles: frozenset[ActorRole]
    organization_ids: frozenset[UUID] = field(default_factory=frozenset)
    deleted_at: datetime | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if not self.roles:
            raise ValueError("Actor must hold at least one role")

    @property
    def is_deleted(self) -> bool:
        """True when the actor has been soft-deleted."""
        return self.deleted_at is not None

    def has_role(self, *roles: ActorRole) -> bool:
        """Check whether the actor holds any of the given roles."""
        return not self.roles.isdisjoint(roles)

    @property
    def role_values(self) -> list[str]:
        """Sorted role values, for error details and logs."""
        return sorted(role.value for role in self.roles)

    def shares_organization_with(self, other: Actor) -> bool:
        """Check whether both actors belong to at least one common organization."""
        return not self.organization_ids.isdisjoint(other.organization_ids)
