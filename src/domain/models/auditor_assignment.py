"""Auditor assignment domain model.

State Machine:
    assigned -> accepted | recused | replaced
    accepted -> completed | recused | replaced
    recused -> replaced
    completed, replaced are terminal
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from src.domain.errors.taxonomy import InvalidStatusTransitionError


class AssignmentStatus(Enum):
    """Lifecycle status of an auditor assignment."""

    ASSIGNED = "assigned"
    ACCEPTED = "accepted"
    COMPLETED = "completed"
    RECUSED = "recused"
    REPLACED = "replaced"

    @property
    def is_active(self) -> bool:
        """Recused and replaced assignments no longer bind the auditor."""
        return self not in INACTIVE_STATUSES


INACTIVE_STATUSES: frozenset[AssignmentStatus] = frozenset(
    {AssignmentStatus.RECUSED, AssignmentStatus.REPLACED}
)

STATUS_TRANSITION_MATRIX: dict[AssignmentStatus, frozenset[AssignmentStatus]] = {
    AssignmentStatus.ASSIGNED: frozenset(
        {
            AssignmentStatus.ACCEPTED,
            AssignmentStatus.RECUSED,
            AssignmentStatus.REPLACED,
        }
    ),
    AssignmentStatus.ACCEPTED: frozenset(
        {
            AssignmentStatus.COMPLETED,
            AssignmentStatus.RECUSED,
            AssignmentStatus.REPLACED,
        }
    ),
    AssignmentStatus.RECUSED: frozenset({AssignmentStatus.REPLACED}),
    AssignmentStatus.COMPLETED: frozenset(),
    AssignmentStatus.REPLACED: frozenset(),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class AuditorAssignment:
    """Links an independent auditor to a milestone for one rotation round.

    Attributes:
        id: UUIDv7 unique identifier.
        milestone_id: Milestone under audit.
        auditor_id: Assigned auditor actor.
        rotation_round: Round number, monotonically increasing per milestone.
        status: Lifecycle status.
        conflict_reason: Reason recorded when the auditor recused.
        assigned_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    milestone_id: UUID
    auditor_id: UUID
    rotation_round: int
    status: AssignmentStatus = field(default=AssignmentStatus.ASSIGNED)
    conflict_reason: str | None = field(default=None)
    assigned_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate assignment fields."""
        if self.rotation_round < 1:
            raise ValueError("rotation_round must be at least 1")

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    def with_status(
        self,
        target: AssignmentStatus,
        conflict_reason: str | None = None,
    ) -> AuditorAssignment:
        """Create a copy in the target status.

        Args:
            target: Status to move to.
            conflict_reason: Stored when recusing.

        Raises:
            InvalidStatusTransitionError: If the transition is not allowed.
        """
        if target not in STATUS_TRANSITION_MATRIX[self.status]:
            raise InvalidStatusTransitionError(
                "AuditorAssignment", self.id, self.status.value, target.value
            )
        return replace(
            self,
            status=target,
            conflict_reason=conflict_reason or self.conflict_reason,
            updated_at=_utc_now(),
        )
