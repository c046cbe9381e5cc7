"""Milestone domain model.

State Machine:
    pending -> in_progress
    in_progress -> attestation_in_progress
    attestation_in_progress -> completed (quorum resolver only)
    attestation_in_progress -> failed
    completed -> attestation_in_progress (dispute coordinator only)
    failed -> in_progress

External callers may drive every transition except the two reserved ones,
see EXTERNAL_TRANSITIONS.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from src.domain.errors.taxonomy import InvalidStatusTransitionError


class MilestoneStatus(Enum):
    """Lifecycle status of a milestone."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    ATTESTATION_IN_PROGRESS = "attestation_in_progress"
    COMPLETED = "completed"
    FAILED = "failed"

    def valid_transitions(self) -> frozenset[MilestoneStatus]:
        """Get every status reachable from this one, reserved transitions included."""
        return STATUS_TRANSITION_MATRIX.get(self, frozenset())


STATUS_TRANSITION_MATRIX: dict[MilestoneStatus, frozenset[MilestoneStatus]] = {
    MilestoneStatus.PENDING: frozenset({MilestoneStatus.IN_PROGRESS}),
    MilestoneStatus.IN_PROGRESS: frozenset({MilestoneStatus.ATTESTATION_IN_PROGRESS}),
    MilestoneStatus.ATTESTATION_IN_PROGRESS: frozenset(
        {MilestoneStatus.COMPLETED, MilestoneStatus.FAILED}
    ),
    MilestoneStatus.COMPLETED: frozenset({MilestoneStatus.ATTESTATION_IN_PROGRESS}),
    MilestoneStatus.FAILED: frozenset({MilestoneStatus.IN_PROGRESS}),
}

# Reserved to the quorum resolver and the dispute coordinator respectively
RESERVED_TRANSITIONS: frozenset[tuple[MilestoneStatus, MilestoneStatus]] = frozenset(
    {
        (MilestoneStatus.ATTESTATION_IN_PROGRESS, MilestoneStatus.COMPLETED),
        (MilestoneStatus.COMPLETED, MilestoneStatus.ATTESTATION_IN_PROGRESS),
    }
)

EXTERNAL_TRANSITIONS: dict[MilestoneStatus, frozenset[MilestoneStatus]] = {
    source: frozenset(
        target for target in targets if (source, target) not in RESERVED_TRANSITIONS
    )
    for source, targets in STATUS_TRANSITION_MATRIX.items()
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Milestone:
    """A verifiable stage of a project.

    Attributes:
        id: UUIDv7 unique identifier.
        project_id: Owning project.
        sequence_number: Position within the project, unique per project.
        description: Free text description of the deliverable.
        status: Current lifecycle status.
        required_inspector_count: Inspector verifications needed.
        required_auditor_count: Auditor reviews needed.
        required_citizen_count: Weighted citizen score needed. This is a
            weighted threshold, not a headcount.
        deleted_at: Soft-delete marker.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    project_id: UUID
    sequence_number: int
    description: str = field(default="")
    status: MilestoneStatus = field(default=MilestoneStatus.PENDING)
    required_inspector_count: int = field(default=1)
    required_auditor_count: int = field(default=1)
    required_citizen_count: int = field(default=3)
    deleted_at: datetime | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate milestone fields."""
        if self.sequence_number < 1:
            raise ValueError("sequence_number must be positive")
        for name in (
            "required_inspector_count",
            "required_auditor_count",
            "required_citizen_count",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    @property
    def is_deleted(self) -> bool:
        """True when the milestone has been soft-deleted."""
        return self.deleted_at is not None

    def can_transition_to(self, target: MilestoneStatus) -> bool:
        """Check whether the transition is in the matrix."""
        return target in self.status.valid_transitions()

    def with_status(self, target: MilestoneStatus) -> Milestone:
        """Create a copy of this milestone in the target status.

        Args:
            target: Status to move to.

        Returns:
            New Milestone instance.

        Raises:
            InvalidStatusTransitionError: If the matrix forbids the move.
        """
        if not self.can_transition_to(target):
            raise InvalidStatusTransitionError(
                "Milestone", self.id, self.status.value, target.value
            )
        return replace(self, status=target, updated_at=_utc_now())
