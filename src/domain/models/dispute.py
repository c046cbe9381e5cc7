"""Dispute domain model.

State Machine:
    open -> under_review
    under_review -> resolved | dismissed
    resolved, dismissed are terminal
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from src.domain.errors.taxonomy import InvalidStatusTransitionError


class DisputeStatus(Enum):
    """Lifecycle status of a dispute."""

    OPEN = "open"
    UNDER_REVIEW = "under_review"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"

    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    def valid_transitions(self) -> frozenset[DisputeStatus]:
        return STATUS_TRANSITION_MATRIX.get(self, frozenset())


TERMINAL_STATUSES: frozenset[DisputeStatus] = frozenset(
    {DisputeStatus.RESOLVED, DisputeStatus.DISMISSED}
)

STATUS_TRANSITION_MATRIX: dict[DisputeStatus, frozenset[DisputeStatus]] = {
    DisputeStatus.OPEN: frozenset({DisputeStatus.UNDER_REVIEW}),
    DisputeStatus.UNDER_REVIEW: frozenset(
        {DisputeStatus.RESOLVED, DisputeStatus.DISMISSED}
    ),
    DisputeStatus.RESOLVED: frozenset(),
    DisputeStatus.DISMISSED: frozenset(),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Dispute:
    """A dispute raised against a milestone.

    Attributes:
        id: UUIDv7 unique identifier.
        milestone_id: Disputed milestone.
        raised_by_id: Actor who filed the dispute.
        reason: Free text grounds for the dispute.
        evidence_hash: Optional SHA-256 hex digest of supporting evidence.
        status: Lifecycle status.
        resolution_notes: Notes recorded on resolution or dismissal.
        reassigned_auditor_id: Auditor manually assigned by the resolution.
        created_at: Filing timestamp (UTC).
        resolved_at: Set when the dispute reaches a terminal status.
    """

    id: UUID
    milestone_id: UUID
    raised_by_id: UUID
    reason: str
    evidence_hash: str | None = field(default=None)
    status: DisputeStatus = field(default=DisputeStatus.OPEN)
    resolution_notes: str | None = field(default=None)
    reassigned_auditor_id: UUID | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
    resolved_at: datetime | None = field(default=None)

    def with_status(
        self,
        target: DisputeStatus,
        resolution_notes: str | None = None,
        reassigned_auditor_id: UUID | None = None,
    ) -> Dispute:
        """Create a copy in the target status.

        Terminal targets stamp ``resolved_at`` and record the resolution.

        Raises:
            InvalidStatusTransitionError: If the transition is not allowed.
        """
        if target not in self.status.valid_transitions():
            raise InvalidStatusTransitionError(
                "Dispute", self.id, self.status.value, target.value
            )
        if not target.is_terminal():
            return replace(self, status=target)
        return replace(
            self,
            status=target,
            resolution_notes=resolution_notes,
            reassigned_auditor_id=reassigned_auditor_id,
            resolved_at=_utc_now(),
        )
