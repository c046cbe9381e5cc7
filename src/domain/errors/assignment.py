"""Auditor and citizen assignment errors."""

from __future__ import annotations

from uuid import UUID

from src.domain.errors.taxonomy import ConflictError


class InsufficientPoolError(ConflictError):
    """Raised when fewer eligible candidates remain than were requested.

    Selection never assigns partially: either the full ``requested`` count
    is drawn or nothing is persisted.

    Attributes:
        available: Number of eligible candidates after exclusions.
        requested: Number of candidates asked for.
        exclusions: Count of candidates removed per exclusion rule.
    """

    def __init__(
        self,
        pool: str,
        available: int,
        requested: int,
        exclusions: dict[str, int] | None = None,
    ) -> None:
        self.pool = pool
        self.available = available
        self.requested = requested
        self.exclusions = dict(exclusions or {})
        super().__init__(
            f"Not enough available {pool} for selection",
            {
                "available": available,
                "requested": requested,
                "exclusions": self.exclusions,
            },
        )


class DuplicateAssignmentError(ConflictError):
    """Raised when an active assignment or pool entry already exists."""

    def __init__(self, entity: str, milestone_id: UUID, actor_id: UUID) -> None:
        super().__init__(
            f"{entity} already exists for this actor on this milestone",
            {"milestoneId": str(milestone_id), "actorId": str(actor_id)},
        )
