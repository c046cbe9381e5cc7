"""Error taxonomy shared by every verification component.

Four error families cover all business failures. They propagate unchanged
to the caller; nothing in the core downgrades one into another.

- NotFoundError: referenced entity absent or soft-deleted
- ValidationError: malformed input or a broken domain precondition
- AuthorizationError: role, identity or assignment mismatch
- ConflictError: uniqueness violation, illegal state transition,
  insufficient eligible pool, already-exists
"""

from __future__ import annotations

from src.domain.exceptions import TMLError


class NotFoundError(TMLError):
    """Raised when a referenced entity does not exist or is soft-deleted.

    Attributes:
        entity: Entity type name (e.g. ``"Milestone"``).
        entity_id: Identifier that was looked up.
    """

    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = str(entity_id)
        super().__init__(
            f"{entity} with id '{self.entity_id}' not found",
            {"entity": entity, "id": self.entity_id},
        )


class ValidationError(TMLError):
    """Raised when input is malformed or a domain precondition fails."""

    code = "VALIDATION_ERROR"


class AuthorizationError(TMLError):
    """Raised when the caller lacks the role, identity or assignment required."""

    code = "AUTHORIZATION_ERROR"

    def __init__(
        self,
        message: str = "Insufficient permissions",
        details: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message, details)


class ConflictError(TMLError):
    """Raised on uniqueness violations and illegal state transitions."""

    code = "CONFLICT"


class InvalidStatusTransitionError(ConflictError):
    """Raised when an entity is asked to move to a status it cannot reach.

    Attributes:
        entity: Entity type name.
        entity_id: Identifier of the entity.
        current_status: Status the entity is in.
        target_status: Status that was requested.
    """

    def __init__(
        self,
        entity: str,
        entity_id: object,
        current_status: str,
        target_status: str,
    ) -> None:
        self.entity = entity
        self.entity_id = str(entity_id)
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            f"Cannot transition {entity} from '{current_status}' to '{target_status}'",
            {
                "id": self.entity_id,
                "currentStatus": current_status,
                "targetStatus": target_status,
            },
        )
