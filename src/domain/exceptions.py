"""Base exception classes for the milestone verification domain layer."""

from __future__ import annotations


class TMLError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class so callers
    can map them onto a response in one place. Every error carries a
    machine-readable ``code`` and a structured ``details`` payload.

    Attributes:
        code: Machine-readable error code (e.g. ``"CONFLICT"``).
        details: Structured context for the failure.
    """

    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str = "",
        details: dict[str, object] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional structured context.
        """
        super().__init__(message)
        self.message = message
        self.details: dict[str, object] = dict(details or {})

    def to_dict(self) -> dict[str, object]:
        """Serialize the error for transport to a caller."""
        payload: dict[str, object] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload
