"""Attestation submission errors.

Each class narrows one of the taxonomy families so callers can match the
exact rule that rejected a submission while still handling the family.
"""

from __future__ import annotations

from uuid import UUID

from src.domain.errors.taxonomy import ConflictError, ValidationError


class MilestoneNotAcceptingAttestationsError(ConflictError):
    """Raised when a milestone is not in ``attestation_in_progress``."""

    def __init__(self, milestone_id: UUID, current_status: str) -> None:
        self.milestone_id = milestone_id
        self.current_status = current_status
        super().__init__(
            "Milestone must be in 'attestation_in_progress' status to accept "
            f"attestations, current: '{current_status}'",
            {"milestoneId": str(milestone_id), "currentStatus": current_status},
        )


class MissingPredecessorError(ValidationError):
    """Raised when an attestation arrives before its required predecessor.

    An auditor review needs an active inspector verification; a citizen
    approval needs an active auditor review.
    """

    def __init__(self, milestone_id: UUID, attestation_type: str, missing: str) -> None:
        self.milestone_id = milestone_id
        self.attestation_type = attestation_type
        self.missing = missing
        super().__init__(
            f"Cannot submit {attestation_type}: milestone has no active {missing}",
            {
                "milestoneId": str(milestone_id),
                "type": attestation_type,
                "missingPredecessor": missing,
            },
        )


class GeofenceViolationError(ValidationError):
    """Raised when the submitted GPS point lies outside the project boundary."""

    def __init__(self, project_id: UUID, latitude: float, longitude: float) -> None:
        self.project_id = project_id
        super().__init__(
            "GPS coordinates fall outside the project geofence boundary",
            {
                "projectId": str(project_id),
                "gpsLatitude": latitude,
                "gpsLongitude": longitude,
            },
        )


class DuplicateAttestationError(ConflictError):
    """Raised when (milestone, actor, type) already has an attestation."""

    def __init__(self, milestone_id: UUID, actor_id: UUID, attestation_type: str) -> None:
        super().__init__(
            "Attestation already exists for this actor and type on this milestone",
            {
                "milestoneId": str(milestone_id),
                "actorId": str(actor_id),
                "type": attestation_type,
            },
        )


class DeviceReuseError(ConflictError):
    """Raised when a device token already backs a citizen approval on a milestone."""

    def __init__(self, milestone_id: UUID, device_token: str) -> None:
        super().__init__(
            "Device has already been used for a citizen approval on this milestone",
            {"milestoneId": str(milestone_id), "deviceAttestationToken": device_token},
        )
