"""Attestation command DTOs."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.application.dtos.validation import SHA256_HEX_PATTERN
from src.domain.models.attestation import AttestationType


class SubmitAttestationInput(BaseModel):
    """Fields an actor submits with an attestation.

    Attributes:
        milestone_id: Milestone being attested.
        actor_id: Submitting actor; must match the authenticated caller.
        type: Attestation type.
        evidence_hash: SHA-256 hex digest of the evidence.
        gps_latitude: Capture latitude.
        gps_longitude: Capture longitude.
        device_attestation_token: Opaque device identity token.
        digital_signature: Signature over the attestation payload.
    """

    model_config = ConfigDict(frozen=True)

    milestone_id: UUID
    actor_id: UUID
    type: AttestationType
    evidence_hash: str = Field(pattern=SHA256_HEX_PATTERN)
    gps_latitude: float = Field(ge=-90.0, le=90.0)
    gps_longitude: float = Field(ge=-180.0, le=180.0)
    device_attestation_token: str = Field(min_length=1, max_length=512)
    digital_signature: str = Field(min_length=1)

    def signing_payload(self) -> dict[str, str]:
        """Reconstruct the payload the client is expected to have signed."""
        return {
            "milestoneId": str(self.milestone_id),
            "actorId": str(self.actor_id),
            "type": self.type.value,
            "evidenceHash": self.evidence_hash,
            "gpsLatitude": f"{self.gps_latitude}",
            "gpsLongitude": f"{self.gps_longitude}",
            "deviceAttestationToken": self.device_attestation_token,
        }
