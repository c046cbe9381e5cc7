"""Citizen pool command DTOs."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.application.dtos.validation import SHA256_HEX_PATTERN
from src.domain.models.citizen_pool import AssuranceTier


class EnrollCitizenInput(BaseModel):
    """Manual enrollment of a citizen on a milestone."""

    model_config = ConfigDict(frozen=True)

    milestone_id: UUID
    citizen_id: UUID
    proximity_proof_hash: str = Field(pattern=SHA256_HEX_PATTERN)
    assurance_tier: AssuranceTier
