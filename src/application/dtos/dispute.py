"""Dispute command DTOs."""

from __future__ import annotations

from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.application.dtos.validation import SHA256_HEX_PATTERN


class FileDisputeInput(BaseModel):
    """Grounds for a dispute against a milestone."""

    model_config = ConfigDict(frozen=True)

    milestone_id: UUID
    reason: str = Field(min_length=1, max_length=5000)
    evidence_hash: Annotated[str, Field(pattern=SHA256_HEX_PATTERN)] | None = None


class ResolveDisputeInput(BaseModel):
    """Outcome of a dispute under review.

    ``reassigned_auditor_id`` only takes effect when the dispute is resolved.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["resolved", "dismissed"]
    resolution_notes: str = Field(min_length=1, max_length=5000)
    reassigned_auditor_id: UUID | None = None
