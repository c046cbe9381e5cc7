"""Milestone command DTOs."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CreateMilestoneInput(BaseModel):
    """Definition of a new milestone."""

    model_config = ConfigDict(frozen=True)

    project_id: UUID
    sequence_number: int = Field(ge=1)
    description: str = Field(default="", max_length=5000)
    required_inspector_count: int = Field(default=1, ge=0)
    required_auditor_count: int = Field(default=1, ge=0)
    required_citizen_count: int = Field(default=3, ge=0)
