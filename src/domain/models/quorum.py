"""Quorum breakdown value objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class CountQuorum:
    """Headcount quorum for inspector or auditor attestations."""

    required: int
    current: int

    @property
    def met(self) -> bool:
        return self.current >= self.required


@dataclass(frozen=True)
class WeightedQuorum:
    """Tier-weighted quorum for citizen approvals.

    Attributes:
        required: Weighted threshold from the milestone.
        current: Number of active citizen approvals.
        weighted_score: Sum of tier weights, rounded to 2 decimals.
        breakdown: Approvals counted per tier value.
    """

    required: int
    current: int
    weighted_score: float
    breakdown: dict[str, int]

    @property
    def met(self) -> bool:
        # Equality meets the threshold
        return self.weighted_score >= self.required


@dataclass(frozen=True)
class QuorumBreakdown:
    """Quorum status for all three attestation types of a milestone."""

    milestone_id: UUID
    inspector: CountQuorum
    auditor: CountQuorum
    citizen: WeightedQuorum

    @property
    def overall_met(self) -> bool:
        return self.inspector.met and self.auditor.met and self.citizen.met

    def to_dict(self) -> dict[str, Any]:
        return {
            "milestoneId": str(self.milestone_id),
            "inspector": {
                "required": self.inspector.required,
                "current": self.inspector.current,
                "met": self.inspector.met,
            },
            "auditor": {
                "required": self.auditor.required,
                "current": self.auditor.current,
                "met": self.auditor.met,
            },
            "citizen": {
                "required": self.citizen.required,
                "current": self.citizen.current,
                "weightedScore": self.citizen.weighted_score,
                "breakdown": dict(self.citizen.breakdown),
                "met": self.citizen.met,
            },
            "overallMet": self.overall_met,
        }
