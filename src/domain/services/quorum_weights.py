"""Weighted citizen quorum calculation."""

from __future__ import annotations

from collections.abc import Iterable

from src.domain.models.citizen_pool import AssuranceTier
from src.domain.models.quorum import WeightedQuorum


def weighted_score(tiers: Iterable[AssuranceTier]) -> float:
    """Sum tier weights for a set of approvals, rounded to 2 decimals.

    >>> weighted_score([AssuranceTier.BIOMETRIC, AssuranceTier.USSD])
    1.6
    """
    return round(sum(tier.weight for tier in tiers), 2)


def evaluate_citizen_quorum(
    tiers: Iterable[AssuranceTier],
    required: int,
) -> WeightedQuorum:
    """Build the weighted citizen quorum for the given approvals.

    Args:
        tiers: Assurance tier of each active citizen approval.
        required: Weighted threshold of the milestone.

    Returns:
        WeightedQuorum with per-tier counts.
    """
    tier_list = list(tiers)
    breakdown: dict[str, int] = {}
    for tier in tier_list:
        breakdown[tier.value] = breakdown.get(tier.value, 0) + 1
    return WeightedQuorum(
        required=required,
        current=len(tier_list),
        weighted_score=weighted_score(tier_list),
        breakdown=breakdown,
    )
