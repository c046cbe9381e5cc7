"""Unit tests for weighted citizen quorum calculation."""

from uuid import uuid4

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.domain.models.citizen_pool import TIER_WEIGHTS, AssuranceTier
from src.domain.models.quorum import CountQuorum, QuorumBreakdown, WeightedQuorum
from src.domain.services.quorum_weights import evaluate_citizen_quorum, weighted_score

BIO = AssuranceTier.BIOMETRIC
USSD = AssuranceTier.USSD
CSO = AssuranceTier.CSO_MEDIATED


class TestTierWeights:
    def test_weights(self) -> None:
        assert TIER_WEIGHTS == {BIO: 1.0, USSD: 0.6, CSO: 0.4}
        assert BIO.weight == 1.0


class TestWeightedScore:
    """Tests for weighted_score."""

    @pytest.mark.parametrize(
        ("tiers", "expected"),
        [
            ([], 0.0),
            ([BIO, USSD, CSO], 2.0),
            ([BIO, BIO, USSD], 2.6),
            ([BIO, BIO, USSD, CSO], 3.0),
            ([USSD, USSD, USSD], 1.8),
        ],
    )
    def test_sums_tier_weights(self, tiers: list[AssuranceTier], expected: float) -> None:
        assert weighted_score(tiers) == expected

    @given(st.lists(st.sampled_from(list(AssuranceTier)), max_size=50))
    def test_score_has_at_most_two_decimals(self, tiers: list[AssuranceTier]) -> None:
        score = weighted_score(tiers)
        assert score == round(score, 2)
        assert 0.0 <= score <= len(tiers)


class TestEvaluateCitizenQuorum:
    """Tests for evaluate_citizen_quorum."""

    def test_met_at_exact_equality(self) -> None:
        """Test that a score equal to the threshold meets it."""
        quorum = evaluate_citizen_quorum([BIO, BIO, USSD, CSO], required=3)

        assert quorum.weighted_score == 3.0
        assert quorum.met is True

    def test_not_met_below_threshold(self) -> None:
        quorum = evaluate_citizen_quorum([BIO, BIO, USSD], required=3)

        assert quorum.weighted_score == 2.6
        assert quorum.met is False

    def test_breakdown_counts_per_tier(self) -> None:
        quorum = evaluate_citizen_quorum([BIO, USSD, BIO], required=3)

        assert quorum.current == 3
        assert quorum.breakdown == {"biometric": 2, "ussd": 1}

    def test_zero_requirement_is_met_without_citizens(self) -> None:
        assert evaluate_citizen_quorum([], required=0).met


class TestQuorumBreakdown:
    def test_overall_requires_all_three(self) -> None:
        breakdown = QuorumBreakdown(
            milestone_id=uuid4(),
            inspector=CountQuorum(required=1, current=1),
            auditor=CountQuorum(required=1, current=0),
            citizen=WeightedQuorum(
                required=3, current=3, weighted_score=3.0, breakdown={"biometric": 3}
            ),
        )

        assert breakdown.overall_met is False
        payload = breakdown.to_dict()
        assert payload["auditor"] == {"required": 1, "current": 0, "met": False}
        assert payload["citizen"]["weightedScore"] == 3.0
        assert payload["overallMet"] is False
