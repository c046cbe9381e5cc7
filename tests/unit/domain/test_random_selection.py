"""Unit tests for randomized selection helpers."""

from collections import Counter

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.domain.services.random_selection import (
    draw_without_replacement,
    stratified_sample,
)
from src.infrastructure.stubs.random_source_stub import SeededRandomSource


class TestDrawWithoutReplacement:
    """Tests for draw_without_replacement."""

    @given(
        size=st.integers(min_value=0, max_value=40),
        data=st.data(),
        seed=st.integers(min_value=0, max_value=10_000),
    )
    def test_draws_are_distinct_members(
        self, size: int, data: st.DataObject, seed: int
    ) -> None:
        candidates = list(range(size))
        count = data.draw(st.integers(min_value=0, max_value=size))

        drawn = draw_without_replacement(candidates, count, SeededRandomSource(seed))

        assert len(drawn) == count
        assert len(set(drawn)) == count
        assert set(drawn) <= set(candidates)

    def test_does_not_modify_candidates(self) -> None:
        candidates = ["a", "b", "c"]

        draw_without_replacement(candidates, 2, SeededRandomSource())

        assert candidates == ["a", "b", "c"]

    def test_rejects_count_above_pool(self) -> None:
        with pytest.raises(ValueError, match="Cannot draw 4 items from 3"):
            draw_without_replacement([1, 2, 3], 4, SeededRandomSource())

    def test_rejects_negative_count(self) -> None:
        with pytest.raises(ValueError):
            draw_without_replacement([1, 2, 3], -1, SeededRandomSource())

    def test_first_pick_is_roughly_uniform(self) -> None:
        """Test that every candidate is picked first about equally often."""
        rng = SeededRandomSource(seed=1)
        firsts = Counter(
            draw_without_replacement(["a", "b", "c", "d"], 1, rng)[0]
            for _ in range(4000)
        )

        assert set(firsts) == {"a", "b", "c", "d"}
        assert all(800 <= n <= 1200 for n in firsts.values())


class TestStratifiedSample:
    """Tests for stratified_sample."""

    def test_round_robin_across_buckets(self) -> None:
        buckets = {"bio": ["b1", "b2"], "ussd": ["u1", "u2"], "cso": ["c1", "c2"]}

        drawn = stratified_sample(
            buckets, 3, SeededRandomSource(), order=("bio", "ussd", "cso")
        )

        assert [key for key, _ in drawn] == ["bio", "ussd", "cso"]

    def test_skewed_pool_fills_from_remaining_bucket(self) -> None:
        """Test that a tier-skewed pool still yields the full count."""
        buckets = {"bio": ["b1"], "ussd": [], "cso": ["c1", "c2", "c3", "c4"]}

        drawn = stratified_sample(buckets, 4, SeededRandomSource())

        assert Counter(key for key, _ in drawn) == {"bio": 1, "cso": 3}
        assert len({item for _, item in drawn}) == 4

    def test_stops_when_every_bucket_is_exhausted(self) -> None:
        drawn = stratified_sample({"a": [1], "b": [2]}, 5, SeededRandomSource())

        assert sorted(item for _, item in drawn) == [1, 2]

    def test_order_may_name_missing_buckets(self) -> None:
        drawn = stratified_sample({"b": [1, 2]}, 2, SeededRandomSource(), order=("a", "b"))

        assert [key for key, _ in drawn] == ["b", "b"]

    @given(
        sizes=st.lists(st.integers(min_value=0, max_value=6), min_size=1, max_size=4),
        seed=st.integers(min_value=0, max_value=1000),
    )
    def test_no_tier_dominates_unless_skewed(self, sizes: list[int], seed: int) -> None:
        """Test that bucket draw counts differ by at most one while all are non-empty."""
        buckets = {i: [f"{i}-{n}" for n in range(size)] for i, size in enumerate(sizes)}
        total = sum(sizes)
        count = total // 2

        drawn = stratified_sample(buckets, count, SeededRandomSource(seed))

        assert len(drawn) == count
        per_bucket = Counter(key for key, _ in drawn)
        unsaturated = [k for k in buckets if per_bucket[k] < len(buckets[k])]
        if unsaturated:
            low = min(per_bucket[k] for k in unsaturated)
            assert all(per_bucket[k] <= low + 1 for k in buckets)
