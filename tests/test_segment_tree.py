"""Tests for the price segment tree."""

import math
import random

import pytest

from solarb.engine.segment_tree import SegmentTree, pick_max, pick_min
from solarb.models import PriceEntry


def entry(name, price):
    return PriceEntry(source_name=name, price=price)


def scan_min(entries, left, right):
    """Linear scan: lowest price, first index wins on ties."""
    best = None
    for e in entries[left:right]:
        if e is not None and (best is None or e.price < best.price):
            best = e
    return best


def scan_max(entries, left, right):
    """Linear scan: highest price, first index wins on ties."""
    best = None
    for e in entries[left:right]:
        if e is not None and (best is None or e.price > best.price):
            best = e
    return best


def random_entries(rng, n, absent_ratio=0.0):
    # Prices from a small set so ties are common
    return [
        None if rng.random() < absent_ratio else entry(f"S{i}", float(rng.randint(1, 5)))
        for i in range(n)
    ]


class TestBuild:
    """Full-range and sub-range queries on a freshly built tree."""

    def test_min_and_max_of_three_sources(self):
        tree = SegmentTree.build([
            entry("ORCA", 100.0),
            entry("RAYDIUM", 105.0),
            entry("JUPITER", 98.0),
        ])

        assert tree.range_min(0, 3) == entry("JUPITER", 98.0)
        assert tree.range_max(0, 3) == entry("RAYDIUM", 105.0)

    def test_single_entry(self):
        tree = SegmentTree.build([entry("ORCA", 42.0)])

        assert tree.range_min(0, 1) == entry("ORCA", 42.0)
        assert tree.range_max(0, 1) == entry("ORCA", 42.0)

    def test_empty_tree(self):
        tree = SegmentTree.build([])

        assert len(tree) == 0
        assert tree.range_min(0, 0) is None
        assert tree.range_max(0, 0) is None

    def test_all_absent(self):
        tree = SegmentTree.build([None, None, None])

        assert tree.range_min(0, 3) is None
        assert tree.range_max(0, 3) is None

    def test_absent_slots_are_ignored(self):
        tree = SegmentTree.build([None, entry("RAYDIUM", 105.0), entry("JUPITER", 98.0)])

        assert tree.range_min(0, 3) == entry("JUPITER", 98.0)
        assert tree.range_max(0, 3) == entry("RAYDIUM", 105.0)

    def test_absent_never_treated_as_zero(self):
        tree = SegmentTree.build([None, entry("RAYDIUM", 100.0)])

        assert tree.range_min(0, 2) == entry("RAYDIUM", 100.0)

    def test_empty_range_returns_none(self):
        tree = SegmentTree.build([entry("ORCA", 1.0), entry("RAYDIUM", 2.0)])

        assert tree.range_min(1, 1) is None
        assert tree.range_max(2, 2) is None

    def test_getitem_returns_leaf(self):
        tree = SegmentTree.build([entry("ORCA", 1.0), None])

        assert tree[0] == entry("ORCA", 1.0)
        assert tree[1] is None


class TestTieBreak:
    """Equal prices resolve to the lowest index."""

    def test_min_prefers_first_source(self):
        tree = SegmentTree.build([entry("ORCA", 100.0), entry("RAYDIUM", 100.0)])

        assert tree.range_min(0, 2).source_name == "ORCA"

    def test_max_prefers_first_source(self):
        tree = SegmentTree.build([entry("ORCA", 100.0), entry("RAYDIUM", 100.0)])

        assert tree.range_max(0, 2).source_name == "ORCA"

    @pytest.mark.parametrize("n", [3, 5, 6, 7, 9])
    def test_tie_across_non_power_of_two_sizes(self, n):
        entries = [entry(f"S{i}", 7.0) for i in range(n)]
        tree = SegmentTree.build(entries)

        assert tree.range_min(0, n).source_name == "S0"
        assert tree.range_max(0, n).source_name == "S0"
        assert tree.range_min(1, n).source_name == "S1"
        assert tree.range_max(2, n).source_name == "S2"


class TestAgainstLinearScan:
    """Every range query agrees with a linear scan."""

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 7, 8, 13])
    def test_all_ranges_without_absent(self, n):
        rng = random.Random(n)
        entries = random_entries(rng, n)
        tree = SegmentTree.build(entries)

        for left in range(n + 1):
            for right in range(left, n + 1):
                assert tree.range_min(left, right) == scan_min(entries, left, right)
                assert tree.range_max(left, right) == scan_max(entries, left, right)

    @pytest.mark.parametrize("n", [2, 5, 11])
    def test_all_ranges_with_absent(self, n):
        rng = random.Random(100 + n)
        entries = random_entries(rng, n, absent_ratio=0.4)
        tree = SegmentTree.build(entries)

        for left in range(n + 1):
            for right in range(left, n + 1):
                assert tree.range_min(left, right) == scan_min(entries, left, right)
                assert tree.range_max(left, right) == scan_max(entries, left, right)


class TestUpdate:
    """Point updates and their locality."""

    def test_update_is_reflected(self):
        tree = SegmentTree.build([entry("ORCA", 100.0), entry("RAYDIUM", 105.0)])

        tree.update(0, entry("ORCA", 110.0))

        assert tree.range_max(0, 2) == entry("ORCA", 110.0)
        assert tree.range_min(0, 2) == entry("RAYDIUM", 105.0)

    def test_update_to_absent(self):
        tree = SegmentTree.build([entry("ORCA", 90.0), entry("RAYDIUM", 105.0)])

        tree.update(0, None)

        assert tree.range_min(0, 2) == entry("RAYDIUM", 105.0)
        assert tree.range_min(0, 1) is None

    def test_ranges_excluding_index_unaffected(self):
        entries = [entry(f"S{i}", float(i + 1)) for i in range(6)]
        tree = SegmentTree.build(entries)

        tree.update(4, entry("S4", 0.5))

        assert tree.range_min(0, 4) == entry("S0", 1.0)
        assert tree.range_max(0, 4) == entry("S3", 4.0)
        assert tree.range_min(5, 6) == entry("S5", 6.0)
        assert tree.range_min(0, 6) == entry("S4", 0.5)

    def test_incremental_matches_build(self):
        rng = random.Random(7)
        n = 9
        tree = SegmentTree(n)
        entries = [None] * n

        for _ in range(50):
            i = rng.randrange(n)
            new = None if rng.random() < 0.3 else entry(f"S{i}", float(rng.randint(1, 4)))
            entries[i] = new
            tree.update(i, new)

            fresh = SegmentTree.build(entries)
            assert tree.range_min(0, n) == fresh.range_min(0, n)
            assert tree.range_max(0, n) == fresh.range_max(0, n)

    def test_new_tree_starts_absent(self):
        tree = SegmentTree(3)

        assert tree.range_min(0, 3) is None
        tree.update(1, entry("RAYDIUM", 5.0))
        assert tree.range_min(0, 3) == entry("RAYDIUM", 5.0)


class TestPreconditions:
    """Out-of-range use is a programmer error."""

    @pytest.mark.parametrize("left,right", [(-1, 2), (0, 4), (2, 1), (4, 4)])
    def test_query_out_of_range(self, left, right):
        tree = SegmentTree.build([entry("A", 1.0), entry("B", 2.0), entry("C", 3.0)])

        with pytest.raises(IndexError):
            tree.range_min(left, right)
        with pytest.raises(IndexError):
            tree.range_max(left, right)

    @pytest.mark.parametrize("index", [-1, 3])
    def test_update_out_of_range(self, index):
        tree = SegmentTree(3)

        with pytest.raises(IndexError):
            tree.update(index, entry("A", 1.0))

    def test_negative_size(self):
        with pytest.raises(ValueError):
            SegmentTree(-1)


class TestCombine:
    """Combine rules for absent and non-comparable prices."""

    def test_absent_handling(self):
        a = entry("A", 1.0)

        assert pick_min(None, None) is None
        assert pick_min(a, None) is a
        assert pick_min(None, a) is a
        assert pick_max(None, a) is a

    def test_nan_never_beats_a_number(self):
        nan = entry("BAD", math.nan)
        good = entry("GOOD", 5.0)

        assert pick_min(nan, good) is good
        assert pick_min(good, nan) is good
        assert pick_max(nan, good) is good
        assert pick_max(good, nan) is good

    def test_nan_against_nan_keeps_left(self):
        first = entry("A", math.nan)
        second = entry("B", math.nan)

        assert pick_min(first, second) is first
        assert pick_max(first, second) is first

    def test_tree_skips_nan(self):
        tree = SegmentTree.build([entry("BAD", math.nan), entry("A", 3.0), entry("B", 2.0)])

        assert tree.range_min(0, 3) == entry("B", 2.0)
        assert tree.range_max(0, 3) == entry("A", 3.0)
