"""Segment tree for range minimum/maximum queries over price entries."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ..models import PriceEntry

Slot = Optional[PriceEntry]


def _comparable(entry: PriceEntry) -> bool:
    return not math.isnan(entry.price)


def pick_min(left: Slot, right: Slot) -> Slot:
    """Combine two slots for a minimum query.

    Absent slots never win against present ones. Equal prices keep the left
    operand. A NaN price only wins against another NaN.
    """
    if left is None:
        return right
    if right is None:
        return left
    if not _comparable(left):
        return right if _comparable(right) else left
    if not _comparable(right):
        return left
    return right if right.price < left.price else left


def pick_max(left: Slot, right: Slot) -> Slot:
    """Combine two slots for a maximum query (mirror of pick_min)."""
    if left is None:
        return right
    if right is None:
        return left
    if not _comparable(left):
        return right if _comparable(right) else left
    if not _comparable(right):
        return left
    return right if right.price > left.price else left


class SegmentTree:
    """Flattened binary tree over N slots supporting point update and
    range min/max query.

    Leaves live at ``N..2N-1``; internal node ``i`` caches the combine of
    nodes ``2i`` and ``2i+1``. Min and max are kept in two parallel arrays.

    Usage:
        tree = SegmentTree.build([PriceEntry("ORCA", 100.0), None])
        cheapest = tree.range_min(0, len(tree))
        tree.update(1, PriceEntry("RAYDIUM", 99.0))
    """

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        self._n = size
        self._min_tree: list[Slot] = [None] * (2 * size)
        self._max_tree: list[Slot] = [None] * (2 * size)

    @classmethod
    def build(cls, entries: Sequence[Slot]) -> "SegmentTree":
        """Build a tree over ``entries`` in O(N)."""
        tree = cls(len(entries))
        n = tree._n
        for i, entry in enumerate(entries):
            tree._min_tree[n + i] = entry
            tree._max_tree[n + i] = entry
        for i in range(n - 1, 0, -1):
            tree._pull(i)
        return tree

    def __len__(self) -> int:
        return self._n

    def __getitem__(self, index: int) -> Slot:
        self._check_index(index)
        return self._min_tree[self._n + index]

    def update(self, index: int, entry: Slot) -> None:
        """Replace the slot at ``index`` and refresh its ancestors."""
        self._check_index(index)
        pos = index + self._n
        self._min_tree[pos] = entry
        self._max_tree[pos] = entry
        pos //= 2
        while pos >= 1:
            self._pull(pos)
            pos //= 2

    def range_min(self, left: int, right: int) -> Slot:
        """Cheapest entry in ``[left, right)``, or None if all absent."""
        return self._query(self._min_tree, pick_min, left, right)

    def range_max(self, left: int, right: int) -> Slot:
        """Priciest entry in ``[left, right)``, or None if all absent."""
        return self._query(self._max_tree, pick_max, left, right)

    def _pull(self, i: int) -> None:
        self._min_tree[i] = pick_min(self._min_tree[2 * i], self._min_tree[2 * i + 1])
        self._max_tree[i] = pick_max(self._max_tree[2 * i], self._max_tree[2 * i + 1])

    def _query(self, tree: list[Slot], combine, left: int, right: int) -> Slot:
        if not 0 <= left <= right <= self._n:
            raise IndexError(
                f"query range [{left}, {right}) outside [0, {self._n}]"
            )

        # Separate accumulators keep "left operand" meaning "lower index"
        acc_left: Slot = None
        acc_right: Slot = None
        lo = left + self._n
        hi = right + self._n
        while lo < hi:
            if lo & 1:
                acc_left = combine(acc_left, tree[lo])
                lo += 1
            if hi & 1:
                hi -= 1
                acc_right = combine(tree[hi], acc_right)
            lo //= 2
            hi //= 2
        return combine(acc_left, acc_right)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._n:
            raise IndexError(f"index {index} outside [0, {self._n})")
