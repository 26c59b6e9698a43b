"""Spread detection over one tick of price entries."""

from typing import Optional, Sequence

from ..logging import get_logger
from ..models import ArbitrageReport, PriceEntry
from .segment_tree import SegmentTree

logger = get_logger("solarb.detector")


class ArbitrageDetector:
    """Finds the cheapest and priciest source for one asset.

    The detector keeps its segment tree across ticks and only updates the
    slots whose entry changed since the previous call.
    """

    def __init__(self, asset: str, source_count: int):
        self.asset = asset
        self.tree = SegmentTree(source_count)

    @property
    def source_count(self) -> int:
        return len(self.tree)

    def detect(self, entries: Sequence[Optional[PriceEntry]]) -> Optional[ArbitrageReport]:
        """Compute the spread for this tick.

        Args:
            entries: One slot per source in configuration order, None when
                the source produced no usable price.

        Returns:
            ArbitrageReport when at least two prices are present (with
            spread 0.0 when they agree), None otherwise.

        Raises:
            ValueError: If the sequence length does not match the source count.
        """
        n = self.source_count
        if len(entries) != n:
            raise ValueError(
                f"expected {n} entries for {self.asset}, got {len(entries)}"
            )

        for i, entry in enumerate(entries):
            if self.tree[i] != entry:
                self.tree.update(i, entry)

        present = sum(1 for entry in entries if entry is not None)
        if present < 2:
            logger.debug(f"Insufficient prices for {self.asset}: {present} present")
            return None

        cheapest = self.tree.range_min(0, n)
        priciest = self.tree.range_max(0, n)
        if cheapest is None or priciest is None:
            return None

        spread = max(priciest.price - cheapest.price, 0.0)
        return ArbitrageReport(
            asset=self.asset,
            cheapest_source=cheapest.source_name,
            cheapest_price=cheapest.price,
            priciest_source=priciest.source_name,
            priciest_price=priciest.price,
            spread=spread,
            sources_present=present,
        )
