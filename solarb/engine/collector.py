"""Concurrent price collection across sources."""

import asyncio
import math
from typing import Sequence

from ..exceptions import SourceError
from ..logging import get_logger
from ..models import CollectionResult, FetchStatus, SourceQuote
from ..sources.base import BaseSource

logger = get_logger("solarb.collector")


class PriceCollector:
    """Fetches one price per source for an asset and classifies each result.

    Sources are called concurrently, each under its own timeout. A failing
    source only empties its own slot.
    """

    def __init__(self, sources: Sequence[BaseSource], timeout: float):
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.sources = list(sources)
        self.timeout = timeout

    @property
    def source_names(self) -> list[str]:
        return [source.name for source in self.sources]

    async def collect(self, asset: str) -> CollectionResult:
        """Collect the tick's quotes for ``asset``.

        Args:
            asset: Token mint address.

        Returns:
            CollectionResult with one quote per source, in source order.
        """
        quotes = await asyncio.gather(
            *(self._fetch_one(source, asset) for source in self.sources)
        )
        result = CollectionResult(asset=asset, quotes=list(quotes))

        if result.failed_sources:
            logger.info(
                f"{asset[:8]}: {result.present_count}/{len(quotes)} prices, "
                f"failed: {', '.join(result.failed_sources)}"
            )
        return result

    async def _fetch_one(self, source: BaseSource, asset: str) -> SourceQuote:
        name = source.name
        try:
            price = await asyncio.wait_for(
                source.fetch_price(asset), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"{name} timed out after {self.timeout}s for {asset}")
            return SourceQuote(name, FetchStatus.TIMEOUT, error="timeout")
        except SourceError as e:
            logger.warning(f"{name} fetch failed for {asset}: {e}")
            return SourceQuote(name, FetchStatus.FAILED, error=str(e))
        except Exception as e:
            logger.error(f"{name} raised unexpectedly for {asset}: {e}", exc_info=True)
            return SourceQuote(name, FetchStatus.FAILED, error=str(e))

        if price is None:
            logger.debug(f"{name} has no price for {asset}")
            return SourceQuote(name, FetchStatus.NO_DATA)

        try:
            price = float(price)
        except (TypeError, ValueError):
            logger.warning(f"Data quality: {name} returned non-numeric price {price!r} for {asset}")
            return SourceQuote(name, FetchStatus.INVALID, error=f"non-numeric price {price!r}")

        if not math.isfinite(price) or price <= 0:
            logger.warning(f"Data quality: {name} returned invalid price {price} for {asset}")
            return SourceQuote(name, FetchStatus.INVALID, price=price, error=f"invalid price {price}")

        return SourceQuote(name, FetchStatus.OK, price=price)
