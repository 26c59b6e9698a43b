"""Data models for spread monitoring."""

from dataclasses import dataclass, field
from enum import Enum
from time import time


class FetchStatus(str, Enum):
    """Outcome of one source call within a tick."""
    OK = "OK"
    NO_DATA = "NO_DATA"
    FAILED = "FAILED"
    TIMEOUT = "TIMEOUT"
    INVALID = "INVALID"


@dataclass(frozen=True)
class PriceEntry:
    """One source's price observation for one asset at one tick."""
    source_name: str
    price: float


@dataclass
class SourceQuote:
    """Classified result of a single source call."""
    source_name: str
    status: FetchStatus
    price: float | None = None
    error: str = ""

    @property
    def entry(self) -> PriceEntry | None:
        """Entry for the tick's sequence, or None for an absent slot."""
        if self.status is FetchStatus.OK and self.price is not None:
            return PriceEntry(source_name=self.source_name, price=self.price)
        return None


@dataclass
class CollectionResult:
    """All source quotes for one asset at one tick."""
    asset: str
    quotes: list[SourceQuote]
    timestamp: float = field(default_factory=time)

    @property
    def entries(self) -> list[PriceEntry | None]:
        """Entry sequence in source configuration order."""
        return [quote.entry for quote in self.quotes]

    @property
    def present_count(self) -> int:
        """Number of sources that produced a usable price."""
        return sum(1 for quote in self.quotes if quote.status is FetchStatus.OK)

    @property
    def failed_sources(self) -> list[str]:
        """Sources that failed or timed out this tick."""
        return [
            quote.source_name
            for quote in self.quotes
            if quote.status in (FetchStatus.FAILED, FetchStatus.TIMEOUT)
        ]


@dataclass(frozen=True)
class ArbitrageReport:
    """Spread between the cheapest and priciest source for one tick."""
    asset: str
    cheapest_source: str
    cheapest_price: float
    priciest_source: str
    priciest_price: float
    spread: float
    sources_present: int = 0
    observed_at: float = field(default_factory=time)

    @property
    def is_opportunity(self) -> bool:
        """True when the sources disagree on price."""
        return self.spread > 0

    @property
    def spread_pct(self) -> float:
        """Spread relative to the cheapest price."""
        if self.cheapest_price <= 0:
            return 0.0
        return self.spread / self.cheapest_price

    def describe(self) -> str:
        """Human readable summary of the report."""
        if not self.is_opportunity:
            return f"No arbitrage opportunity detected for {self.asset}"
        return (
            f"Max Arbitrage opportunity detected: buy {self.asset} in "
            f"{self.cheapest_source} at {self.cheapest_price} and sell on "
            f"{self.priciest_source} at {self.priciest_price}. "
            f"Profit: ${self.spread}"
        )
