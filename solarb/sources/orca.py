"""Orca whirlpool price source."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from time import monotonic

from ..config import USDC_MINT
from ..exceptions import SourceResponseError
from ..utils.formatting import format_struct
from .base import BaseSource


@dataclass
class TokenInfo:
    """Token side of a whirlpool."""
    mint: str
    symbol: str = ""
    name: str = ""
    decimals: int = 0
    coingecko_id: str | None = None


@dataclass
class Whirlpool:
    """Subset of the whirlpool listing we need for pricing."""
    address: str
    token_a: TokenInfo
    token_b: TokenInfo
    price: float | None = None
    tvl: float | None = None
    lp_fee_rate: float | None = None
    modified_time_ms: int | None = None


def _parse_token(raw: dict) -> TokenInfo:
    return TokenInfo(
        mint=raw["mint"],
        symbol=raw.get("symbol", ""),
        name=raw.get("name", ""),
        decimals=raw.get("decimals", 0),
        coingecko_id=raw.get("coingeckoId"),
    )


def parse_whirlpool(raw: dict) -> Whirlpool:
    """Build a Whirlpool from one entry of the listing.

    Raises:
        KeyError, TypeError: If required fields are missing.
    """
    return Whirlpool(
        address=raw["address"],
        token_a=_parse_token(raw["tokenA"]),
        token_b=_parse_token(raw["tokenB"]),
        price=raw.get("price"),
        tvl=raw.get("tvl"),
        lp_fee_rate=raw.get("lpFeeRate"),
        modified_time_ms=raw.get("modifiedTimeMs"),
    )


class OrcaSource(BaseSource):
    """Prices from the Orca whirlpool listing.

    The listing covers every pool, so it is fetched once and shared by all
    assets for ``cache_ttl`` seconds. The price of an asset is taken from
    the pool pairing it (token A) with the quote mint (token B).
    """

    name = "ORCA"
    key = "orca"

    BASE_URL = "https://api.mainnet.orca.so/v1"
    RATE_LIMIT = 5

    def __init__(
        self,
        timeout: float = 5.0,
        rate_limit: float | None = None,
        quote_mint: str = USDC_MINT,
        cache_ttl: float = 30.0,
    ):
        super().__init__(timeout=timeout, rate_limit=rate_limit)
        self.quote_mint = quote_mint
        self.cache_ttl = cache_ttl
        self._pools: list[Whirlpool] | None = None
        self._fetched_at = 0.0
        self._lock = asyncio.Lock()

    async def fetch_pools(self) -> list[Whirlpool]:
        """Get the whirlpool listing, refreshing it when the cache expired."""
        async with self._lock:
            age = monotonic() - self._fetched_at
            if self._pools is not None and age < self.cache_ttl:
                return self._pools

            payload = await self._get_json(f"{self.BASE_URL}/whirlpool/list")
            if not isinstance(payload, dict) or not isinstance(payload.get("whirlpools"), list):
                raise SourceResponseError(self.name, "missing 'whirlpools' list")

            try:
                pools = [parse_whirlpool(raw) for raw in payload["whirlpools"]]
            except (KeyError, TypeError) as e:
                raise SourceResponseError(self.name, f"malformed whirlpool: {e}") from e

            self._pools = pools
            self._fetched_at = monotonic()
            self.logger.debug(f"Loaded {len(pools)} Orca whirlpools")
            return pools

    async def find_pool(
        self,
        token_a_mint: str | None = None,
        token_b_mint: str | None = None,
        address: str | None = None,
    ) -> Whirlpool | None:
        """Find a pool by address, or by its token A and token B mints.

        Address takes precedence when given. Returns None if nothing matches.
        """
        for pool in await self.fetch_pools():
            if address is not None:
                if pool.address == address:
                    return pool
                continue
            if token_a_mint is not None and token_b_mint is not None:
                if pool.token_a.mint == token_a_mint and pool.token_b.mint == token_b_mint:
                    return pool
        return None

    async def token_b_mints(self) -> list[str]:
        """Quote-side mints of every listed pool."""
        return [pool.token_b.mint for pool in await self.fetch_pools()]

    async def fetch_price(self, asset: str) -> float | None:
        pool = await self.find_pool(token_a_mint=asset, token_b_mint=self.quote_mint)
        if pool is None:
            self.logger.debug(f"No whirlpool found for {asset}")
            return None

        self.logger.debug(f"Matched pool: {format_struct(pool)}")
        if pool.price is None:
            self.logger.debug(f"Whirlpool {pool.address} has no price")
            return None

        try:
            return float(pool.price)
        except (TypeError, ValueError) as e:
            raise SourceResponseError(self.name, f"unparseable price {pool.price!r}") from e
