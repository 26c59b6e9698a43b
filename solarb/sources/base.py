"""Base class for price sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx
from aiolimiter import AsyncLimiter

from ..exceptions import (
    NotConnectedError,
    RateLimitError,
    SourceError,
    SourceResponseError,
    SourceTimeoutError,
)
from ..logging import get_logger


class BaseSource(ABC):
    """Abstract base class for price sources.

    A source answers one question: what is the current price of a token on
    this venue. Instances are shared by every monitored asset, so the HTTP
    connection pool and rate limiter are per source, not per asset.

    Usage:
        async with JupiterSource(timeout=5.0) as source:
            price = await source.fetch_price(mint)
    """

    name: str = ""
    key: str = ""

    # Requests per second allowed by the venue
    RATE_LIMIT = 10

    def __init__(self, timeout: float = 5.0, rate_limit: float | None = None):
        """Initialize the source.

        Args:
            timeout: HTTP timeout in seconds.
            rate_limit: Requests per second. Defaults to RATE_LIMIT.
        """
        self.timeout = timeout
        self._limiter = AsyncLimiter(rate_limit or self.RATE_LIMIT, 1)
        self._http: httpx.AsyncClient | None = None
        self.logger = get_logger(f"solarb.sources.{self.key or 'base'}")

    @property
    def is_connected(self) -> bool:
        """Check if the HTTP client is open."""
        return self._http is not None

    async def connect(self) -> None:
        """Open the HTTP client."""
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 3.0))
            )
            self.logger.debug(f"{self.name} source connected")

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http:
            await self._http.aclose()
            self._http = None
            self.logger.debug(f"{self.name} source closed")

    def _ensure_connected(self) -> None:
        if not self.is_connected:
            raise NotConnectedError(self.name)

    @abstractmethod
    async def fetch_price(self, asset: str) -> float | None:
        """Get the current price of ``asset`` on this venue.

        Args:
            asset: Token mint address.

        Returns:
            Price in quote currency, or None if the venue does not quote
            the asset.

        Raises:
            NotConnectedError: If not connected.
            SourceError: If the request or response parsing fails.
        """
        pass

    async def _get_json(self, url: str, params: dict | None = None) -> Any:
        """Rate-limited GET returning decoded JSON."""
        self._ensure_connected()

        async with self._limiter:
            try:
                resp = await self._http.get(url, params=params)
            except httpx.TimeoutException as e:
                raise SourceTimeoutError(self.name, self.timeout) from e
            except httpx.HTTPError as e:
                raise SourceError(self.name, f"request failed: {e}") from e

        if resp.status_code == 429:
            retry_after = resp.headers.get("Retry-After")
            try:
                retry = float(retry_after) if retry_after else None
            except ValueError:
                retry = None
            raise RateLimitError(self.name, retry)

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SourceError(self.name, f"HTTP {resp.status_code}") from e

        try:
            return resp.json()
        except ValueError as e:
            raise SourceResponseError(self.name, f"invalid JSON: {e}") from e

    async def __aenter__(self) -> "BaseSource":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
