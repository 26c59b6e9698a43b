"""Raydium mint price source."""

from ..exceptions import SourceResponseError
from .base import BaseSource


class RaydiumSource(BaseSource):
    """Prices from the Raydium v3 mint price endpoint.

    Response shape: ``{"id": ..., "success": true, "data": {mint: "1.23"}}``
    with prices encoded as strings.
    """

    name = "RAYDIUM"
    key = "raydium"

    BASE_URL = "https://api-v3.raydium.io"
    RATE_LIMIT = 10

    async def fetch_price(self, asset: str) -> float | None:
        payload = await self._get_json(
            f"{self.BASE_URL}/mint/price", params={"mints": asset}
        )

        if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
            raise SourceResponseError(self.name, "missing 'data' object")
        if payload.get("success") is False:
            raise SourceResponseError(self.name, "request not successful")

        raw = payload["data"].get(asset)
        if raw is None:
            self.logger.debug(f"No Raydium price for {asset}")
            return None

        try:
            return float(raw)
        except (TypeError, ValueError) as e:
            raise SourceResponseError(self.name, f"unparseable price {raw!r}") from e
