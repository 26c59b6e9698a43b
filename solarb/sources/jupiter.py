"""Jupiter price API source."""

from ..exceptions import SourceResponseError
from .base import BaseSource


class JupiterSource(BaseSource):
    """Prices from the Jupiter v6 price API."""

    name = "JUPITER"
    key = "jupiter"

    BASE_URL = "https://price.jup.ag/v6"
    RATE_LIMIT = 10

    async def fetch_price(self, asset: str) -> float | None:
        payload = await self._get_json(f"{self.BASE_URL}/price", params={"ids": asset})

        if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
            raise SourceResponseError(self.name, "missing 'data' object")

        # {"data": {mint: {"id", "mintSymbol", "vsToken", "vsTokenSymbol", "price"}}}
        token_info = payload["data"].get(asset)
        if token_info is None:
            self.logger.debug(f"No Jupiter price for {asset}")
            return None
        if not isinstance(token_info, dict) or "price" not in token_info:
            raise SourceResponseError(self.name, f"malformed token info for {asset}")

        try:
            return float(token_info["price"])
        except (TypeError, ValueError) as e:
            raise SourceResponseError(
                self.name, f"unparseable price {token_info['price']!r}"
            ) from e
