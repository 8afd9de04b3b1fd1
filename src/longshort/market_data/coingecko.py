"""CoinGecko /coins/markets client.

One request per refresh cycle, scoped to the tracked coin IDs. The client
does not retry: it classifies failures into TransportError, HttpError and
MalformedPayloadError and leaves the retry policy to MarketDataAcquirer.
"""

from collections.abc import Sequence

import httpx

from longshort.exceptions import HttpError, MalformedPayloadError, TransportError
from longshort.logging import get_logger
from longshort.models import AssetRecord

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"


class CoinGeckoClient:
    """Async client for the CoinGecko markets endpoint.

    Args:
        base_url: API root, without trailing ``/coins/markets``.
        api_key: Optional CoinGecko demo API key for higher rate limits.
        timeout_seconds: Total request timeout.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: str | None = None,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or None
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout_seconds),
            headers={"Accept": "application/json", "User-Agent": "LongShort/1.0"},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    def _build_params(self, coin_ids: Sequence[str]) -> dict[str, str]:
        params = {
            "vs_currency": "usd",
            "ids": ",".join(coin_ids),
            "order": "market_cap_desc",
            "sparkline": "false",
            "price_change_percentage": "24h,7d",
        }
        if self._api_key:
            params["x_cg_demo_api_key"] = self._api_key
        return params

    async def fetch_markets(self, coin_ids: Sequence[str]) -> list[AssetRecord]:
        """Fetch market data for ``coin_ids``.

        The API sorts by market cap; the result is re-ordered to match
        ``coin_ids`` and coins that were not requested are dropped.

        Raises:
            TransportError: The request never got an HTTP response.
            HttpError: The API answered with a non-2xx status.
            MalformedPayloadError: The body is not a non-empty list of coins.
        """
        try:
            response = await self._client.get(
                "/coins/markets", params=self._build_params(coin_ids)
            )
        except httpx.TransportError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise HttpError(response.status_code, response.reason_phrase)

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedPayloadError("response body is not JSON") from e

        if not isinstance(payload, list):
            raise MalformedPayloadError(
                f"expected a JSON array, got {type(payload).__name__}"
            )

        by_id: dict[str, AssetRecord] = {}
        for item in payload:
            try:
                record = AssetRecord.from_api(item)
            except (KeyError, TypeError, AttributeError) as e:
                raise MalformedPayloadError(f"invalid coin entry: {e!r}") from e
            by_id[record.id] = record

        records = [by_id[coin_id] for coin_id in coin_ids if coin_id in by_id]
        if not records:
            raise MalformedPayloadError("no requested coins in response")

        missing = [coin_id for coin_id in coin_ids if coin_id not in by_id]
        if missing:
            logger.warning("coingecko_coins_missing", missing=missing)

        logger.debug("coingecko_markets_fetched", count=len(records))
        return records
