"""Market data acquisition: fetch, retry with backoff, fall back, publish.

One call to ``refresh()`` is one refresh cycle. It always ends with a new
RefreshResult replacing ``latest``:

  1. FETCH: one /coins/markets request for the tracked coins
  2. RETRY: on any MarketDataError wait 2**attempt seconds (1s, 2s, 4s) and
     try again, up to max_retries retries (4 attempts in total)
  3. FALLBACK: after the last failure substitute the static dataset and
     attach an advisory ("Connection failed after 4 attempts. ...")
  4. FUNDING: regenerate the funding rate map, whatever happened above
  5. PUBLISH: stamp the time, assign ``latest`` in one step

Backoff waits are cooperative and tied to the acquirer's lifetime: once
``close()`` is called a pending retry raises AcquisitionCancelled instead of
hitting the network.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timezone

from longshort.exceptions import AcquisitionCancelled, FundingSourceError, MarketDataError
from longshort.logging import get_logger
from longshort.market_data.assets import FALLBACK_ASSETS, TARGET_COINS
from longshort.market_data.coingecko import CoinGeckoClient
from longshort.market_data.funding import FundingRateSource
from longshort.models import AssetRecord, DataSource, FundingRateMap, RefreshResult

logger = get_logger(__name__)


def backoff_delay(attempt: int, base_delay: float = 1.0) -> float:
    """Delay before retrying after failed attempt ``attempt`` (0-indexed)."""
    return base_delay * (2**attempt)


class MarketDataAcquirer:
    """Owns the market data snapshot and produces a new one per cycle.

    Args:
        client: CoinGecko client used for the markets request.
        funding_source: Funding rate source, regenerated every cycle.
        coin_ids: Tracked CoinGecko IDs, in display order.
        fallback_assets: Dataset substituted after retries are exhausted.
        max_retries: Retries after the first attempt.
        retry_base_delay: Base for the exponential backoff, in seconds.
        max_empty_refetches: Fresh cycles allowed when a cycle still ends with
            no assets after fallback substitution.
        sleep: Optional backoff wait override ``(seconds) -> awaitable``.
            Defaults to a wait that wakes early when the acquirer is closed.
    """

    def __init__(
        self,
        client: CoinGeckoClient,
        funding_source: FundingRateSource,
        coin_ids: Sequence[str] = TARGET_COINS,
        fallback_assets: Sequence[AssetRecord] = FALLBACK_ASSETS,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
        max_empty_refetches: int = 1,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self._client = client
        self._funding_source = funding_source
        self._coin_ids = tuple(coin_ids)
        self._fallback_assets = tuple(fallback_assets)
        self._max_retries = max(0, max_retries)
        self._retry_base_delay = retry_base_delay
        self._max_empty_refetches = max(0, max_empty_refetches)
        self._sleep = sleep or self._wait_unless_closed
        self._closed = asyncio.Event()
        self._latest: RefreshResult | None = None

    @property
    def latest(self) -> RefreshResult | None:
        """Most recent complete RefreshResult, or None before the first cycle."""
        return self._latest

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def coin_ids(self) -> tuple[str, ...]:
        return self._coin_ids

    async def close(self) -> None:
        """Cancel pending retries and release the HTTP client."""
        if self._closed.is_set():
            return
        self._closed.set()
        await self._client.aclose()
        logger.info("market_data_acquirer_closed")

    async def refresh(self, attempt: int = 0) -> RefreshResult:
        """Run one refresh cycle and publish its result.

        Args:
            attempt: Retry attempt to start from (0 for a fresh cycle).

        Returns:
            The new RefreshResult, also available as ``latest``.

        Raises:
            AcquisitionCancelled: The acquirer was closed before or during
                the cycle. ``latest`` is left untouched.
        """
        self._ensure_open()

        refetches_left = self._max_empty_refetches
        while True:
            assets, source, error, attempts = await self._acquire_assets(attempt)
            if assets or refetches_left <= 0:
                break
            refetches_left -= 1
            attempt = 0
            logger.warning("empty_snapshot_refetch", refetches_left=refetches_left)

        if not assets:
            logger.error("empty_snapshot_after_fallback", attempts=attempts)

        funding_rates = await self._fetch_funding_rates()
        self._ensure_open()

        result = RefreshResult(
            assets=tuple(assets),
            funding_rates=funding_rates,
            source=source,
            updated_at=datetime.now(timezone.utc),
            error=error,
            attempts=attempts,
        )
        self._latest = result

        logger.info(
            "snapshot_published",
            source=source.value,
            assets=len(result.assets),
            funding_rates=len(result.funding_rates),
            attempts=attempts,
        )
        return result

    async def _acquire_assets(
        self, attempt: int
    ) -> tuple[list[AssetRecord], DataSource, str | None, int]:
        """Fetch with retries; return (assets, source, advisory, attempts used)."""
        first_attempt = attempt
        while True:
            try:
                assets = await self._client.fetch_markets(self._coin_ids)
                return assets, DataSource.LIVE, None, attempt - first_attempt + 1
            except MarketDataError as e:
                logger.warning(
                    "market_data_fetch_failed",
                    attempt=attempt + 1,
                    max_attempts=self._max_retries + 1,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                if attempt >= self._max_retries:
                    break

            delay = backoff_delay(attempt, self._retry_base_delay)
            logger.info(
                "market_data_retry_scheduled",
                attempt=attempt + 1,
                delay=delay,
            )
            await self._sleep(delay)
            self._ensure_open()
            attempt += 1

        error = f"Connection failed after {attempt + 1} attempts. Using offline data."
        logger.error(
            "fallback_dataset_substituted",
            attempts=attempt + 1,
            assets=len(self._fallback_assets),
        )
        attempts_used = attempt - first_attempt + 1
        return list(self._fallback_assets), DataSource.FALLBACK, error, attempts_used

    async def _fetch_funding_rates(self) -> FundingRateMap:
        try:
            return await self._funding_source.fetch_rates()
        except FundingSourceError as e:
            logger.warning("funding_rates_unavailable", error=str(e))
            return {}

    async def _wait_unless_closed(self, delay: float) -> None:
        """Sleep ``delay`` seconds, returning early if the acquirer is closed."""
        try:
            await asyncio.wait_for(self._closed.wait(), timeout=delay)
        except asyncio.TimeoutError:
            pass

    def _ensure_open(self) -> None:
        if self._closed.is_set():
            raise AcquisitionCancelled("market data acquirer is closed")
