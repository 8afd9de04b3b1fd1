"""Market data layer -- CoinGecko client, simulated funding rates, and acquisition with fallback."""

from longshort.market_data.acquisition import MarketDataAcquirer, backoff_delay
from longshort.market_data.assets import FALLBACK_ASSETS, TARGET_COINS
from longshort.market_data.coingecko import CoinGeckoClient
from longshort.market_data.funding import FundingRateSource, SimulatedFundingRates

__all__ = [
    "FALLBACK_ASSETS",
    "TARGET_COINS",
    "CoinGeckoClient",
    "FundingRateSource",
    "MarketDataAcquirer",
    "SimulatedFundingRates",
    "backoff_delay",
]
