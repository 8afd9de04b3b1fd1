"""Funding rate sources.

SIMULATION: there is no real funding rate feed behind this dashboard.
SimulatedFundingRates starts from a fixed base rate per symbol and adds
independent uniform noise of up to +/-0.1% on every call, so values drift
between refresh cycles. A real feed (e.g. exchange perpetual tickers) plugs in
by implementing FundingRateSource; the signal engine only sees the resulting
FundingRateMap.
"""

import random
from abc import ABC, abstractmethod
from decimal import Decimal

from longshort.models import FundingRateMap

# Signed fractional rates: 0.0123 == +1.23%
BASE_FUNDING_RATES: dict[str, Decimal] = {
    "BTC": Decimal("0.0123"),
    "ETH": Decimal("-0.0087"),
    "BNB": Decimal("0.0034"),
    "SOL": Decimal("-0.0156"),
    "ADA": Decimal("0.0089"),
    "SUI": Decimal("-0.0023"),
    "SEI": Decimal("0.0067"),
    "HYPE": Decimal("-0.0134"),
    "DOGE": Decimal("0.0045"),
    "BONK": Decimal("-0.0078"),
}

NOISE_AMPLITUDE = Decimal("0.001")  # +/-0.1%

# Rates are rounded to 10 decimal places before conversion
_NOISE_PLACES = 10


class FundingRateSource(ABC):
    """Produces a fresh funding rate map for each refresh cycle."""

    @abstractmethod
    async def fetch_rates(self) -> FundingRateMap:
        """Return uppercase symbol -> signed fractional funding rate.

        Raises:
            FundingSourceError: The source cannot produce rates this cycle.
        """
        ...


class SimulatedFundingRates(FundingRateSource):
    """Base rates plus per-cycle uniform noise.

    Args:
        base_rates: Symbol -> base rate. Defaults to BASE_FUNDING_RATES.
        noise: Maximum absolute deviation added to each base rate.
        rng: Random generator; pass a seeded ``random.Random`` for
             reproducible sequences.
    """

    def __init__(
        self,
        base_rates: dict[str, Decimal] | None = None,
        noise: Decimal = NOISE_AMPLITUDE,
        rng: random.Random | None = None,
    ) -> None:
        self._base_rates = dict(base_rates if base_rates is not None else BASE_FUNDING_RATES)
        self._noise = float(noise)
        self._rng = rng or random.Random()

    async def fetch_rates(self) -> FundingRateMap:
        rates: dict[str, Decimal] = {}
        for symbol, base in self._base_rates.items():
            variation = round(self._rng.uniform(-self._noise, self._noise), _NOISE_PLACES)
            rates[symbol.upper()] = base + Decimal(str(variation))
        return rates
