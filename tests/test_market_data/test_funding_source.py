"""Tests for the simulated funding rate source."""

import random
from decimal import Decimal

import pytest

from longshort.market_data.funding import (
    BASE_FUNDING_RATES,
    NOISE_AMPLITUDE,
    FundingRateSource,
    SimulatedFundingRates,
)


class TestSimulatedFundingRates:
    """Base rates plus bounded per-call noise."""

    @pytest.mark.asyncio
    async def test_covers_all_tracked_symbols(self) -> None:
        rates = await SimulatedFundingRates(rng=random.Random(1)).fetch_rates()
        assert set(rates) == {"BTC", "ETH", "BNB", "SOL", "ADA", "SUI", "SEI", "HYPE", "DOGE", "BONK"}
        assert all(isinstance(rate, Decimal) for rate in rates.values())

    @pytest.mark.asyncio
    async def test_noise_stays_within_amplitude(self) -> None:
        source = SimulatedFundingRates(rng=random.Random(123))
        for _ in range(200):
            rates = await source.fetch_rates()
            for symbol, rate in rates.items():
                assert abs(rate - BASE_FUNDING_RATES[symbol]) <= NOISE_AMPLITUDE

    @pytest.mark.asyncio
    async def test_each_call_regenerates_rates(self) -> None:
        source = SimulatedFundingRates(rng=random.Random(5))
        first = await source.fetch_rates()
        second = await source.fetch_rates()
        assert first != second
        assert first is not second

    @pytest.mark.asyncio
    async def test_seeded_rng_is_reproducible(self) -> None:
        a = await SimulatedFundingRates(rng=random.Random(42)).fetch_rates()
        b = await SimulatedFundingRates(rng=random.Random(42)).fetch_rates()
        assert a == b

    @pytest.mark.asyncio
    async def test_zero_noise_returns_base_rates(self) -> None:
        source = SimulatedFundingRates(
            base_rates={"btc": Decimal("0.0123")}, noise=Decimal("0")
        )
        rates = await source.fetch_rates()
        assert rates == {"BTC": Decimal("0.0123")}

    @pytest.mark.asyncio
    async def test_strong_base_rates_keep_their_side_of_the_band(self) -> None:
        """Noise is too small to move BTC/SOL across the +/-0.5% thresholds."""
        source = SimulatedFundingRates(rng=random.Random(9))
        for _ in range(50):
            rates = await source.fetch_rates()
            assert rates["BTC"] >= Decimal("0.005")
            assert rates["SOL"] <= Decimal("-0.005")

    def test_is_a_funding_rate_source(self) -> None:
        assert isinstance(SimulatedFundingRates(), FundingRateSource)
