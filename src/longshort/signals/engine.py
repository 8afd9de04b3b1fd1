"""Trade signal rules: funding rate first, then 24h momentum, then fixed defaults.

Rules, in strict priority order:
  1. FUNDING: rate >= +0.5% -> SELL (longs crowded), rate <= -0.5% -> BUY.
     A rate inside the band does not decide anything and falls through.
  2. MOMENTUM: 24h change >= +2% -> BUY, <= -2% -> SELL.
  3. DEFAULT: only when the symbol has no funding rate at all, BNB shows BUY
     and SUI shows SELL; every other symbol shows no signal.

Signals are never stored. They are recomputed from a RefreshResult on every
read, so the same result always gives the same signal.
"""

from decimal import Decimal

from longshort.market_data.acquisition import MarketDataAcquirer
from longshort.models import RefreshResult, TradeSignal

# Fixed thresholds, not settings
FUNDING_SELL_THRESHOLD = Decimal("0.005")  # +0.5%
FUNDING_BUY_THRESHOLD = Decimal("-0.005")  # -0.5%
MOMENTUM_THRESHOLD = Decimal("2")  # percent

DEFAULT_SIGNALS: dict[str, TradeSignal] = {
    "BNB": TradeSignal.BUY,
    "SUI": TradeSignal.SELL,
}


def funding_signal(rate: Decimal) -> TradeSignal:
    """Classify a funding rate; NONE means inside the neutral band."""
    if rate >= FUNDING_SELL_THRESHOLD:
        return TradeSignal.SELL
    if rate <= FUNDING_BUY_THRESHOLD:
        return TradeSignal.BUY
    return TradeSignal.NONE


def momentum_signal(change_24h: Decimal) -> TradeSignal:
    """Classify a 24h percentage change; NONE means no clear move."""
    if change_24h >= MOMENTUM_THRESHOLD:
        return TradeSignal.BUY
    if change_24h <= -MOMENTUM_THRESHOLD:
        return TradeSignal.SELL
    return TradeSignal.NONE


def derive_signal(symbol: str, result: RefreshResult) -> TradeSignal:
    """Derive the trade signal for ``symbol`` from a single refresh result."""
    key = symbol.upper()
    rate = result.funding_rate(key)

    if rate is not None:
        signal = funding_signal(rate)
        if signal is not TradeSignal.NONE:
            return signal

    asset = result.asset(key)
    if asset is not None:
        signal = momentum_signal(asset.change_24h)
        if signal is not TradeSignal.NONE:
            return signal

    if rate is None:
        return DEFAULT_SIGNALS.get(key, TradeSignal.NONE)
    return TradeSignal.NONE


class SignalEngine:
    """Read-only signal view over the acquirer's latest snapshot.

    Holds no state of its own; each call reads ``acquirer.latest`` once so a
    single answer is always computed against one complete snapshot.
    """

    def __init__(self, acquirer: MarketDataAcquirer) -> None:
        self._acquirer = acquirer

    def signal_for(self, symbol: str) -> TradeSignal:
        """Signal for one symbol, NONE while no snapshot exists yet."""
        result = self._acquirer.latest
        if result is None:
            return TradeSignal.NONE
        return derive_signal(symbol, result)

    def signals(self) -> dict[str, TradeSignal]:
        """Signals for every asset in the latest snapshot, in display order."""
        result = self._acquirer.latest
        if result is None:
            return {}
        return {symbol: derive_signal(symbol, result) for symbol in result.symbols}
