"""Signal derivation for tracked coins.

Maps the latest funding rates and 24h price changes to BUY/SELL/NONE with a
fixed rule priority. See ``longshort.signals.engine`` for the rules.
"""

from longshort.signals.engine import (
    FUNDING_BUY_THRESHOLD,
    FUNDING_SELL_THRESHOLD,
    MOMENTUM_THRESHOLD,
    SignalEngine,
    derive_signal,
    funding_signal,
    momentum_signal,
)

__all__ = [
    "FUNDING_BUY_THRESHOLD",
    "FUNDING_SELL_THRESHOLD",
    "MOMENTUM_THRESHOLD",
    "SignalEngine",
    "derive_signal",
    "funding_signal",
    "momentum_signal",
]
