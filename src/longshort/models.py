"""Shared data models for the market signal poller.

CRITICAL: All prices, percentages and funding rates use Decimal. Never use float
for market values; API numbers are converted through str() to keep their
printed precision.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from types import MappingProxyType
from typing import Any

# Uppercase symbol -> signed fractional funding rate (0.0123 == +1.23%)
FundingRateMap = Mapping[str, Decimal]


class TradeSignal(str, Enum):
    """Directional signal shown on an asset card."""

    BUY = "BUY"
    SELL = "SELL"
    NONE = "NONE"


class DataSource(str, Enum):
    """Where the assets of a RefreshResult came from."""

    LIVE = "live"
    FALLBACK = "fallback"


def _to_decimal(value: Any, default: Decimal | None = Decimal("0")) -> Decimal | None:
    """Convert an API number to Decimal, returning ``default`` for null/garbage."""
    if value is None:
        return default
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default


@dataclass(frozen=True)
class AssetRecord:
    """Market snapshot for a single coin, as returned by /coins/markets."""

    id: str
    symbol: str
    name: str
    current_price: Decimal
    change_24h: Decimal  # percent, 2.34 == +2.34%
    change_7d: Decimal | None
    volume_24h: Decimal
    high_24h: Decimal
    low_24h: Decimal
    ath_price: Decimal
    ath_change_pct: Decimal | None
    circulating_supply: Decimal
    image_url: str = ""

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> "AssetRecord":
        """Build a record from one CoinGecko market object.

        Raises KeyError when the identity fields are missing. The 7d change
        is published as ``price_change_percentage_7d_in_currency`` when it is
        requested through ``price_change_percentage``.
        """
        change_7d = item.get("price_change_percentage_7d_in_currency")
        if change_7d is None:
            change_7d = item.get("price_change_percentage_7d")

        return cls(
            id=str(item["id"]),
            symbol=str(item["symbol"]),
            name=str(item.get("name") or item["symbol"]),
            current_price=_to_decimal(item.get("current_price")),
            change_24h=_to_decimal(item.get("price_change_percentage_24h")),
            change_7d=_to_decimal(change_7d, default=None),
            volume_24h=_to_decimal(item.get("total_volume")),
            high_24h=_to_decimal(item.get("high_24h")),
            low_24h=_to_decimal(item.get("low_24h")),
            ath_price=_to_decimal(item.get("ath")),
            ath_change_pct=_to_decimal(item.get("ath_change_percentage"), default=None),
            circulating_supply=_to_decimal(item.get("circulating_supply")),
            image_url=str(item.get("image") or ""),
        )


@dataclass(frozen=True)
class RefreshResult:
    """Immutable outcome of one refresh cycle.

    Consumers hold a reference to a whole result; the acquirer publishes a
    new one by a single assignment, so readers never see a partial cycle.
    """

    assets: tuple[AssetRecord, ...]
    funding_rates: FundingRateMap
    source: DataSource
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    error: str | None = None
    attempts: int = 1

    def __post_init__(self) -> None:
        # Freeze the containers too, not just the attributes
        object.__setattr__(self, "assets", tuple(self.assets))
        object.__setattr__(
            self, "funding_rates", MappingProxyType(dict(self.funding_rates))
        )

    @property
    def symbols(self) -> list[str]:
        """Uppercase symbols in display order."""
        return [asset.symbol.upper() for asset in self.assets]

    def asset(self, symbol: str) -> AssetRecord | None:
        """Return the asset with the given symbol (case-insensitive), if present."""
        wanted = symbol.upper()
        for asset in self.assets:
            if asset.symbol.upper() == wanted:
                return asset
        return None

    def funding_rate(self, symbol: str) -> Decimal | None:
        """Return the funding rate for a symbol (case-insensitive), if present."""
        return self.funding_rates.get(symbol.upper())
