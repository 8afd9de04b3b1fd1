"""Shared test fixtures for the market signal poller."""

from decimal import Decimal
from typing import Any

import pytest

from longshort.config import AppSettings, DashboardSettings, MarketDataSettings, RefreshSettings
from longshort.market_data.assets import FALLBACK_ASSETS
from longshort.models import AssetRecord, DataSource, RefreshResult


def api_item(asset: AssetRecord) -> dict[str, Any]:
    """Render an AssetRecord the way CoinGecko's /coins/markets does."""

    def num(value: Decimal | None) -> float | None:
        return float(value) if value is not None else None

    return {
        "id": asset.id,
        "symbol": asset.symbol,
        "name": asset.name,
        "image": asset.image_url,
        "current_price": num(asset.current_price),
        "total_volume": num(asset.volume_24h),
        "high_24h": num(asset.high_24h),
        "low_24h": num(asset.low_24h),
        "price_change_percentage_24h": num(asset.change_24h),
        "price_change_percentage_24h_in_currency": num(asset.change_24h),
        "price_change_percentage_7d_in_currency": num(asset.change_7d),
        "circulating_supply": num(asset.circulating_supply),
        "ath": num(asset.ath_price),
        "ath_change_percentage": num(asset.ath_change_pct),
        "market_cap": 1,
    }


def make_asset(symbol: str, change_24h: str = "0", coin_id: str | None = None) -> AssetRecord:
    """Minimal AssetRecord for signal tests."""
    return AssetRecord(
        id=coin_id or symbol.lower(),
        symbol=symbol.lower(),
        name=symbol.upper(),
        current_price=Decimal("1"),
        change_24h=Decimal(change_24h),
        change_7d=None,
        volume_24h=Decimal("0"),
        high_24h=Decimal("1"),
        low_24h=Decimal("1"),
        ath_price=Decimal("1"),
        ath_change_pct=None,
        circulating_supply=Decimal("0"),
    )


def make_result(
    assets: list[AssetRecord] | tuple[AssetRecord, ...] = FALLBACK_ASSETS,
    funding_rates: dict[str, Decimal] | None = None,
    source: DataSource = DataSource.LIVE,
    error: str | None = None,
) -> RefreshResult:
    return RefreshResult(
        assets=tuple(assets),
        funding_rates=funding_rates or {},
        source=source,
        error=error,
    )


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with fast test defaults."""
    return AppSettings(
        log_level="DEBUG",
        market_data=MarketDataSettings(
            base_url="https://api.test/api/v3",
            retry_base_delay=0.0,
        ),
        refresh=RefreshSettings(interval=0.05),
        dashboard=DashboardSettings(enabled=False),
    )


@pytest.fixture
def markets_payload() -> list[dict[str, Any]]:
    """All tracked coins as CoinGecko returns them: sorted by market cap, not our order."""
    by_cap = ["bitcoin", "ethereum", "binancecoin", "solana", "dogecoin",
              "cardano", "hype-token", "sui", "sei-network", "bonk"]
    items = {asset.id: api_item(asset) for asset in FALLBACK_ASSETS}
    return [items[coin_id] for coin_id in by_cap]
