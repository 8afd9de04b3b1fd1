"""Tests for shared data models: AssetRecord parsing and RefreshResult immutability."""

from decimal import Decimal

import pytest

from longshort.market_data.assets import FALLBACK_ASSETS, TARGET_COINS
from longshort.models import AssetRecord, DataSource, RefreshResult

from conftest import api_item, make_result


class TestAssetRecordFromApi:

    def test_round_trips_fallback_record(self) -> None:
        btc = FALLBACK_ASSETS[0]
        assert AssetRecord.from_api(api_item(btc)) == btc

    def test_plain_7d_key_is_accepted(self) -> None:
        item = api_item(FALLBACK_ASSETS[0])
        del item["price_change_percentage_7d_in_currency"]
        item["price_change_percentage_7d"] = 5.5
        assert AssetRecord.from_api(item).change_7d == Decimal("5.5")

    def test_missing_optional_fields(self) -> None:
        record = AssetRecord.from_api({"id": "bonk", "symbol": "bonk"})
        assert record.name == "bonk"
        assert record.current_price == Decimal("0")
        assert record.change_24h == Decimal("0")
        assert record.change_7d is None
        assert record.ath_change_pct is None
        assert record.image_url == ""

    def test_null_numbers_default(self) -> None:
        item = api_item(FALLBACK_ASSETS[1])
        item["price_change_percentage_24h"] = None
        item["ath_change_percentage"] = None
        record = AssetRecord.from_api(item)
        assert record.change_24h == Decimal("0")
        assert record.ath_change_pct is None

    def test_missing_id_raises(self) -> None:
        with pytest.raises(KeyError):
            AssetRecord.from_api({"symbol": "btc"})

    def test_records_are_frozen(self) -> None:
        with pytest.raises(AttributeError):
            FALLBACK_ASSETS[0].current_price = Decimal("1")  # type: ignore[misc]


class TestRefreshResult:

    def test_funding_map_is_read_only(self) -> None:
        result = make_result(funding_rates={"BTC": Decimal("0.0123")})
        with pytest.raises(TypeError):
            result.funding_rates["BTC"] = Decimal("0")  # type: ignore[index]

    def test_funding_map_is_a_copy(self) -> None:
        rates = {"BTC": Decimal("0.0123")}
        result = make_result(funding_rates=rates)
        rates["BTC"] = Decimal("-1")
        assert result.funding_rate("btc") == Decimal("0.0123")

    def test_assets_stored_as_tuple(self) -> None:
        result = RefreshResult(
            assets=list(FALLBACK_ASSETS), funding_rates={}, source=DataSource.FALLBACK
        )
        assert isinstance(result.assets, tuple)

    def test_symbols_and_lookup(self) -> None:
        result = make_result()
        assert result.symbols[0] == "BTC"
        assert len(result.symbols) == len(TARGET_COINS)
        assert result.asset("Sui").id == "sui"
        assert result.asset("XRP") is None
        assert result.funding_rate("BTC") is None


class TestFallbackDataset:

    def test_matches_tracked_coins_in_order(self) -> None:
        assert tuple(a.id for a in FALLBACK_ASSETS) == TARGET_COINS

    def test_symbols_are_unique(self) -> None:
        symbols = [a.symbol for a in FALLBACK_ASSETS]
        assert len(set(symbols)) == len(symbols) == 10
