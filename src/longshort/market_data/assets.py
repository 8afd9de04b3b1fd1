"""Tracked coins and the offline fallback dataset.

The fallback values are hand-authored, plausible market numbers. They are
shown when CoinGecko stays unreachable after all retries so the dashboard
never renders an empty grid.
"""

from decimal import Decimal

from longshort.models import AssetRecord

# CoinGecko coin IDs, in display order
TARGET_COINS: tuple[str, ...] = (
    "bitcoin",
    "ethereum",
    "binancecoin",
    "solana",
    "cardano",
    "sui",
    "sei-network",
    "hype-token",
    "dogecoin",
    "bonk",
)

_IMAGE_BASE = "https://assets.coingecko.com/coins/images"


def _fallback(
    coin_id: str,
    name: str,
    symbol: str,
    price: str,
    change_24h: str,
    change_7d: str,
    volume: str,
    image: str,
    high: str,
    low: str,
    ath: str,
    ath_change: str,
    supply: str,
) -> AssetRecord:
    return AssetRecord(
        id=coin_id,
        symbol=symbol,
        name=name,
        current_price=Decimal(price),
        change_24h=Decimal(change_24h),
        change_7d=Decimal(change_7d),
        volume_24h=Decimal(volume),
        high_24h=Decimal(high),
        low_24h=Decimal(low),
        ath_price=Decimal(ath),
        ath_change_pct=Decimal(ath_change),
        circulating_supply=Decimal(supply),
        image_url=f"{_IMAGE_BASE}/{image}",
    )


FALLBACK_ASSETS: tuple[AssetRecord, ...] = (
    _fallback(
        "bitcoin", "Bitcoin", "btc", "43250.67", "2.34", "-1.23", "18500000000",
        "1/large/bitcoin.png", "44100.50", "42800.25", "69045.00", "-37.4", "19750000",
    ),
    _fallback(
        "ethereum", "Ethereum", "eth", "2567.89", "-0.87", "3.45", "12300000000",
        "279/large/ethereum.png", "2620.45", "2540.12", "4878.26", "-47.4", "120400000",
    ),
    _fallback(
        "binancecoin", "BNB", "bnb", "315.42", "1.56", "-2.1", "890000000",
        "825/large/bnb-icon2_2x.png", "320.15", "310.80", "686.31", "-54.0", "153856150",
    ),
    _fallback(
        "solana", "Solana", "sol", "98.76", "4.23", "8.91", "2100000000",
        "4128/large/solana.png", "102.45", "94.20", "259.96", "-62.0", "467000000",
    ),
    _fallback(
        "cardano", "Cardano", "ada", "0.4567", "-1.23", "2.34", "450000000",
        "975/large/cardano.png", "0.4720", "0.4450", "3.09", "-85.2", "35000000000",
    ),
    _fallback(
        "sui", "Sui", "sui", "3.45", "6.78", "12.34", "180000000",
        "26375/large/sui_asset.jpeg", "3.67", "3.21", "4.96", "-30.4", "2800000000",
    ),
    _fallback(
        "sei-network", "Sei", "sei", "0.4234", "-2.45", "5.67", "95000000",
        "28205/large/sei.png", "0.4456", "0.4123", "1.14", "-62.9", "3800000000",
    ),
    _fallback(
        "hype-token", "Hyperliquid", "hype", "28.67", "8.91", "-3.45", "320000000",
        "34437/large/hype.png", "30.12", "26.45", "34.78", "-17.6", "270000000",
    ),
    _fallback(
        "dogecoin", "Dogecoin", "doge", "0.0789", "3.45", "-1.23", "890000000",
        "5/large/dogecoin.png", "0.0812", "0.0756", "0.7376", "-89.3", "147000000000",
    ),
    _fallback(
        "bonk", "Bonk", "bonk", "0.00003456", "12.34", "23.45", "67000000",
        "28600/large/bonk.jpg", "0.00003678", "0.00003123", "0.00004704", "-26.5",
        "75000000000000",
    ),
)
