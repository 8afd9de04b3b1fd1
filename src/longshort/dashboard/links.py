"""TradingView chart deep links for asset cards.

The chart opens on the Binance USDT pair, 1h candles, dark theme, with the
CPR study and green/red candle and volume colours. The query string is fixed
and already URL-encoded.
"""

# Lowercase CoinGecko symbol -> Binance pair shown on TradingView
TRADINGVIEW_SYMBOLS: dict[str, str] = {
    "btc": "BTCUSDT",
    "eth": "ETHUSDT",
    "bnb": "BNBUSDT",
    "sol": "SOLUSDT",
    "ada": "ADAUSDT",
    "sui": "SUIUSDT",
    "sei": "SEIUSDT",
    "hype": "HYPEUSDT",
    "doge": "DOGEUSDT",
    "bonk": "BONKUSDT",
}

TRADINGVIEW_CHART_URL = "https://www.tradingview.com/chart/"

_CHART_OPTIONS = (
    "&interval=1h"
    "&studies_overrides=%7B%22volume.volume.color.0%22%3A%22rgba(47%2C133%2C90%2C0.8)%22"
    "%2C%22volume.volume.color.1%22%3A%22rgba(235%2C77%2C92%2C0.8)%22%7D"
    "&overrides=%7B%22mainSeriesProperties.candleStyle.upColor%22%3A%22%2326a69a%22"
    "%2C%22mainSeriesProperties.candleStyle.downColor%22%3A%22%23ef4444%22"
    "%2C%22mainSeriesProperties.candleStyle.borderUpColor%22%3A%22%2326a69a%22"
    "%2C%22mainSeriesProperties.candleStyle.borderDownColor%22%3A%22%23ef4444%22"
    "%2C%22mainSeriesProperties.candleStyle.wickUpColor%22%3A%22%2326a69a%22"
    "%2C%22mainSeriesProperties.candleStyle.wickDownColor%22%3A%22%23ef4444%22%7D"
    "&studies=%5B%7B%22id%22%3A%22CPR%40tv-basicstudies%22%2C%22version%22%3A%2246.0%22"
    "%2C%22inputs%22%3A%7B%7D%7D%5D"
    "&theme=dark"
)


def tradingview_symbol(symbol: str) -> str:
    """Map a coin symbol to its TradingView pair, defaulting to ``<SYMBOL>USDT``."""
    return TRADINGVIEW_SYMBOLS.get(symbol.lower(), f"{symbol.upper()}USDT")


def chart_url(symbol: str) -> str:
    """Full TradingView chart URL for a coin symbol."""
    return f"{TRADINGVIEW_CHART_URL}?symbol=BINANCE:{tradingview_symbol(symbol)}{_CHART_OPTIONS}"
