"""Display formatting for asset cards (prices, volumes, percentages, ages)."""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

_BILLION = Decimal("1e9")
_MILLION = Decimal("1e6")


def _format_grouped(value: Decimal, min_places: int, max_places: int) -> str:
    """Group thousands and keep between min_places and max_places decimals."""
    quantized = value.quantize(Decimal(1).scaleb(-max_places), rounding=ROUND_HALF_UP)
    text = f"{quantized:,.{max_places}f}"
    if max_places > min_places:
        whole, _, frac = text.partition(".")
        frac = frac.rstrip("0").ljust(min_places, "0")
        text = f"{whole}.{frac}" if frac else whole
    return text


def format_price(price: Decimal) -> str:
    """USD price: 2 decimals, up to 6 for sub-dollar coins (e.g. ``$0.000035``)."""
    max_places = 6 if price < 1 else 2
    sign = "-" if price < 0 else ""
    return f"{sign}${_format_grouped(abs(price), 2, max_places)}"


def format_volume(volume: Decimal) -> str:
    """Compact USD volume: ``$18.50B``, ``$890.00M``, else the grouped amount."""
    if volume >= _BILLION:
        return f"${volume / _BILLION:.2f}B"
    if volume >= _MILLION:
        return f"${volume / _MILLION:.2f}M"
    return f"${_format_grouped(volume, 0, 3)}"


def format_change(change: Decimal | None, places: int = 2) -> str:
    """Signed percentage (``+2.34%``); ``N/A`` when the API gave no value."""
    if change is None:
        return "N/A"
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.{places}f}%"


def format_time_ago(value: datetime | None, now: datetime | None = None) -> str:
    """Relative time string (e.g. '2m ago')."""
    if value is None:
        return "N/A"
    now = now or datetime.now(timezone.utc)
    diff_seconds = (now - value).total_seconds()
    if diff_seconds < 60:
        return "just now"
    if diff_seconds < 3600:
        minutes = int(diff_seconds / 60)
        return f"{minutes}m ago"
    if diff_seconds < 86400:
        hours = int(diff_seconds / 3600)
        return f"{hours}h ago"
    days = int(diff_seconds / 86400)
    return f"{days}d ago"
