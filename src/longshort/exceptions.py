"""Custom exceptions for the market signal poller.

Market data errors never leave the acquisition layer: they drive the
retry/backoff path and end up as an advisory string on the RefreshResult.
"""


class LongShortError(Exception):
    """Base exception for all poller errors."""


class MarketDataError(LongShortError):
    """Raised when a market data request does not yield usable data."""


class TransportError(MarketDataError):
    """Raised on network-level failures: connect, DNS, timeout."""


class HttpError(MarketDataError):
    """Raised when the market data API answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        super().__init__(f"HTTP {status_code}: {reason}".rstrip(": "))
        self.status_code = status_code
        self.reason = reason


class MalformedPayloadError(MarketDataError):
    """Raised when the response body is not a non-empty JSON array of coins."""


class FundingSourceError(LongShortError):
    """Raised when a funding rate source cannot produce a rate map."""


class AcquisitionCancelled(LongShortError):
    """Raised when a refresh is attempted or resumed after the acquirer was closed."""
