from __future__ import annotations


class QuoteFetchError(Exception):
    """A per-symbol failure that the fetcher retries and the fan-out turns into data."""

    def __init__(self, symbol: str, message: str) -> None:
        super().__init__(message)
        self.symbol = symbol


class UpstreamStatusError(QuoteFetchError):
    def __init__(self, symbol: str, status: int, body: str) -> None:
        super().__init__(symbol, f"API request failed for {symbol}: {status} - {body}")
        self.status = status
        self.body = body


class RateLimitedError(UpstreamStatusError):
    def __init__(self, symbol: str, body: str) -> None:
        super().__init__(symbol, 429, body)


class NoDataError(QuoteFetchError):
    def __init__(self, symbol: str) -> None:
        super().__init__(
            symbol,
            f"No data available for {symbol} (market may be closed or invalid symbol)",
        )


class UpstreamTimeoutError(QuoteFetchError):
    def __init__(self, symbol: str, timeout_seconds: float) -> None:
        super().__init__(symbol, f"Request for {symbol} timed out after {timeout_seconds:g}s")


class UpstreamConnectionError(QuoteFetchError):
    def __init__(self, symbol: str, reason: str) -> None:
        super().__init__(symbol, f"Connection error for {symbol}: {reason}")


class MalformedQuoteError(QuoteFetchError):
    def __init__(self, symbol: str, reason: str) -> None:
        super().__init__(symbol, f"Malformed quote payload for {symbol}: {reason}")
