"""Market data provider exceptions (NAV and stock quotes)."""

from .base import DomainException, NotFoundException


class MarketDataException(DomainException):
    """Raised when a market data provider returns an error."""

    def __init__(self, message: str, provider: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="MARKET_DATA_ERROR",
        )
        self.provider = provider
        self.status_code = status_code


class MarketDataTimeoutException(MarketDataException):
    """Raised when a market data provider times out."""

    def __init__(self, provider: str):
        super().__init__(
            message=f"{provider} request timed out",
            provider=provider,
        )
        self.code = "MARKET_DATA_TIMEOUT"


class SchemeNotFoundException(NotFoundException):
    """Raised when a mutual fund scheme code is unknown to the provider."""

    def __init__(self, scheme: str):
        super().__init__("Mutual fund scheme", scheme, "SCHEME_NOT_FOUND")
        self.scheme = scheme


class TransactionFeedException(DomainException):
    """Raised when the upstream transaction feed cannot be read."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="TRANSACTION_FEED_ERROR",
        )
        self.status_code = status_code
