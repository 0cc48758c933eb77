"""External API client implementations."""

from .insight_client import HttpInsightGeneratorClient
from .mfapi_client import HttpMutualFundClient
from .stock_client import HttpStockQuoteClient
from .transaction_feed_client import HttpTransactionFeedClient

__all__ = [
    "HttpInsightGeneratorClient",
    "HttpMutualFundClient",
    "HttpStockQuoteClient",
    "HttpTransactionFeedClient",
]
