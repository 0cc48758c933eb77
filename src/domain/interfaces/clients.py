"""External client interfaces."""

from abc import ABC, abstractmethod
from typing import Dict, List

from src.domain.entities import (
    NAVResult,
    SchemeHistory,
    SchemeSearchResult,
    StockQuote,
    Transaction,
)


class MutualFundClient(ABC):
    """
    Abstract client for the mutual fund NAV provider.

    Fetches scheme search results, latest NAVs and NAV history.
    """

    @abstractmethod
    async def search(self, query: str) -> List[SchemeSearchResult]:
        """
        Search schemes by name.

        Args:
            query: Free-text scheme name

        Returns:
            Matching schemes (may be empty)

        Raises:
            MarketDataException: If the provider returns an error
            MarketDataTimeoutException: If the request times out
        """
        ...

    @abstractmethod
    async def get_latest_nav(self, scheme_code: int) -> NAVResult:
        """
        Fetch the latest NAV of one scheme.

        Raises:
            SchemeNotFoundException: If the scheme code is unknown
            MarketDataException: If the provider returns an error
            MarketDataTimeoutException: If the request times out
        """
        ...

    @abstractmethod
    async def get_history(self, scheme_code: int) -> SchemeHistory:
        """
        Fetch the full NAV history of one scheme, newest first.

        Raises:
            SchemeNotFoundException: If the scheme code is unknown
            MarketDataException: If the provider returns an error
        """
        ...

    @abstractmethod
    async def get_latest_navs(self, scheme_codes: List[int]) -> Dict[int, NAVResult]:
        """
        Fetch latest NAVs for several schemes concurrently.

        Schemes that fail are omitted from the result instead of failing
        the whole batch.
        """
        ...


class StockQuoteClient(ABC):
    """Abstract client for stock price providers."""

    @abstractmethod
    async def get_quote(self, symbol: str, exchange: str = "NSE") -> StockQuote:
        """
        Fetch the latest quote for one symbol.

        Raises:
            MarketDataException: If every provider fails
        """
        ...

    @abstractmethod
    async def get_quotes(self, symbols: List[str], exchange: str = "NSE") -> Dict[str, StockQuote]:
        """Fetch quotes concurrently; failed symbols are omitted."""
        ...


class InsightGeneratorClient(ABC):
    """
    Abstract client for the LLM chat-completions endpoint.

    Only a thin wrapper: prompts are built by the caller.
    """

    @abstractmethod
    async def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Send chat messages and return the assistant's text.

        Raises:
            InsightGenerationException: If the provider fails or returns
                no content
        """
        ...


class TransactionFeedClient(ABC):
    """Abstract client for the upstream transaction feed used by the sync job."""

    @abstractmethod
    async def fetch_transactions(self, user_id: str) -> List[Transaction]:
        """
        Fetch the user's transactions from the feed.

        Returned transactions carry an `external_id` used to upsert.

        Raises:
            TransactionFeedException: If the feed cannot be read
        """
        ...
