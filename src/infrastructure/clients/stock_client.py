"""HTTP implementation of StockQuoteClient (Yahoo chart with Finnhub fallback)."""

import asyncio
from typing import Any, Dict, List, Optional

import httpx
import structlog

from src.core.config import settings
from src.core.metrics import (
    record_provider_failure,
    record_provider_success,
    track_provider_latency,
)
from src.domain.entities import StockQuote
from src.domain.exceptions import MarketDataException
from src.domain.interfaces import StockQuoteClient

logger = structlog.get_logger(__name__)

INDIAN_EXCHANGES = ("NSE", "BSE")

# Yahoo rejects requests without a browser-like agent.
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


def to_provider_symbol(symbol: str, exchange: str) -> str:
    """Map an exchange-local symbol to the `.NS` / `.BO` provider form."""
    ex = exchange.upper()
    if ex == "NSE":
        return f"{symbol}.NS"
    if ex == "BSE":
        return f"{symbol}.BO"
    return symbol


def _round2(value: float) -> float:
    return round(value, 2)


class HttpStockQuoteClient(StockQuoteClient):
    """
    Multi-source stock quote client.

    Indian symbols try Yahoo, then Finnhub (when a key is configured),
    then Yahoo on the alternate exchange. Other symbols try Finnhub first.
    A provider that fails simply yields no quote; only when every source
    fails does `get_quote` raise.
    """

    def __init__(
        self,
        yahoo_url: str | None = None,
        finnhub_url: str | None = None,
        finnhub_api_key: str | None = None,
        timeout: float | None = None,
    ):
        self._yahoo_url = (yahoo_url or settings.yahoo_chart_url).rstrip("/")
        self._finnhub_url = (finnhub_url or settings.finnhub_url).rstrip("/")
        self._finnhub_api_key = (
            finnhub_api_key if finnhub_api_key is not None else settings.finnhub_api_key
        )
        self._timeout = timeout or settings.quote_timeout

    async def get_quote(self, symbol: str, exchange: str = "NSE") -> StockQuote:
        exchange = exchange.upper()

        if exchange in INDIAN_EXCHANGES:
            quote = await self._fetch_yahoo(symbol, exchange)
            if quote is None and self._finnhub_api_key:
                quote = await self._fetch_finnhub(symbol, exchange)
            if quote is None:
                alternate = "BSE" if exchange == "NSE" else "NSE"
                quote = await self._fetch_yahoo(symbol, alternate, source="yahoo-alt")
        else:
            quote = None
            if self._finnhub_api_key:
                quote = await self._fetch_finnhub(symbol, exchange)
            if quote is None:
                quote = await self._fetch_yahoo(symbol, exchange)

        if quote is None:
            raise MarketDataException(
                message=f"No quote available for {symbol}",
                provider="quotes",
            )

        return quote

    async def get_quotes(self, symbols: List[str], exchange: str = "NSE") -> Dict[str, StockQuote]:
        unique = list(dict.fromkeys(s.strip() for s in symbols if s.strip()))
        results = await asyncio.gather(
            *(self.get_quote(symbol, exchange) for symbol in unique),
            return_exceptions=True,
        )

        quotes: Dict[str, StockQuote] = {}
        for symbol, result in zip(unique, results):
            if isinstance(result, Exception):
                logger.warning("quote_fetch_failed", symbol=symbol, error=str(result))
                continue
            quotes[symbol] = result

        return quotes

    async def _fetch_yahoo(
        self,
        symbol: str,
        exchange: str,
        source: str = "yahoo",
    ) -> Optional[StockQuote]:
        url = f"{self._yahoo_url}/{to_provider_symbol(symbol, exchange)}"
        data = await self._get_json(
            "yahoo",
            url,
            params={"interval": "1d", "range": "2d"},
            headers={"User-Agent": USER_AGENT},
        )
        if data is None:
            return None

        results = (data.get("chart") or {}).get("result") or []
        if not results:
            return None

        meta = results[0].get("meta") or {}
        current = meta.get("regularMarketPrice")
        if not current:
            return None

        prev_close = meta.get("chartPreviousClose") or meta.get("previousClose") or 0
        change = current - prev_close if prev_close > 0 else 0.0
        change_percent = change / prev_close * 100 if prev_close > 0 else 0.0

        return StockQuote(
            symbol=symbol,
            price=_round2(current),
            change=_round2(change),
            change_percent=_round2(change_percent),
            source=source,
        )

    async def _fetch_finnhub(self, symbol: str, exchange: str) -> Optional[StockQuote]:
        data = await self._get_json(
            "finnhub",
            f"{self._finnhub_url}/quote",
            params={
                "symbol": to_provider_symbol(symbol, exchange),
                "token": self._finnhub_api_key,
            },
        )
        if data is None:
            return None

        current = float(data.get("c") or 0)
        change = float(data.get("d") or 0)
        change_percent = float(data.get("dp") or 0)

        # Finnhub answers unknown symbols with all-zero quotes
        if current == 0 and change == 0:
            return None

        return StockQuote(
            symbol=symbol,
            price=current,
            change=change,
            change_percent=change_percent,
            source="finnhub",
        )

    async def _get_json(
        self,
        provider: str,
        url: str,
        params: Dict[str, Any] | None = None,
        headers: Dict[str, str] | None = None,
    ) -> Optional[Dict[str, Any]]:
        """Single GET; returns None on any provider failure."""
        try:
            with track_provider_latency(provider):
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url, params=params, headers=headers)

            if response.status_code >= 400:
                record_provider_failure(provider, "error")
                logger.warning(
                    "quote_provider_error",
                    provider=provider,
                    status_code=response.status_code,
                )
                return None

            data = response.json()
            record_provider_success(provider)
            return data if isinstance(data, dict) else None

        except httpx.TimeoutException:
            record_provider_failure(provider, "timeout")
            logger.warning("quote_provider_timeout", provider=provider, url=url)
            return None
        except (httpx.HTTPError, ValueError) as e:
            record_provider_failure(provider, "error")
            logger.warning("quote_provider_failed", provider=provider, error=str(e))
            return None
