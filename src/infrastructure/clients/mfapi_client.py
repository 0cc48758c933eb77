"""HTTP implementation of MutualFundClient backed by mfapi.in."""

import asyncio
from typing import Any, Dict, List

import httpx
import structlog

from src.core.config import settings
from src.core.metrics import (
    record_provider_failure,
    record_provider_success,
    track_provider_latency,
)
from src.domain.entities import NAVResult, SchemeHistory, SchemeSearchResult
from src.domain.exceptions import (
    MarketDataException,
    MarketDataTimeoutException,
    SchemeNotFoundException,
)
from src.domain.interfaces import MutualFundClient
from src.service.finance.returns import parse_nav_history

logger = structlog.get_logger(__name__)

PROVIDER = "mfapi"


class HttpMutualFundClient(MutualFundClient):
    """
    HTTP client for the public mutual fund NAV API.

    Scheme lookups go through a retrying GET; batch NAV fetches run
    concurrently and drop schemes that fail.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int = 3,
    ):
        self._base_url = (base_url or settings.mfapi_url).rstrip("/")
        self._timeout = timeout or settings.mfapi_timeout
        self._max_retries = max_retries

    async def search(self, query: str) -> List[SchemeSearchResult]:
        data = await self._get_json("/search", params={"q": query}, scheme=query)

        if not isinstance(data, list):
            return []

        return [
            SchemeSearchResult(
                scheme_code=int(item["schemeCode"]),
                scheme_name=item.get("schemeName", ""),
            )
            for item in data
            if item.get("schemeCode") is not None
        ]

    async def get_latest_nav(self, scheme_code: int) -> NAVResult:
        """
        Fetch the latest NAV, falling back to the full history endpoint
        when the `/latest` endpoint fails.
        """
        try:
            data = await self._get_json(f"/{scheme_code}/latest", scheme=str(scheme_code))
        except MarketDataException:
            logger.info("nav_latest_fallback", scheme_code=scheme_code)
            data = await self._get_json(f"/{scheme_code}", scheme=str(scheme_code))

        history = self._parse_history(scheme_code, data)
        if not history.points:
            raise SchemeNotFoundException(str(scheme_code))

        latest = history.points[0]
        return NAVResult(
            scheme_code=scheme_code,
            scheme_name=history.scheme_name,
            nav=latest.nav,
            date=latest.date,
        )

    async def get_history(self, scheme_code: int) -> SchemeHistory:
        data = await self._get_json(f"/{scheme_code}", scheme=str(scheme_code))
        history = self._parse_history(scheme_code, data)

        if not history.points:
            raise SchemeNotFoundException(str(scheme_code))

        return history

    async def get_latest_navs(self, scheme_codes: List[int]) -> Dict[int, NAVResult]:
        codes = list(dict.fromkeys(scheme_codes))
        results = await asyncio.gather(
            *(self.get_latest_nav(code) for code in codes),
            return_exceptions=True,
        )

        navs: Dict[int, NAVResult] = {}
        for code, result in zip(codes, results):
            if isinstance(result, Exception):
                logger.warning("nav_fetch_failed", scheme_code=code, error=str(result))
                continue
            navs[code] = result

        return navs

    async def _get_json(
        self,
        path: str,
        params: Dict[str, Any] | None = None,
        scheme: str = "",
    ) -> Any:
        """
        GET a provider path with retries.

        Implements retry logic with exponential backoff.
        """
        url = f"{self._base_url}{path}"
        last_exception = None

        for attempt in range(self._max_retries):
            try:
                with track_provider_latency(PROVIDER):
                    async with httpx.AsyncClient(timeout=self._timeout) as client:
                        response = await client.get(url, params=params)

                        if response.status_code == 404:
                            record_provider_failure(PROVIDER, "not_found")
                            raise SchemeNotFoundException(scheme)

                        if response.status_code >= 400:
                            record_provider_failure(PROVIDER, "error")
                            raise MarketDataException(
                                message=f"NAV API error: {response.text}",
                                provider=PROVIDER,
                                status_code=response.status_code,
                            )

                        data = response.json()
                        record_provider_success(PROVIDER)
                        return data

            except httpx.TimeoutException:
                record_provider_failure(PROVIDER, "timeout")
                last_exception = MarketDataTimeoutException(PROVIDER)
                logger.warning(
                    "nav_api_timeout",
                    path=path,
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except (SchemeNotFoundException, MarketDataException):
                raise
            except Exception as e:
                record_provider_failure(PROVIDER, "error")
                last_exception = MarketDataException(
                    message=f"Unexpected error: {str(e)}",
                    provider=PROVIDER,
                )
                logger.error(
                    "nav_api_error",
                    path=path,
                    attempt=attempt + 1,
                    error=str(e),
                )

            # Exponential backoff
            if attempt < self._max_retries - 1:
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or MarketDataException("Failed to fetch NAV data", PROVIDER)

    def _parse_history(self, scheme_code: int, data: Any) -> SchemeHistory:
        """Parse a `{meta, data}` payload into a SchemeHistory."""
        if not isinstance(data, dict):
            return SchemeHistory(scheme_code=scheme_code, scheme_name="")

        meta = data.get("meta") or {}
        return SchemeHistory(
            scheme_code=scheme_code,
            scheme_name=meta.get("scheme_name", ""),
            meta=meta,
            points=parse_nav_history(data.get("data") or []),
        )
