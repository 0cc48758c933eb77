"""
Integration tests for resilience and error handling.

These tests verify:
1. Provider clients retry timeouts with backoff and fail fast on errors
2. Quote lookups fall back across sources
3. Provider failures map to 502/503 responses with the standard error body
4. Batch lookups degrade gracefully instead of failing the request
5. The health check reports database reachability
"""

from typing import AsyncGenerator
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from src.main import app
from src.core.metrics import REGISTRY
from src.domain.entities import SchemeHistory, TransactionType
from src.domain.exceptions import (
    InsightGenerationException,
    MarketDataException,
    MarketDataTimeoutException,
    SchemeNotFoundException,
    TransactionFeedException,
)
from src.infrastructure.clients import (
    HttpInsightGeneratorClient,
    HttpMutualFundClient,
    HttpStockQuoteClient,
    HttpTransactionFeedClient,
)
from src.infrastructure.database.connection import DatabaseSessionManager, normalize_database_url
from tests.integration.conftest import (
    MockInsightGeneratorClient,
    MockMutualFundClient,
    MockStockQuoteClient,
    MockTransactionFeedClient,
    install_overrides,
)


def ok(payload, url: str = "http://provider.test") -> httpx.Response:
    return httpx.Response(200, json=payload, request=httpx.Request("GET", url))


def status(code: int, url: str = "http://provider.test") -> httpx.Response:
    return httpx.Response(code, text="upstream error", request=httpx.Request("GET", url))


NAV_PAYLOAD = {
    "meta": {"scheme_name": "Axis Bluechip Fund - Direct Plan - Growth"},
    "data": [
        {"date": "10-01-2025", "nav": "58.42"},
        {"date": "09-01-2025", "nav": "58.10"},
    ],
    "status": "SUCCESS",
}


# =============================================================================
# Mutual Fund Client Tests
# =============================================================================

class TestMutualFundClientRetry:
    """Tests for HttpMutualFundClient retry behavior."""

    @pytest.mark.asyncio
    async def test_timeout_then_success(self):
        client = HttpMutualFundClient(base_url="http://mf.test")
        get = AsyncMock(side_effect=[httpx.TimeoutException("slow"), ok(NAV_PAYLOAD)])

        with patch("httpx.AsyncClient.get", get):
            history = await client.get_history(120503)

        assert get.call_count == 2
        assert history.scheme_name == "Axis Bluechip Fund - Direct Plan - Growth"
        assert history.points[0].nav == 58.42

    @pytest.mark.asyncio
    async def test_all_timeouts_raise_timeout(self):
        client = HttpMutualFundClient(base_url="http://mf.test", max_retries=3)
        labels = {"provider": "mfapi", "error_type": "timeout"}
        before = REGISTRY.get_sample_value("finance_provider_failures_total", labels) or 0.0
        get = AsyncMock(side_effect=httpx.TimeoutException("slow"))

        with patch("httpx.AsyncClient.get", get):
            with pytest.raises(MarketDataTimeoutException):
                await client.get_history(120503)

        assert get.call_count == 3
        assert REGISTRY.get_sample_value("finance_provider_failures_total", labels) == before + 3

    @pytest.mark.asyncio
    async def test_not_found_is_not_retried(self):
        client = HttpMutualFundClient(base_url="http://mf.test")
        get = AsyncMock(return_value=status(404))

        with patch("httpx.AsyncClient.get", get):
            with pytest.raises(SchemeNotFoundException):
                await client.get_history(999999)

        assert get.call_count == 1

    @pytest.mark.asyncio
    async def test_server_error_is_not_retried(self):
        client = HttpMutualFundClient(base_url="http://mf.test")
        get = AsyncMock(return_value=status(500))

        with patch("httpx.AsyncClient.get", get):
            with pytest.raises(MarketDataException) as exc_info:
                await client.get_history(120503)

        assert exc_info.value.status_code == 500
        assert get.call_count == 1

    @pytest.mark.asyncio
    async def test_latest_nav_falls_back_to_history(self):
        client = HttpMutualFundClient(base_url="http://mf.test")
        get = AsyncMock(side_effect=[status(500), ok(NAV_PAYLOAD)])

        with patch("httpx.AsyncClient.get", get):
            nav = await client.get_latest_nav(120503)

        assert nav.nav == 58.42
        assert get.call_args_list[0].args[0] == "http://mf.test/120503/latest"
        assert get.call_args_list[1].args[0] == "http://mf.test/120503"

    @pytest.mark.asyncio
    async def test_batch_drops_failed_schemes(self):
        client = HttpMutualFundClient(base_url="http://mf.test")

        async def fake_get(url, params=None):
            if "119551" in url:
                return status(404, url)
            return ok(NAV_PAYLOAD, url)

        with patch("httpx.AsyncClient.get", AsyncMock(side_effect=fake_get)):
            navs = await client.get_latest_navs([120503, 119551, 120503])

        assert list(navs) == [120503]


# =============================================================================
# Transaction Feed Client Tests
# =============================================================================

class TestTransactionFeedClient:
    """Tests for HttpTransactionFeedClient."""

    @pytest.mark.asyncio
    async def test_timeout_then_parse(self):
        client = HttpTransactionFeedClient(base_url="http://feed.test")
        payload = {
            "transactions": [
                {"id": "a1", "date": "2025-01-10", "amount": -250, "merchant": "Uber India"},
                {"id": "a2", "date": "15/01/2025", "amount": "50000", "type": "income",
                 "description": "Salary credit", "payment_method": "neft"},
                {"date": "2025-01-11", "amount": 10},
                {"id": "a4", "date": "not a date", "amount": 5},
                {"id": "a5", "date": "2025-01-12", "amount": "n/a"},
            ]
        }
        get = AsyncMock(side_effect=[httpx.TimeoutException("slow"), ok(payload)])

        with patch("httpx.AsyncClient.get", get):
            transactions = await client.fetch_transactions("default")

        assert get.call_count == 2
        assert [t.external_id for t in transactions] == ["a1", "a2"]

        uber, salary = transactions
        assert uber.type == TransactionType.EXPENSE
        assert uber.amount == 250
        assert salary.type == TransactionType.INCOME
        assert salary.date.isoformat() == "2025-01-15"
        assert salary.payment_method.value == "NEFT"

    @pytest.mark.asyncio
    async def test_bare_list_payload(self):
        client = HttpTransactionFeedClient(base_url="http://feed.test")
        get = AsyncMock(return_value=ok([
            {"id": "b1", "date": "2025-01-10", "amount": -120, "merchant": "Swiggy"},
        ]))

        with patch("httpx.AsyncClient.get", get):
            transactions = await client.fetch_transactions("default")

        assert [t.external_id for t in transactions] == ["b1"]
        assert transactions[0].user_id == "default"

    @pytest.mark.asyncio
    async def test_malformed_records_skipped_without_refetch(self):
        client = HttpTransactionFeedClient(base_url="http://feed.test")
        get = AsyncMock(return_value=ok({
            "transactions": [
                {"id": "c1", "date": "garbageTdate", "amount": 10},
                {"id": "c2", "date": "2025-01-10", "amount": 0},
                {"id": "c3", "date": "2025-01-10", "amount": 99, "tags": 5},
                "not a record",
                {"id": "c5", "date": "2025-01-11T08:30:00Z", "amount": -40, "balance": "n/a"},
            ]
        }))

        with patch("httpx.AsyncClient.get", get):
            transactions = await client.fetch_transactions("default")

        assert get.call_count == 1
        assert [t.external_id for t in transactions] == ["c5"]
        assert transactions[0].balance is None
        assert transactions[0].date.isoformat() == "2025-01-11"

    @pytest.mark.asyncio
    async def test_non_collection_payload_rejected(self):
        client = HttpTransactionFeedClient(base_url="http://feed.test")
        get = AsyncMock(return_value=ok("maintenance"))

        with patch("httpx.AsyncClient.get", get):
            with pytest.raises(TransactionFeedException):
                await client.fetch_transactions("default")

        assert get.call_count == 1

    @pytest.mark.asyncio
    async def test_error_status_fails_immediately(self):
        client = HttpTransactionFeedClient(base_url="http://feed.test")
        get = AsyncMock(return_value=status(503))

        with patch("httpx.AsyncClient.get", get):
            with pytest.raises(TransactionFeedException) as exc_info:
                await client.fetch_transactions("default")

        assert exc_info.value.status_code == 503
        assert get.call_count == 1


# =============================================================================
# LLM and Quote Client Tests
# =============================================================================

class TestInsightGeneratorClient:
    """Tests for HttpInsightGeneratorClient."""

    @pytest.mark.asyncio
    async def test_server_error_retried(self):
        client = HttpInsightGeneratorClient(api_url="http://llm.test/chat", api_key="key")
        post = AsyncMock(side_effect=[
            status(502),
            ok({"choices": [{"message": {"content": "Save more."}}]}),
        ])

        with patch("httpx.AsyncClient.post", post):
            content = await client.complete([{"role": "user", "content": "hi"}])

        assert content == "Save more."
        assert post.call_count == 2

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self):
        client = HttpInsightGeneratorClient(api_url="http://llm.test/chat", api_key="key")
        post = AsyncMock(return_value=status(401))

        with patch("httpx.AsyncClient.post", post):
            with pytest.raises(InsightGenerationException):
                await client.complete([{"role": "user", "content": "hi"}])

        assert post.call_count == 1

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        client = HttpInsightGeneratorClient(api_key="")

        with pytest.raises(InsightGenerationException):
            await client.complete([{"role": "user", "content": "hi"}])


class TestStockQuoteFallback:
    """Tests for HttpStockQuoteClient source fallback."""

    @pytest.mark.asyncio
    async def test_alternate_exchange_used_when_primary_fails(self):
        client = HttpStockQuoteClient(yahoo_url="http://yahoo.test", finnhub_api_key="")
        chart = {"chart": {"result": [{"meta": {"regularMarketPrice": 1510.5, "chartPreviousClose": 1500}}]}}
        get = AsyncMock(side_effect=[status(500), ok(chart)])

        with patch("httpx.AsyncClient.get", get):
            quote = await client.get_quote("INFY", "NSE")

        assert quote.source == "yahoo-alt"
        assert quote.price == 1510.5
        assert quote.change == 10.5
        assert get.call_args_list[1].args[0] == "http://yahoo.test/INFY.BO"

    @pytest.mark.asyncio
    async def test_every_source_failing_raises(self):
        client = HttpStockQuoteClient(yahoo_url="http://yahoo.test", finnhub_api_key="")

        with patch("httpx.AsyncClient.get", AsyncMock(side_effect=httpx.TimeoutException("slow"))):
            with pytest.raises(MarketDataException):
                await client.get_quote("NOPE", "NSE")


# =============================================================================
# API Error Response Tests
# =============================================================================

class TimeoutMutualFundClient(MockMutualFundClient):
    """NAV provider that always times out."""

    async def get_history(self, scheme_code: int) -> SchemeHistory:
        raise MarketDataTimeoutException("mfapi")


@pytest_asyncio.fixture
async def client_with_slow_nav(test_session) -> AsyncGenerator[AsyncClient, None]:
    install_overrides(
        test_session,
        TimeoutMutualFundClient(),
        MockStockQuoteClient(),
        MockInsightGeneratorClient(),
        MockTransactionFeedClient(),
    )

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


class TestProviderErrorResponses:
    """Tests for how provider failures surface through the API."""

    @pytest.mark.asyncio
    async def test_nav_provider_error_returns_502(self, client_with_failing_providers: AsyncClient):
        response = await client_with_failing_providers.get(
            "/v1/mutual-funds/nav", params={"history": 120503},
        )

        assert response.status_code == 502
        data = response.json()
        assert data["error"] == "MARKET_DATA_ERROR"
        assert "message" in data
        assert "request_id" in data

    @pytest.mark.asyncio
    async def test_nav_provider_timeout_returns_503(self, client_with_slow_nav: AsyncClient):
        response = await client_with_slow_nav.get(
            "/v1/mutual-funds/nav", params={"history": 120503},
        )

        assert response.status_code == 503
        data = response.json()
        assert data["error"] == "MARKET_DATA_TIMEOUT"
        assert data["message"] == "Market data temporarily unavailable. Please try again."

    @pytest.mark.asyncio
    async def test_batch_navs_degrade_to_empty(self, client_with_failing_providers: AsyncClient):
        response = await client_with_failing_providers.get(
            "/v1/mutual-funds/nav", params={"schemes": "120503,119551"},
        )

        assert response.status_code == 200
        assert response.json()["found"] == 0

    @pytest.mark.asyncio
    async def test_quotes_degrade_to_empty(self, client_with_failing_providers: AsyncClient):
        response = await client_with_failing_providers.get(
            "/v1/stocks/quotes", params={"symbols": "INFY,TCS"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["requested"] == 2
        assert data["found"] == 0

    @pytest.mark.asyncio
    async def test_request_id_header_echoed(self, client: AsyncClient):
        response = await client.post(
            "/v1/jobs/not-a-job/run",
            headers={"X-Request-ID": "req-123"},
        )

        assert response.headers.get("X-Request-ID") == "req-123"
        assert response.json()["request_id"] == "req-123"


# =============================================================================
# Service Health Tests
# =============================================================================

class TestServiceHealth:
    """Tests for GET /v1/health and its database check."""

    @pytest.mark.asyncio
    async def test_healthy_without_database(self, client: AsyncClient):
        response = await client.get("/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "finance-tracker"
        assert data["database"] == "not_initialized"

    @pytest.mark.asyncio
    async def test_reachable_database(self, client: AsyncClient, monkeypatch):
        manager = DatabaseSessionManager()
        manager.init("sqlite+aiosqlite:///:memory:")
        monkeypatch.setattr("src.presentation.api.v1.health.db_manager", manager)

        try:
            response = await client.get("/v1/health")
        finally:
            await manager.close()

        assert response.json()["database"] == "ok"

    @pytest.mark.asyncio
    async def test_unreachable_database_is_degraded(self, client: AsyncClient, monkeypatch):
        manager = DatabaseSessionManager()
        manager.init("sqlite+aiosqlite:////nonexistent-dir/finance.db")
        monkeypatch.setattr("src.presentation.api.v1.health.db_manager", manager)

        try:
            response = await client.get("/v1/health")
        finally:
            await manager.close()

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["database"] == "unavailable"

    def test_postgres_urls_use_asyncpg(self):
        assert normalize_database_url("postgres://u:p@db/finance") == "postgresql+asyncpg://u:p@db/finance"
        assert normalize_database_url("postgresql://u:p@db/finance") == "postgresql+asyncpg://u:p@db/finance"
        assert normalize_database_url("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"
