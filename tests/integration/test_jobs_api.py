"""
Integration tests for background jobs.

These tests verify:
1. Declared jobs are listed with their triggers
2. Transaction sync creates, updates and respects manual categories
3. A failing job body is recorded as a failed run
4. Insight and price jobs report per-item outcomes
"""

from datetime import date
from typing import List

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.main import app
from src.core.dependencies import get_feed_client
from src.domain.entities import Transaction, TransactionCategory
from src.domain.interfaces import TransactionFeedClient
from src.infrastructure.database.models import TransactionModel
from tests.integration.conftest import (
    MockTransactionFeedClient,
    make_transaction,
    sample_history,
)


def feed_transaction(external_id: str, amount: float, merchant: str):
    return make_transaction(
        amount,
        category=TransactionCategory.UNCATEGORIZED,
        txn_date=date(2025, 1, 10),
        merchant=merchant,
        external_id=external_id,
    )


class ConflictingFeedClient(TransactionFeedClient):
    """Feed whose fetch leaves the session with a failed flush."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def fetch_transactions(self, user_id: str) -> List[Transaction]:
        for _ in range(2):
            self._session.add(
                TransactionModel(
                    user_id=user_id,
                    txn_date=date(2025, 1, 10),
                    amount=100.0,
                    type="expense",
                    category="Dining",
                    payment_method="UPI",
                    external_id="clash",
                )
            )
        await self._session.flush()
        return []


# =============================================================================
# Listing Tests
# =============================================================================

class TestListJobs:
    """Tests for GET /v1/jobs."""

    @pytest.mark.asyncio
    async def test_lists_declared_jobs(self, client: AsyncClient):
        response = await client.get("/v1/jobs")

        assert response.status_code == 200
        data = response.json()
        assert [j["id"] for j in data["jobs"]] == [
            "sync-transactions",
            "refresh-prices",
            "generate-insights",
            "budget-breach-check",
            "renewal-alert",
            "weekly-digest",
        ]
        insights_job = data["jobs"][2]
        assert insights_job["cron"] is None
        assert insights_job["event"] == "finance/insights.generate"
        assert data["recent_runs"] == []

    @pytest.mark.asyncio
    async def test_runs_are_recorded(self, client: AsyncClient):
        await client.post("/v1/jobs/renewal-alert/run")

        runs = (await client.get("/v1/jobs")).json()["recent_runs"]

        assert len(runs) == 1
        assert runs[0]["job"] == "renewal-alert"
        assert runs[0]["trigger"] == "manual"
        assert runs[0]["finished_at"] is not None

    @pytest.mark.asyncio
    async def test_unknown_job_returns_404(self, client: AsyncClient):
        response = await client.post("/v1/jobs/mine-bitcoin/run")

        assert response.status_code == 404
        assert response.json()["error"] == "JOB_NOT_FOUND"


# =============================================================================
# Transaction Sync Tests
# =============================================================================

class TestSyncTransactions:
    """Tests for the sync-transactions job."""

    @pytest.mark.asyncio
    async def test_creates_and_categorizes(
        self,
        client: AsyncClient,
        mock_feed_client: MockTransactionFeedClient,
    ):
        mock_feed_client.transactions = [
            feed_transaction("t-1", 250, "Uber India"),
            feed_transaction("t-2", 400, "Swiggy"),
        ]

        response = await client.post("/v1/jobs/sync-transactions/run")

        assert response.status_code == 200
        run = response.json()
        assert run["status"] == "success"
        assert run["result"] == {"fetched": 2, "created": 2, "updated": 0}

        listed = (await client.get("/v1/transactions")).json()["transactions"]
        categories = {t["external_id"]: t["category"] for t in listed}
        assert categories == {"t-1": "Transport", "t-2": "Dining"}

    @pytest.mark.asyncio
    async def test_resync_updates_in_place(
        self,
        client: AsyncClient,
        mock_feed_client: MockTransactionFeedClient,
    ):
        mock_feed_client.transactions = [feed_transaction("t-1", 250, "Uber India")]
        await client.post("/v1/jobs/sync-transactions/run")
        first_id = (await client.get("/v1/transactions")).json()["transactions"][0]["id"]

        mock_feed_client.transactions = [feed_transaction("t-1", 275, "Uber India")]
        response = await client.post("/v1/jobs/sync-transactions/run")

        assert response.json()["result"] == {"fetched": 1, "created": 0, "updated": 1}
        listed = (await client.get("/v1/transactions")).json()["transactions"]
        assert len(listed) == 1
        assert listed[0]["id"] == first_id
        assert listed[0]["amount"] == 275

    @pytest.mark.asyncio
    async def test_manual_category_survives_sync(
        self,
        client: AsyncClient,
        transaction_repo,
        mock_feed_client: MockTransactionFeedClient,
    ):
        await transaction_repo.save(
            make_transaction(
                250,
                category=TransactionCategory.TRAVEL,
                txn_date=date(2025, 1, 10),
                merchant="Uber India",
                external_id="t-1",
                category_override=True,
            )
        )
        mock_feed_client.transactions = [feed_transaction("t-1", 250, "Uber India")]

        await client.post("/v1/jobs/sync-transactions/run")

        synced = await transaction_repo.get_by_external_ids("default", ["t-1"])
        assert synced["t-1"].category == TransactionCategory.TRAVEL
        assert synced["t-1"].category_override is True

    @pytest.mark.asyncio
    async def test_empty_feed_is_skipped(self, client: AsyncClient):
        response = await client.post("/v1/jobs/sync-transactions/run")

        run = response.json()
        assert run["status"] == "skipped"
        assert run["result"]["fetched"] == 0

    @pytest.mark.asyncio
    async def test_feed_failure_recorded_as_failed_run(
        self,
        client_with_failing_providers: AsyncClient,
    ):
        response = await client_with_failing_providers.post("/v1/jobs/sync-transactions/run")

        assert response.status_code == 200
        run = response.json()
        assert run["status"] == "failed"
        assert "Transaction feed unavailable" in run["error"]
        assert run["result"] == {}

    @pytest.mark.asyncio
    async def test_duplicate_external_ids_keep_last_record(
        self,
        client: AsyncClient,
        mock_feed_client: MockTransactionFeedClient,
    ):
        mock_feed_client.transactions = [
            feed_transaction("dup", 250, "Uber India"),
            feed_transaction("dup", 300, "Uber India"),
        ]

        response = await client.post("/v1/jobs/sync-transactions/run")

        assert response.status_code == 200
        run = response.json()
        assert run["status"] == "success"
        assert run["result"] == {"fetched": 2, "created": 1, "updated": 0}

        listed = (await client.get("/v1/transactions")).json()["transactions"]
        assert len(listed) == 1
        assert listed[0]["amount"] == 300

    @pytest.mark.asyncio
    async def test_database_error_recorded_as_failed_run(
        self,
        client: AsyncClient,
        test_session: AsyncSession,
    ):
        app.dependency_overrides[get_feed_client] = lambda: ConflictingFeedClient(test_session)

        response = await client.post("/v1/jobs/sync-transactions/run")

        assert response.status_code == 200
        run = response.json()
        assert run["status"] == "failed"
        assert "UNIQUE" in run["error"].upper()

        runs = (await client.get("/v1/jobs")).json()["recent_runs"]
        assert [(r["job"], r["status"]) for r in runs] == [("sync-transactions", "failed")]
        assert (await client.get("/v1/transactions")).json()["transactions"] == []


# =============================================================================
# Insight and Price Job Tests
# =============================================================================

class TestGenerateInsightsJob:
    """Tests for the generate-insights job."""

    @pytest.mark.asyncio
    async def test_reports_generated_and_failed_types(
        self,
        client: AsyncClient,
        transaction_repo,
    ):
        await transaction_repo.save_many(sample_history())

        response = await client.post(
            "/v1/jobs/generate-insights/run",
            json={"payload": {"types": ["spending_analysis", "horoscope"]}},
        )

        run = response.json()
        assert run["status"] == "success"
        assert run["result"]["generated"] == ["spending_analysis"]
        assert run["result"]["failed"] == {"horoscope": "Unknown insight type"}

        cached = await client.get("/v1/ai/insights", params={"type": "spending_analysis"})
        assert cached.json()["from_cache"] is True


class TestRefreshPricesJob:
    """Tests for the refresh-prices job."""

    @pytest.mark.asyncio
    async def test_reprices_holdings(self, client: AsyncClient):
        await client.post("/v1/investments/stocks", json={
            "symbol": "INFY", "shares": 10, "average_cost": 1400,
        })
        await client.post("/v1/investments/stocks", json={
            "symbol": "NOPE", "shares": 1, "average_cost": 100,
        })
        await client.post("/v1/investments/mutual-funds", json={
            "scheme_name": "Axis Bluechip Fund",
            "units": 100,
            "invested_value": 5000,
        })

        response = await client.post("/v1/jobs/refresh-prices/run")

        assert response.json()["result"] == {
            "stocks_updated": 1,
            "stocks_failed": 1,
            "funds_updated": 1,
            "funds_failed": 0,
        }

        holdings = (await client.get("/v1/investments/holdings")).json()
        infy = next(s for s in holdings["stocks"] if s["symbol"] == "INFY")
        assert infy["current_price"] == 1500
        assert holdings["mutual_funds"][0]["current_nav"] == 58.42
