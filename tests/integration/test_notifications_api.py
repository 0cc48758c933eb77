"""
Integration tests for notifications.

Notifications are produced by the budget breach, renewal and digest
jobs; these tests drive them through the job endpoints and read them
back through the notification endpoints.
"""

from datetime import date, timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.domain.entities import TransactionCategory
from tests.integration.conftest import make_transaction


# =============================================================================
# Budget Breach Tests
# =============================================================================

class TestBudgetBreachNotifications:
    """Tests for budget breach alerts."""

    @pytest.mark.asyncio
    async def test_warning_at_80_percent(self, client: AsyncClient, transaction_repo):
        await client.get("/v1/budgets")
        await transaction_repo.save(
            make_transaction(12500, category=TransactionCategory.DINING, txn_date=date.today(), merchant="Cafe")
        )

        run = await client.post("/v1/jobs/budget-breach-check/run")
        assert run.json()["result"] == {"notifications": 1}

        response = await client.get("/v1/notifications")

        assert response.status_code == 200
        data = response.json()
        assert data["unread_count"] == 1
        notification = data["notifications"][0]
        assert notification["type"] == "budget_breach"
        assert notification["severity"] == "warning"
        assert notification["title"] == "Food & Dining budget nearing limit"

    @pytest.mark.asyncio
    async def test_critical_when_exceeded(self, client: AsyncClient, transaction_repo):
        await client.get("/v1/budgets")
        await transaction_repo.save(
            make_transaction(6000, category=TransactionCategory.FUEL, txn_date=date.today(), merchant="HP Petrol")
        )

        await client.post("/v1/jobs/budget-breach-check/run")

        notification = (await client.get("/v1/notifications")).json()["notifications"][0]
        assert notification["severity"] == "critical"
        assert notification["title"] == "Transport budget exceeded"

    @pytest.mark.asyncio
    async def test_repeat_check_is_deduplicated(self, client: AsyncClient, transaction_repo):
        await client.get("/v1/budgets")
        await transaction_repo.save(
            make_transaction(12500, category=TransactionCategory.DINING, txn_date=date.today(), merchant="Cafe")
        )

        await client.post("/v1/jobs/budget-breach-check/run")
        second = await client.post("/v1/jobs/budget-breach-check/run")

        assert second.json()["result"] == {"notifications": 0}
        assert len((await client.get("/v1/notifications")).json()["notifications"]) == 1


# =============================================================================
# Renewal and Digest Tests
# =============================================================================

class TestRenewalAlerts:
    """Tests for subscription renewal reminders."""

    @pytest.mark.asyncio
    async def test_due_subscription_alerted(self, client: AsyncClient):
        await client.post("/v1/subscriptions", json={
            "name": "Netflix",
            "amount": 649,
            "frequency": "monthly",
            "next_expected": (date.today() + timedelta(days=1)).isoformat(),
        })
        await client.post("/v1/subscriptions", json={
            "name": "Gym",
            "amount": 2000,
            "frequency": "monthly",
            "next_expected": (date.today() + timedelta(days=20)).isoformat(),
        })

        run = await client.post("/v1/jobs/renewal-alert/run")

        assert run.json()["result"] == {"notifications": 1}
        notification = (await client.get("/v1/notifications")).json()["notifications"][0]
        assert notification["title"] == "Netflix renewing tomorrow"
        assert notification["type"] == "renewal_alert"


class TestWeeklyDigest:
    """Tests for the weekly digest."""

    @pytest.mark.asyncio
    async def test_sent_once_per_week(self, client: AsyncClient, transaction_repo):
        await transaction_repo.save(make_transaction(800, txn_date=date.today(), merchant="Cafe"))

        first = await client.post("/v1/jobs/weekly-digest/run")
        second = await client.post("/v1/jobs/weekly-digest/run")

        assert first.json()["status"] == "success"
        assert "notification_id" in first.json()["result"]
        assert second.json()["status"] == "skipped"

        notifications = (await client.get("/v1/notifications")).json()["notifications"]
        assert [n["type"] for n in notifications] == ["weekly_digest"]


# =============================================================================
# Read State Tests
# =============================================================================

class TestMarkRead:
    """Tests for POST /v1/notifications/{id}/read."""

    @pytest.mark.asyncio
    async def test_mark_read(self, client: AsyncClient, transaction_repo):
        await transaction_repo.save(make_transaction(800, txn_date=date.today(), merchant="Cafe"))
        await client.post("/v1/jobs/weekly-digest/run")
        notification_id = (await client.get("/v1/notifications")).json()["notifications"][0]["id"]

        response = await client.post(f"/v1/notifications/{notification_id}/read")

        assert response.status_code == 200
        assert response.json()["read"] is True

        unread = await client.get("/v1/notifications", params={"unread_only": True})
        assert unread.json() == {"notifications": [], "unread_count": 0}

    @pytest.mark.asyncio
    async def test_unknown_notification_returns_404(self, client: AsyncClient):
        response = await client.post(f"/v1/notifications/{uuid4()}/read")

        assert response.status_code == 404
        assert response.json()["error"] == "NOTIFICATION_NOT_FOUND"
