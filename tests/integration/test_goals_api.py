"""
Integration tests for savings goals and the income goal.

These tests verify:
1. Savings goal CRUD with computed progress
2. Deposits recorded through add_amount
3. Income goal upsert with fiscal-year progress
"""

from datetime import date, timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.domain.entities import TransactionCategory, TransactionType
from tests.integration.conftest import make_transaction


@pytest.fixture
def emergency_fund() -> dict:
    return {
        "name": "Emergency fund",
        "target_amount": 120000,
        "current_amount": 30000,
        "target_date": (date.today() + timedelta(days=400)).isoformat(),
        "monthly_contribution": 50000,
    }


# =============================================================================
# Savings Goal Tests
# =============================================================================

class TestSavingsGoals:
    """Tests for /v1/savings-goals."""

    @pytest.mark.asyncio
    async def test_create_returns_progress(self, client: AsyncClient, emergency_fund: dict):
        response = await client.post("/v1/savings-goals", json=emergency_fund)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Emergency fund"
        assert data["percentage_complete"] == 25
        assert data["on_track"] is True
        assert data["projected_completion_date"] is not None
        assert data["months_remaining"] > 0

    @pytest.mark.asyncio
    async def test_list_orders_by_target_date(self, client: AsyncClient, emergency_fund: dict):
        await client.post("/v1/savings-goals", json=emergency_fund)
        await client.post("/v1/savings-goals", json={
            "name": "Goa trip",
            "target_amount": 40000,
            "target_date": (date.today() + timedelta(days=90)).isoformat(),
        })

        response = await client.get("/v1/savings-goals")

        assert response.status_code == 200
        goals = response.json()["goals"]
        assert [g["name"] for g in goals] == ["Goa trip", "Emergency fund"]
        assert goals[0]["on_track"] is False
        assert goals[0]["projected_completion_date"] is None

    @pytest.mark.asyncio
    async def test_invalid_goal_rejected(self, client: AsyncClient, emergency_fund: dict):
        response = await client.post(
            "/v1/savings-goals", json={**emergency_fund, "target_amount": 0}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_GOAL_REQUEST"

        blank = await client.post("/v1/savings-goals", json={**emergency_fund, "name": "  "})
        assert blank.status_code == 400

    @pytest.mark.asyncio
    async def test_add_amount_records_deposit(self, client: AsyncClient, emergency_fund: dict):
        created = (await client.post("/v1/savings-goals", json=emergency_fund)).json()

        response = await client.patch(
            f"/v1/savings-goals/{created['id']}", json={"add_amount": 20000}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["current_amount"] == 50000
        assert data["percentage_complete"] == pytest.approx(41.67)

    @pytest.mark.asyncio
    async def test_update_fields(self, client: AsyncClient, emergency_fund: dict):
        created = (await client.post("/v1/savings-goals", json=emergency_fund)).json()

        response = await client.patch(
            f"/v1/savings-goals/{created['id']}",
            json={"name": "Rainy day", "current_amount": 120000},
        )

        data = response.json()
        assert data["name"] == "Rainy day"
        assert data["percentage_complete"] == 100
        assert data["required_monthly"] == 0

        listed = (await client.get("/v1/savings-goals")).json()["goals"]
        assert listed[0]["name"] == "Rainy day"

    @pytest.mark.asyncio
    async def test_update_unknown_goal_is_404(self, client: AsyncClient):
        response = await client.patch(f"/v1/savings-goals/{uuid4()}", json={"add_amount": 10})

        assert response.status_code == 404
        assert response.json()["error"] == "SAVINGS_GOAL_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, emergency_fund: dict):
        created = (await client.post("/v1/savings-goals", json=emergency_fund)).json()

        response = await client.delete(f"/v1/savings-goals/{created['id']}")
        assert response.status_code == 204

        assert (await client.get("/v1/savings-goals")).json()["goals"] == []
        again = await client.delete(f"/v1/savings-goals/{created['id']}")
        assert again.status_code == 404

    @pytest.mark.asyncio
    async def test_users_are_isolated(self, client: AsyncClient, emergency_fund: dict):
        await client.post("/v1/savings-goals", json=emergency_fund, params={"user_id": "alice"})

        response = await client.get("/v1/savings-goals", params={"user_id": "bob"})

        assert response.json()["goals"] == []


# =============================================================================
# Income Goal Tests
# =============================================================================

class TestIncomeGoal:
    """Tests for /v1/income-goals."""

    @pytest.mark.asyncio
    async def test_progress_without_goal(self, client: AsyncClient, transaction_repo):
        await transaction_repo.save_many([
            make_transaction(
                100000, TransactionType.INCOME, TransactionCategory.SALARY,
                date.today(), merchant="ACME Corp",
            ),
        ])

        response = await client.get("/v1/income-goals")

        assert response.status_code == 200
        data = response.json()
        assert data["goal"] is None
        assert data["status"] is None
        assert data["progress"]["total_income"] == 100000
        assert data["progress"]["income_sources"] == ["Salary"]

    @pytest.mark.asyncio
    async def test_set_goal_returns_status(self, client: AsyncClient, transaction_repo):
        await transaction_repo.save_many([
            make_transaction(
                100000, TransactionType.INCOME, TransactionCategory.SALARY,
                date.today(), merchant="ACME Corp",
            ),
        ])

        response = await client.post("/v1/income-goals", json={
            "target_amount": 400000,
            "target_date": (date.today() + timedelta(days=200)).isoformat(),
            "sources": [{"name": "Salary", "expected": 100000}],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["goal"]["target_amount"] == 400000
        assert data["goal"]["sources"] == [
            {"name": "Salary", "expected": 100000, "frequency": "monthly"}
        ]
        assert data["status"]["percent_complete"] == 25
        assert data["status"]["remaining"] == 300000

    @pytest.mark.asyncio
    async def test_second_post_replaces_goal(self, client: AsyncClient):
        target_date = (date.today() + timedelta(days=200)).isoformat()
        first = await client.post(
            "/v1/income-goals", json={"target_amount": 1000000, "target_date": target_date}
        )
        second = await client.post(
            "/v1/income-goals", json={"target_amount": 1500000, "target_date": target_date}
        )

        assert second.json()["goal"]["id"] == first.json()["goal"]["id"]
        current = (await client.get("/v1/income-goals")).json()
        assert current["goal"]["target_amount"] == 1500000

    @pytest.mark.asyncio
    async def test_invalid_goal_rejected(self, client: AsyncClient):
        target_date = (date.today() + timedelta(days=200)).isoformat()

        zero = await client.post(
            "/v1/income-goals", json={"target_amount": 0, "target_date": target_date}
        )
        bad_source = await client.post("/v1/income-goals", json={
            "target_amount": 100000,
            "target_date": target_date,
            "sources": [{"name": "Salary", "expected": 100000, "frequency": "hourly"}],
        })

        assert zero.status_code == 400
        assert bad_source.status_code == 400
        assert "hourly" in bad_source.json()["message"]

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient):
        await client.post("/v1/income-goals", json={
            "target_amount": 1000000,
            "target_date": (date.today() + timedelta(days=200)).isoformat(),
        })

        response = await client.delete("/v1/income-goals")
        assert response.status_code == 204

        assert (await client.get("/v1/income-goals")).json()["goal"] is None
