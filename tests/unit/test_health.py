"""
Unit Tests for Financial Health and Projections.

These tests verify:
1. Freedom score banding
2. Expense velocity and income stability
3. The assembled health report
4. SIP, net worth and FIRE projections
"""

import pytest
from datetime import date

from src.domain.entities import Transaction, TransactionCategory, TransactionType
from src.service.finance.health import (
    calculate_expense_velocity,
    calculate_financial_health,
    calculate_freedom_score,
    calculate_net_worth_timeline,
    detect_income,
)
from src.service.finance.nwi import get_default_nwi_config
from src.service.finance.projections import (
    calculate_fire,
    project_emergency_fund_progress,
    project_net_worth_growth,
    project_sip_future_value,
    required_monthly_savings,
)


# =============================================================================
# Test Fixtures
# =============================================================================

def make_txn(
    day: date,
    amount: float,
    txn_type: TransactionType,
    category: TransactionCategory,
    balance: float = None,
) -> Transaction:
    return Transaction(
        date=day,
        amount=amount,
        type=txn_type,
        category=category,
        balance=balance,
    )


def salary(day: date, amount: float, balance: float = None) -> Transaction:
    return make_txn(day, amount, TransactionType.INCOME, TransactionCategory.SALARY, balance)


# =============================================================================
# Freedom Score Tests
# =============================================================================

class TestFreedomScore:
    """Tests for calculate_freedom_score()."""

    def test_maximum(self):
        score = calculate_freedom_score(35, 7, 100, 25)
        assert score.score == 100

    def test_minimum(self):
        assert calculate_freedom_score(-10, 0, 0, 0).score == 0

    def test_middle_bands(self):
        score = calculate_freedom_score(25, 4, 60, 12)
        assert score.savings_rate == 20
        assert score.emergency_fund == 20
        assert score.nwi_adherence == 15
        assert score.investment_rate == 15
        assert score.score == 70

    def test_band_edges_are_exclusive(self):
        score = calculate_freedom_score(30, 6, 100, 20)
        assert score.savings_rate == 20
        assert score.emergency_fund == 20
        assert score.investment_rate == 20


# =============================================================================
# Velocity and Income Tests
# =============================================================================

class TestExpenseVelocity:
    """Tests for calculate_expense_velocity()."""

    def test_increasing(self):
        velocity = calculate_expense_velocity([100, 100, 100, 120, 120, 120])
        assert velocity.change_percent == pytest.approx(20)
        assert velocity.trend == "increasing"

    def test_decreasing(self):
        assert calculate_expense_velocity([200, 100]).trend == "decreasing"

    def test_stable_within_five_percent(self):
        assert calculate_expense_velocity([100, 104]).trend == "stable"

    def test_only_last_six_months_used(self):
        velocity = calculate_expense_velocity([9999, 100, 100, 100, 100, 100, 100])
        assert velocity.previous_monthly_avg == 100

    def test_single_month(self):
        velocity = calculate_expense_velocity([500])
        assert velocity.current_monthly_avg == 500
        assert velocity.trend == "stable"


class TestDetectIncome:
    """Tests for detect_income()."""

    def test_stable_salary(self):
        transactions = [salary(date(2026, m, 1), 100000) for m in (1, 2, 3)]
        profile = detect_income(transactions)
        assert profile.avg_monthly_income == 100000
        assert profile.income_stability == 1.0
        assert profile.is_variable is False
        assert profile.last_income_date == date(2026, 3, 1)

    def test_variable_income(self):
        transactions = [salary(date(2026, 1, 1), 100000), salary(date(2026, 2, 1), 20000)]
        profile = detect_income(transactions)
        assert profile.income_stability == pytest.approx(1 / 3)
        assert profile.is_variable is True

    def test_no_income(self):
        profile = detect_income([])
        assert profile.is_variable is True
        assert profile.last_income_date is None


# =============================================================================
# Health Report Tests
# =============================================================================

class TestFinancialHealth:
    """Tests for calculate_financial_health()."""

    def test_report(self):
        transactions = [
            salary(date(2026, 1, 1), 100000, balance=100000),
            make_txn(date(2026, 1, 5), 40000, TransactionType.EXPENSE, TransactionCategory.RENT, 60000),
            make_txn(
                date(2026, 1, 10), 20000, TransactionType.INVESTMENT, TransactionCategory.INVESTMENT, 40000
            ),
        ]
        health = calculate_financial_health(
            transactions, get_default_nwi_config("default"), investment_value=25000
        )

        assert health["current_balance"] == 40000
        assert health["emergency_fund_ratio"] == 1.0
        assert health["savings_rate"] == 60
        assert health["investment_rate"] == 20
        assert health["nwi_adherence"] == 40
        assert health["freedom_score"]["score"] == 55
        assert health["net_worth_timeline"] == [
            {
                "month": "2026-01",
                "bank_balance": 40000,
                "investment_value": 25000,
                "total_net_worth": 65000,
            }
        ]

    def test_empty_history(self):
        health = calculate_financial_health([], None)
        assert health["emergency_fund_ratio"] == 0
        assert health["nwi_adherence"] == 50
        assert health["net_worth_timeline"] == []

    def test_net_worth_timeline_merges_months(self):
        timeline = calculate_net_worth_timeline(
            {"2026-01": 1000, "2026-02": 2000},
            {"2026-02": 500, "2026-03": 700},
        )
        assert [p["month"] for p in timeline] == ["2026-01", "2026-02", "2026-03"]
        assert timeline[1]["total_net_worth"] == 2500
        assert timeline[2]["bank_balance"] == 0


# =============================================================================
# Projection Tests
# =============================================================================

class TestProjections:
    """Tests for the SIP, emergency fund and net worth projections."""

    def test_sip_zero_return(self):
        assert project_sip_future_value(1000, 0, 1) == 12000

    def test_sip_annuity_due(self):
        assert project_sip_future_value(1000, 12, 1) == pytest.approx(12809.33, abs=0.01)

    def test_net_worth_growth(self):
        assert project_net_worth_growth(0, 1000, 10, 2) == [
            {"year": 1, "invested": 12000, "projected": 13200},
            {"year": 2, "invested": 24000, "projected": 27720},
        ]

    def test_emergency_fund_progress(self):
        assert project_emergency_fund_progress(30000, 10000, 6, 10000) == {
            "current_months": 3,
            "target_months": 6,
            "months_to_target": 3,
        }
        assert project_emergency_fund_progress(30000, 0, 6, 10000)["months_to_target"] == -1
        assert project_emergency_fund_progress(90000, 0, 6, 10000)["months_to_target"] == 0

    def test_required_savings_zero_return(self):
        assert required_monthly_savings(36000, 0, 0, 3) == 1000
        assert required_monthly_savings(100, 500, 8, 3) == 0


class TestFIRE:
    """Tests for calculate_fire()."""

    def test_already_independent(self):
        fire = calculate_fire(400000, 10_000_000, 0, 8)
        assert fire.fire_number == 10_000_000
        assert fire.progress_percent == 100
        assert fire.years_to_fire == 0
        assert fire.monthly_required == 0
        assert len(fire.projection) == 6

    def test_years_to_fire_without_returns(self):
        fire = calculate_fire(400000, 0, 100000, 0)
        assert fire.years_to_fire == 9
        assert fire.monthly_required == pytest.approx(27777.78)
        assert fire.projection[0] == {"year": 0, "net_worth": 0, "fire_target": 10_000_000}
        assert len(fire.projection) == 15

    def test_unreachable_capped(self):
        fire = calculate_fire(400000, 0, 0, 0)
        assert fire.years_to_fire == 100
        assert len(fire.projection) == 51
