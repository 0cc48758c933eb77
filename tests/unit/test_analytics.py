"""
Unit Tests for Monthly, Weekly and Yearly Analytics.

These tests verify:
1. Opening/closing balances from running balances
2. Partial month detection
3. ISO week bounds and daily breakdown
4. Year-over-year growth with annualization
5. One-time expense separation and anomaly detection
"""

import pytest
from datetime import date

from src.domain.entities import (
    PaymentMethod,
    Transaction,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)
from src.domain.exceptions import InvalidPeriodException
from src.service.finance.analytics import (
    calculate_analytics,
    calculate_daily_average_spend,
    calculate_week_metrics,
    calculate_year_metrics,
    calculate_year_over_year,
    detect_anomalies,
    get_top_merchants,
    iso_week_bounds,
    separate_one_time_expenses,
)
from src.service.finance.monthly import (
    calculate_monthly_metrics,
    get_available_months,
    get_month_opening_balance,
    latest_month,
)


# =============================================================================
# Test Fixtures
# =============================================================================

def income(day: date, amount: float, balance: float = None) -> Transaction:
    return Transaction(
        date=day,
        amount=amount,
        type=TransactionType.INCOME,
        category=TransactionCategory.SALARY,
        balance=balance,
    )


def expense(
    day: date,
    amount: float,
    category: TransactionCategory = TransactionCategory.SHOPPING,
    balance: float = None,
    merchant: str = "",
    status: TransactionStatus = TransactionStatus.COMPLETED,
) -> Transaction:
    return Transaction(
        date=day,
        amount=amount,
        type=TransactionType.EXPENSE,
        category=category,
        balance=balance,
        merchant=merchant,
        status=status,
        payment_method=PaymentMethod.UPI,
    )


@pytest.fixture
def january():
    return [
        income(date(2025, 12, 31), 10000, balance=10000),
        income(date(2026, 1, 1), 50000, balance=60000),
        expense(date(2026, 1, 10), 20000, balance=40000),
        expense(date(2026, 1, 31), 5000, TransactionCategory.DINING, balance=35000),
    ]


# =============================================================================
# Monthly Metrics Tests
# =============================================================================

class TestMonthlyMetrics:
    """Tests for calculate_monthly_metrics()."""

    def test_full_month(self, january):
        metrics = calculate_monthly_metrics(january, 2026, 1)

        assert metrics.opening_balance == 10000
        assert metrics.closing_balance == 35000
        assert metrics.net_change == 25000
        assert metrics.total_income == 50000
        assert metrics.total_expenses == 25000
        assert metrics.net_savings == 25000
        assert metrics.growth_rate == 250
        assert metrics.savings_rate == 50
        assert metrics.transaction_count == 3
        assert metrics.is_partial_month is False
        assert metrics.days_in_period == 31
        assert metrics.month_label == "January 2026"

    def test_opening_worked_back_from_first_transaction(self):
        transactions = [
            expense(date(2026, 2, 3), 500, balance=9500),
            expense(date(2026, 2, 9), 1500, balance=8000),
        ]
        assert get_month_opening_balance(transactions, 2026, 2) == 10000

        metrics = calculate_monthly_metrics(transactions, 2026, 2)
        assert metrics.closing_balance == 8000
        assert metrics.is_partial_month is True
        assert metrics.days_in_period == 7
        assert metrics.start_date == date(2026, 2, 3)

    def test_empty_month(self, january):
        metrics = calculate_monthly_metrics(january, 2026, 3)
        assert metrics.transaction_count == 0
        assert metrics.opening_balance == 35000
        assert metrics.closing_balance == 35000
        assert metrics.is_partial_month is False
        assert metrics.savings_rate == 0

    def test_savings_rate_clamped(self):
        transactions = [
            income(date(2026, 1, 1), 1000),
            expense(date(2026, 1, 2), 5000),
        ]
        assert calculate_monthly_metrics(transactions, 2026, 1).savings_rate == -100

    @pytest.mark.parametrize("year,month", [(2026, 0), (2026, 13), (1899, 5), (2101, 1)])
    def test_invalid_period(self, year, month):
        with pytest.raises(InvalidPeriodException):
            calculate_monthly_metrics([], year, month)

    def test_available_months(self, january):
        assert get_available_months(january) == [(2025, 12), (2026, 1)]
        assert latest_month(january) == (2026, 1)
        assert latest_month([]) is None


# =============================================================================
# Overall Analytics Tests
# =============================================================================

class TestAnalytics:
    """Tests for calculate_analytics()."""

    def test_totals_and_averages(self, january):
        analytics = calculate_analytics(january)

        assert analytics.total_income == 60000
        assert analytics.total_expenses == 25000
        assert analytics.net_savings == 35000
        assert analytics.average_monthly_income == 30000
        assert len(analytics.monthly_trends) == 2
        assert analytics.top_expense_categories[0]["category"] == "Shopping"
        assert analytics.top_expense_categories[0]["percentage_of_total"] == 80

    def test_pending_ignored(self):
        transactions = [
            income(date(2026, 1, 1), 1000),
            expense(date(2026, 1, 2), 900, status=TransactionStatus.PENDING),
        ]
        assert calculate_analytics(transactions).total_expenses == 0

    def test_empty(self):
        analytics = calculate_analytics([])
        assert analytics.savings_rate == 0
        assert analytics.daily_average_spend == 0
        assert analytics.monthly_trends == []

    def test_daily_average_spans_all_types(self):
        transactions = [
            income(date(2026, 1, 1), 50000),
            expense(date(2026, 1, 10), 3000),
        ]
        assert calculate_daily_average_spend(transactions) == 300

    def test_top_merchants_primary_category(self):
        transactions = [
            expense(date(2026, 1, 1), 300, TransactionCategory.DINING, merchant="Swiggy"),
            expense(date(2026, 1, 2), 200, TransactionCategory.DINING, merchant="Swiggy"),
            expense(date(2026, 1, 3), 900, TransactionCategory.GROCERIES, merchant="Swiggy"),
            expense(date(2026, 1, 4), 100, TransactionCategory.TRANSPORT, merchant="Uber"),
        ]
        top = get_top_merchants(transactions)
        assert top[0] == {
            "merchant": "Swiggy",
            "total_amount": 1400,
            "transaction_count": 3,
            "average_amount": pytest.approx(466.67),
            "primary_category": "Dining",
        }
        assert top[1]["merchant"] == "Uber"


class TestOneTimeExpenses:
    """Tests for separate_one_time_expenses()."""

    def test_threshold_inclusive(self):
        transactions = [
            expense(date(2026, 1, 5), 50000, TransactionCategory.TRAVEL),
            expense(date(2026, 1, 6), 60000, TransactionCategory.SHOPPING),
            expense(date(2026, 1, 7), 4999),
        ]
        split = separate_one_time_expenses(transactions)
        assert len(split.one_time) == 2
        assert split.one_time_total == 110000
        assert split.regular_total == 4999
        assert split.total_expenses == 114999


# =============================================================================
# Week Tests
# =============================================================================

class TestWeekMetrics:
    """Tests for iso_week_bounds() and calculate_week_metrics()."""

    def test_first_week_starts_in_previous_year(self):
        assert iso_week_bounds(2026, 1) == (date(2025, 12, 29), date(2026, 1, 4))

    def test_week_53(self):
        start, end = iso_week_bounds(2026, 53)
        assert start == date(2026, 12, 28)

    @pytest.mark.parametrize("year,week", [(2025, 53), (2026, 0), (2026, 54)])
    def test_invalid_week(self, year, week):
        with pytest.raises(InvalidPeriodException):
            iso_week_bounds(year, week)

    def test_daily_breakdown_has_seven_days(self):
        transactions = [
            income(date(2026, 1, 1), 10000),
            expense(date(2026, 1, 1), 400),
            expense(date(2026, 1, 3), 600),
            expense(date(2026, 1, 5), 999),  # next week
        ]
        metrics = calculate_week_metrics(transactions, 2026, 1)

        assert metrics["start_date"] == "2025-12-29"
        assert metrics["total_expenses"] == 1000
        assert metrics["transaction_count"] == 3
        assert len(metrics["daily_breakdown"]) == 7
        assert metrics["daily_breakdown"][0]["weekday"] == "Monday"
        assert metrics["daily_breakdown"][3]["net"] == 9600
        assert metrics["daily_breakdown"][6]["transaction_count"] == 0


# =============================================================================
# Year Tests
# =============================================================================

class TestYearOverYear:
    """Tests for calculate_year_over_year()."""

    @pytest.fixture
    def two_years(self):
        return [
            income(date(2025, 3, 1), 100000),
            expense(date(2025, 4, 1), 80000),
            income(date(2026, 2, 1), 60000),
            expense(date(2026, 3, 1), 30000),
        ]

    def test_current_year_annualized(self, two_years):
        yoy = calculate_year_over_year(two_years, 2026, date(2026, 6, 15))
        assert yoy.is_annualized is True
        assert yoy.income_growth == pytest.approx(20)
        assert yoy.expense_growth == pytest.approx(-25)
        assert yoy.savings_growth == pytest.approx(200)

    def test_past_year_not_annualized(self, two_years):
        yoy = calculate_year_over_year(two_years, 2026, date(2027, 2, 1))
        assert yoy.is_annualized is False
        assert yoy.income_growth == pytest.approx(-40)

    def test_no_previous_year(self, two_years):
        yoy = calculate_year_over_year(two_years, 2025, date(2026, 6, 15))
        assert yoy.income_growth == 0
        assert yoy.savings_growth == 0

    def test_year_metrics_has_twelve_months(self, two_years):
        metrics = calculate_year_metrics(two_years, 2026, date(2026, 6, 15))
        assert len(metrics["monthly_trends"]) == 12
        assert metrics["monthly_trends"][0]["income"] == 0
        assert metrics["monthly_trends"][1]["income"] == 60000
        assert metrics["total_expenses"] == 30000


# =============================================================================
# Anomaly Tests
# =============================================================================

class TestAnomalies:
    """Tests for detect_anomalies()."""

    def test_outlier_flagged(self):
        transactions = [
            expense(date(2026, 1, d), 100, TransactionCategory.DINING) for d in range(1, 6)
        ]
        outlier = expense(date(2026, 1, 20), 1000, TransactionCategory.DINING)
        transactions.append(outlier)

        [anomaly] = detect_anomalies(transactions)
        assert anomaly.transaction is outlier
        assert anomaly.category == "Dining"
        assert anomaly.category_mean == 250
        assert anomaly.z_score == pytest.approx(2.236, abs=0.001)

    def test_small_category_cannot_reach_threshold(self):
        transactions = [
            expense(date(2026, 1, 1), 100, TransactionCategory.DINING),
            expense(date(2026, 1, 2), 100, TransactionCategory.DINING),
            expense(date(2026, 1, 3), 1000, TransactionCategory.DINING),
        ]
        assert detect_anomalies(transactions) == []

    def test_below_min_samples(self):
        transactions = [
            expense(date(2026, 1, 1), 100, TransactionCategory.DINING),
            expense(date(2026, 1, 2), 10000, TransactionCategory.DINING),
        ]
        assert detect_anomalies(transactions) == []

    def test_identical_amounts(self):
        transactions = [
            expense(date(2026, 1, d), 100, TransactionCategory.DINING) for d in range(1, 10)
        ]
        assert detect_anomalies(transactions) == []
