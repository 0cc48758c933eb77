"""
Monthly Metrics.

Balances come from the running `balance` recorded on transactions,
while income and expense totals come from transaction amounts, so the
two can disagree (e.g. transfers between own accounts change the
balance but are neither income nor expense).

Opening balance of a month:
1. The last completed balance dated before the month, if any
2. Otherwise, worked back from the first transaction of the month:
   income -> balance - amount, expense -> balance + amount,
   anything else -> balance
3. Otherwise 0

Closing balance is the last completed balance within the month, or the
opening balance when the month has none.
"""

import calendar
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from src.domain.entities import Transaction, TransactionType
from src.domain.exceptions import InvalidPeriodException


MIN_YEAR = 1900
MAX_YEAR = 2100


@dataclass
class MonthlyMetrics:
    year: int
    month: int
    month_label: str
    opening_balance: float
    closing_balance: float
    total_income: float
    total_expenses: float
    net_change: float
    net_savings: float
    growth_rate: float
    savings_rate: float
    transaction_count: int
    income_transaction_count: int
    expense_transaction_count: int
    start_date: date
    end_date: date
    is_partial_month: bool
    days_in_period: int

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "month_label": self.month_label,
            "opening_balance": self.opening_balance,
            "closing_balance": self.closing_balance,
            "total_income": self.total_income,
            "total_expenses": self.total_expenses,
            "net_change": self.net_change,
            "net_savings": self.net_savings,
            "growth_rate": self.growth_rate,
            "savings_rate": self.savings_rate,
            "transaction_count": self.transaction_count,
            "income_transaction_count": self.income_transaction_count,
            "expense_transaction_count": self.expense_transaction_count,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "is_partial_month": self.is_partial_month,
            "days_in_period": self.days_in_period,
        }


def validate_month(year: int, month: int) -> None:
    """Raise InvalidPeriodException for out-of-range years or months."""
    if year < MIN_YEAR or year > MAX_YEAR:
        raise InvalidPeriodException(
            f"Invalid year: {year}. Expected {MIN_YEAR}-{MAX_YEAR}."
        )
    if month < 1 or month > 12:
        raise InvalidPeriodException(f"Invalid month: {month}. Expected 1-12.")


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a calendar month."""
    validate_month(year, month)
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def format_month_label(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def get_month_transactions(
    transactions: List[Transaction],
    year: int,
    month: int,
) -> List[Transaction]:
    validate_month(year, month)
    return [t for t in transactions if t.date.year == year and t.date.month == month]


def _sorted_completed(transactions: List[Transaction]) -> List[Transaction]:
    return sorted((t for t in transactions if t.is_completed), key=lambda t: t.date)


def get_month_opening_balance(
    transactions: List[Transaction],
    year: int,
    month: int,
) -> float:
    completed = _sorted_completed(transactions)
    if not completed:
        return 0.0

    first_day, _ = month_bounds(year, month)
    before = [t for t in completed if t.date < first_day and t.balance is not None]
    if before:
        return float(before[-1].balance)

    this_month = get_month_transactions(completed, year, month)
    if not this_month:
        return 0.0

    first = next((t for t in this_month if t.balance is not None), this_month[0])
    balance = float(first.balance or 0.0)
    if first.type == TransactionType.INCOME:
        return balance - first.amount
    if first.type == TransactionType.EXPENSE:
        return balance + first.amount
    return balance


def get_month_closing_balance(
    transactions: List[Transaction],
    year: int,
    month: int,
) -> float:
    this_month = get_month_transactions(_sorted_completed(transactions), year, month)
    with_balance = [t for t in this_month if t.balance is not None]
    if with_balance:
        return float(with_balance[-1].balance)
    return get_month_opening_balance(transactions, year, month)


def is_partial_month(transactions: List[Transaction], year: int, month: int) -> bool:
    """
    True when the month's data does not span the whole calendar month.

    A month with no transactions is not partial.
    """
    this_month = sorted(get_month_transactions(transactions, year, month), key=lambda t: t.date)
    if not this_month:
        return False
    first_day, last_day = month_bounds(year, month)
    return this_month[0].date != first_day or this_month[-1].date != last_day


def get_month_period_days(transactions: List[Transaction], year: int, month: int) -> int:
    """Inclusive day span from first to last transaction of the month."""
    this_month = sorted(get_month_transactions(transactions, year, month), key=lambda t: t.date)
    if not this_month:
        return 0
    return (this_month[-1].date - this_month[0].date).days + 1


def calculate_monthly_metrics(
    transactions: List[Transaction],
    year: int,
    month: int,
) -> MonthlyMetrics:
    """
    Calculate every metric for one calendar month.

    Growth rate is `net_change / |opening_balance| * 100` (0 when the
    opening balance is 0). Savings rate is `net_savings / income * 100`,
    clamped to [-100, 100]. Currency and percentage values are rounded
    to 2 decimal places.

    Args:
        transactions: Full transaction history (balances before the
            month are needed for the opening balance)
        year: Year (1900-2100)
        month: Month (1-12)

    Raises:
        InvalidPeriodException: If year or month is out of range
    """
    this_month = sorted(get_month_transactions(transactions, year, month), key=lambda t: t.date)

    opening = get_month_opening_balance(transactions, year, month)
    closing = get_month_closing_balance(transactions, year, month)
    net_change = closing - opening

    income = [t for t in this_month if t.is_income and t.is_completed]
    expenses = [t for t in this_month if t.is_expense and t.is_completed]
    total_income = sum(t.amount for t in income)
    total_expenses = sum(t.amount for t in expenses)
    net_savings = total_income - total_expenses

    growth_rate = net_change / abs(opening) * 100 if opening != 0 else 0.0
    savings_rate = net_savings / total_income * 100 if total_income != 0 else 0.0
    savings_rate = max(-100.0, min(100.0, savings_rate))

    if this_month:
        start, end = this_month[0].date, this_month[-1].date
    else:
        start, end = month_bounds(year, month)

    return MonthlyMetrics(
        year=year,
        month=month,
        month_label=format_month_label(year, month),
        opening_balance=round(opening, 2),
        closing_balance=round(closing, 2),
        total_income=round(total_income, 2),
        total_expenses=round(total_expenses, 2),
        net_change=round(net_change, 2),
        net_savings=round(net_savings, 2),
        growth_rate=round(growth_rate, 2),
        savings_rate=round(savings_rate, 2),
        transaction_count=len(this_month),
        income_transaction_count=len(income),
        expense_transaction_count=len(expenses),
        start_date=start,
        end_date=end,
        is_partial_month=is_partial_month(transactions, year, month),
        days_in_period=get_month_period_days(transactions, year, month),
    )


def get_available_months(transactions: List[Transaction]) -> List[Tuple[int, int]]:
    """Distinct (year, month) pairs with completed transactions, oldest first."""
    return sorted({(t.date.year, t.date.month) for t in transactions if t.is_completed})


def latest_month(transactions: List[Transaction]) -> Optional[Tuple[int, int]]:
    months = get_available_months(transactions)
    return months[-1] if months else None
