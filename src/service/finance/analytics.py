"""
Spending Analytics.

Aggregations over a user's transaction history:
- Overall analytics (totals, averages, breakdowns, top lists)
- Monthly trends
- ISO week metrics with a Monday-Sunday daily breakdown
- Year metrics with year-over-year growth
- One-time expense separation
- Per-category anomaly detection by z-score

Only completed transactions are counted anywhere in this module.
"""

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from src.domain.entities import Transaction, TransactionType
from src.domain.exceptions import InvalidPeriodException

from .monthly import format_month_label, validate_month
from .settings import FinanceSettings, finance_settings


def _completed(transactions: List[Transaction]) -> List[Transaction]:
    return [t for t in transactions if t.is_completed]


def _total(transactions: List[Transaction], txn_type: TransactionType) -> float:
    return sum(t.amount for t in transactions if t.type == txn_type)


def _percentage(part: float, whole: float) -> float:
    return part / whole * 100 if whole > 0 else 0.0


def _clamp_rate(rate: float) -> float:
    return max(-100.0, min(100.0, rate))


def _savings_rate(income: float, expenses: float) -> float:
    return _clamp_rate(_percentage(income - expenses, income))


@dataclass
class MonthlyTrend:
    year: int
    month: int
    label: str
    income: float
    expenses: float
    savings: float
    savings_rate: float
    transaction_count: int

    def to_dict(self) -> dict:
        return {
            "month": f"{self.year}-{self.month:02d}",
            "label": self.label,
            "income": round(self.income, 2),
            "expenses": round(self.expenses, 2),
            "savings": round(self.savings, 2),
            "savings_rate": round(self.savings_rate, 2),
            "transaction_count": self.transaction_count,
        }


@dataclass
class OneTimeSplit:
    one_time: List[Transaction]
    regular: List[Transaction]
    one_time_total: float
    regular_total: float
    total_expenses: float

    def to_dict(self) -> dict:
        return {
            "one_time": [t.to_dict() for t in self.one_time],
            "one_time_total": round(self.one_time_total, 2),
            "regular_total": round(self.regular_total, 2),
            "total_expenses": round(self.total_expenses, 2),
        }


@dataclass
class Anomaly:
    transaction: Transaction
    category: str
    category_mean: float
    category_stdev: float
    z_score: float

    def to_dict(self) -> dict:
        return {
            "transaction": self.transaction.to_dict(),
            "category": self.category,
            "category_mean": round(self.category_mean, 2),
            "category_stdev": round(self.category_stdev, 2),
            "z_score": round(self.z_score, 2),
        }


@dataclass
class YearOverYear:
    income_growth: float
    expense_growth: float
    savings_growth: float
    is_annualized: bool

    def to_dict(self) -> dict:
        return {
            "income_growth": round(self.income_growth, 2),
            "expense_growth": round(self.expense_growth, 2),
            "savings_growth": round(self.savings_growth, 2),
            "is_annualized": self.is_annualized,
        }


@dataclass
class Analytics:
    total_income: float
    total_expenses: float
    net_savings: float
    savings_rate: float
    average_monthly_income: float
    average_monthly_expense: float
    average_monthly_savings: float
    daily_average_spend: float
    category_breakdown: List[dict] = field(default_factory=list)
    payment_method_breakdown: List[dict] = field(default_factory=list)
    monthly_trends: List[MonthlyTrend] = field(default_factory=list)
    top_expense_categories: List[dict] = field(default_factory=list)
    top_merchants: List[dict] = field(default_factory=list)
    recurring_expenses: float = 0.0
    one_time: Optional[OneTimeSplit] = None

    def to_dict(self) -> dict:
        return {
            "total_income": round(self.total_income, 2),
            "total_expenses": round(self.total_expenses, 2),
            "net_savings": round(self.net_savings, 2),
            "savings_rate": round(self.savings_rate, 2),
            "average_monthly_income": round(self.average_monthly_income, 2),
            "average_monthly_expense": round(self.average_monthly_expense, 2),
            "average_monthly_savings": round(self.average_monthly_savings, 2),
            "daily_average_spend": round(self.daily_average_spend, 2),
            "category_breakdown": self.category_breakdown,
            "payment_method_breakdown": self.payment_method_breakdown,
            "monthly_trends": [m.to_dict() for m in self.monthly_trends],
            "top_expense_categories": self.top_expense_categories,
            "top_merchants": self.top_merchants,
            "recurring_expenses": round(self.recurring_expenses, 2),
            "one_time": self.one_time.to_dict() if self.one_time else None,
        }


def calculate_category_breakdown(
    transactions: List[Transaction],
    txn_type: TransactionType = TransactionType.EXPENSE,
) -> List[dict]:
    """Amount, share and count per category for one transaction type, largest first."""
    selected = [t for t in _completed(transactions) if t.type == txn_type]
    total = sum(t.amount for t in selected)

    grouped: Dict[str, List[Transaction]] = defaultdict(list)
    for txn in selected:
        grouped[txn.category.value].append(txn)

    breakdown = []
    for category, txns in grouped.items():
        amount = sum(t.amount for t in txns)
        breakdown.append({
            "category": category,
            "amount": round(amount, 2),
            "percentage": round(_percentage(amount, total), 2),
            "transaction_count": len(txns),
        })
    return sorted(breakdown, key=lambda b: b["amount"], reverse=True)


def calculate_payment_method_breakdown(transactions: List[Transaction]) -> List[dict]:
    completed = _completed(transactions)
    total = sum(t.amount for t in completed)

    grouped: Dict[str, List[Transaction]] = defaultdict(list)
    for txn in completed:
        grouped[txn.payment_method.value].append(txn)

    breakdown = []
    for method, txns in grouped.items():
        amount = sum(t.amount for t in txns)
        breakdown.append({
            "method": method,
            "amount": round(amount, 2),
            "percentage": round(_percentage(amount, total), 2),
            "transaction_count": len(txns),
        })
    return sorted(breakdown, key=lambda b: b["amount"], reverse=True)


def calculate_monthly_trends(transactions: List[Transaction]) -> List[MonthlyTrend]:
    """Income, expenses and savings per calendar month, oldest first."""
    grouped: Dict[Tuple[int, int], List[Transaction]] = defaultdict(list)
    for txn in _completed(transactions):
        grouped[(txn.date.year, txn.date.month)].append(txn)

    trends = []
    for (year, month), txns in sorted(grouped.items()):
        income = _total(txns, TransactionType.INCOME)
        expenses = _total(txns, TransactionType.EXPENSE)
        trends.append(
            MonthlyTrend(
                year=year,
                month=month,
                label=format_month_label(year, month),
                income=income,
                expenses=expenses,
                savings=income - expenses,
                savings_rate=_savings_rate(income, expenses),
                transaction_count=len(txns),
            )
        )
    return trends


def calculate_daily_average_spend(transactions: List[Transaction]) -> float:
    """
    Total expenses divided by calendar days from the first to the last
    transaction of any type (inclusive).
    """
    completed = _completed(transactions)
    expenses = [t for t in completed if t.is_expense]
    if not expenses:
        return 0.0

    dates = [t.date for t in completed]
    days = max(1, (max(dates) - min(dates)).days + 1)
    return sum(t.amount for t in expenses) / days


def get_top_expense_categories(transactions: List[Transaction], limit: int = 5) -> List[dict]:
    expenses = [t for t in _completed(transactions) if t.is_expense]
    total = sum(t.amount for t in expenses)

    grouped: Dict[str, List[Transaction]] = defaultdict(list)
    for txn in expenses:
        grouped[txn.category.value].append(txn)

    summaries = []
    for category, txns in grouped.items():
        amount = sum(t.amount for t in txns)
        summaries.append({
            "category": category,
            "total_amount": round(amount, 2),
            "transaction_count": len(txns),
            "average_amount": round(amount / len(txns), 2),
            "percentage_of_total": round(_percentage(amount, total), 2),
        })
    summaries.sort(key=lambda s: s["total_amount"], reverse=True)
    return summaries[:limit]


def get_top_merchants(transactions: List[Transaction], limit: int = 10) -> List[dict]:
    """Merchants by total amount, each with its most frequent category."""
    grouped: Dict[str, List[Transaction]] = defaultdict(list)
    for txn in _completed(transactions):
        if txn.merchant:
            grouped[txn.merchant].append(txn)

    summaries = []
    for merchant, txns in grouped.items():
        amount = sum(t.amount for t in txns)
        primary = Counter(t.category.value for t in txns).most_common(1)[0][0]
        summaries.append({
            "merchant": merchant,
            "total_amount": round(amount, 2),
            "transaction_count": len(txns),
            "average_amount": round(amount / len(txns), 2),
            "primary_category": primary,
        })
    summaries.sort(key=lambda s: s["total_amount"], reverse=True)
    return summaries[:limit]


def separate_one_time_expenses(
    transactions: List[Transaction],
    settings: FinanceSettings = finance_settings,
) -> OneTimeSplit:
    """Split expenses at the one-time threshold (amount >= threshold is one-time)."""
    expenses = [t for t in _completed(transactions) if t.is_expense]
    threshold = settings.one_time_expense_threshold
    one_time = [t for t in expenses if t.amount >= threshold]
    regular = [t for t in expenses if t.amount < threshold]
    return OneTimeSplit(
        one_time=one_time,
        regular=regular,
        one_time_total=sum(t.amount for t in one_time),
        regular_total=sum(t.amount for t in regular),
        total_expenses=sum(t.amount for t in expenses),
    )


def calculate_analytics(
    transactions: List[Transaction],
    settings: FinanceSettings = finance_settings,
) -> Analytics:
    """
    Calculate overall analytics across a transaction history.

    Monthly averages are taken over the months that have any completed
    transaction. Savings rate is clamped to [-100, 100].
    """
    completed = _completed(transactions)
    total_income = _total(completed, TransactionType.INCOME)
    total_expenses = _total(completed, TransactionType.EXPENSE)

    trends = calculate_monthly_trends(completed)
    months = len(trends)

    def _avg(values: List[float]) -> float:
        return sum(values) / months if months else 0.0

    return Analytics(
        total_income=total_income,
        total_expenses=total_expenses,
        net_savings=total_income - total_expenses,
        savings_rate=_savings_rate(total_income, total_expenses),
        average_monthly_income=_avg([m.income for m in trends]),
        average_monthly_expense=_avg([m.expenses for m in trends]),
        average_monthly_savings=_avg([m.savings for m in trends]),
        daily_average_spend=calculate_daily_average_spend(completed),
        category_breakdown=calculate_category_breakdown(completed),
        payment_method_breakdown=calculate_payment_method_breakdown(completed),
        monthly_trends=trends,
        top_expense_categories=get_top_expense_categories(completed, 5),
        top_merchants=get_top_merchants(completed, 10),
        recurring_expenses=sum(t.amount for t in completed if t.is_expense and t.recurring),
        one_time=separate_one_time_expenses(completed, settings),
    )


# === Weeks ===

def iso_week_bounds(year: int, week: int) -> Tuple[date, date]:
    """Monday and Sunday of an ISO week."""
    try:
        monday = date.fromisocalendar(year, week, 1)
    except ValueError:
        raise InvalidPeriodException(f"Invalid ISO week: {year}-W{week:02d}")
    return monday, monday + timedelta(days=6)


def calculate_week_metrics(
    transactions: List[Transaction],
    year: int,
    week: int,
) -> dict:
    """
    Metrics for one ISO week (Monday to Sunday).

    The daily breakdown always has 7 entries, including days without
    transactions.
    """
    start, end = iso_week_bounds(year, week)
    in_week = [t for t in _completed(transactions) if start <= t.date <= end]

    income = _total(in_week, TransactionType.INCOME)
    expenses = _total(in_week, TransactionType.EXPENSE)

    daily = []
    for offset in range(7):
        day = start + timedelta(days=offset)
        day_txns = [t for t in in_week if t.date == day]
        day_income = _total(day_txns, TransactionType.INCOME)
        day_expenses = _total(day_txns, TransactionType.EXPENSE)
        daily.append({
            "date": day.isoformat(),
            "weekday": day.strftime("%A"),
            "income": round(day_income, 2),
            "expenses": round(day_expenses, 2),
            "net": round(day_income - day_expenses, 2),
            "transaction_count": len(day_txns),
        })

    return {
        "year": year,
        "week": week,
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "total_income": round(income, 2),
        "total_expenses": round(expenses, 2),
        "net_savings": round(income - expenses, 2),
        "savings_rate": round(_savings_rate(income, expenses), 2),
        "transaction_count": len(in_week),
        "daily_breakdown": daily,
        "top_categories": get_top_expense_categories(in_week, 5),
    }


# === Years ===

def calculate_year_over_year(
    transactions: List[Transaction],
    year: int,
    today: date,
) -> YearOverYear:
    """
    Growth of `year` over `year - 1`.

    When `year` is the current, unfinished year its totals are
    annualized by `12 / months_elapsed` before comparing. Savings growth
    is measured against the absolute previous savings.
    """
    completed = _completed(transactions)
    current = [t for t in completed if t.date.year == year]
    previous = [t for t in completed if t.date.year == year - 1]

    months_elapsed = today.month if year == today.year else 12
    factor = 12 / months_elapsed if months_elapsed < 12 else 1.0

    current_income = _total(current, TransactionType.INCOME) * factor
    current_expenses = _total(current, TransactionType.EXPENSE) * factor
    previous_income = _total(previous, TransactionType.INCOME)
    previous_expenses = _total(previous, TransactionType.EXPENSE)

    current_savings = current_income - current_expenses
    previous_savings = previous_income - previous_expenses

    def _growth(now: float, before: float) -> float:
        return (now - before) / before * 100 if before > 0 else 0.0

    savings_growth = (
        (current_savings - previous_savings) / abs(previous_savings) * 100
        if previous_savings != 0
        else 0.0
    )

    return YearOverYear(
        income_growth=_growth(current_income, previous_income),
        expense_growth=_growth(current_expenses, previous_expenses),
        savings_growth=savings_growth,
        is_annualized=factor > 1,
    )


def calculate_year_metrics(
    transactions: List[Transaction],
    year: int,
    today: date,
) -> dict:
    """Year totals, all 12 monthly trends and year-over-year growth."""
    validate_month(year, 1)
    in_year = [t for t in _completed(transactions) if t.date.year == year]
    income = _total(in_year, TransactionType.INCOME)
    expenses = _total(in_year, TransactionType.EXPENSE)

    by_month = {(m.year, m.month): m for m in calculate_monthly_trends(in_year)}
    trends = [
        by_month.get(
            (year, month),
            MonthlyTrend(year, month, format_month_label(year, month), 0.0, 0.0, 0.0, 0.0, 0),
        ).to_dict()
        for month in range(1, 13)
    ]

    return {
        "year": year,
        "total_income": round(income, 2),
        "total_expenses": round(expenses, 2),
        "net_savings": round(income - expenses, 2),
        "savings_rate": round(_savings_rate(income, expenses), 2),
        "transaction_count": len(in_year),
        "monthly_trends": trends,
        "top_categories": get_top_expense_categories(in_year, 5),
        "year_over_year": calculate_year_over_year(transactions, year, today).to_dict(),
    }


# === Anomalies ===

def detect_anomalies(
    transactions: List[Transaction],
    settings: FinanceSettings = finance_settings,
) -> List[Anomaly]:
    """
    Flag unusually large expenses within their category.

    For each category with at least `anomaly_min_samples` expenses and a
    non-zero population standard deviation, an expense is anomalous when
    `(amount - mean) / stdev >= anomaly_z_threshold`.

    Returns:
        Anomalies sorted by z-score, highest first
    """
    grouped: Dict[str, List[Transaction]] = defaultdict(list)
    for txn in _completed(transactions):
        if txn.is_expense:
            grouped[txn.category.value].append(txn)

    anomalies: List[Anomaly] = []
    for category, txns in grouped.items():
        if len(txns) < settings.anomaly_min_samples:
            continue
        amounts = [t.amount for t in txns]
        mean = sum(amounts) / len(amounts)
        stdev = (sum((a - mean) ** 2 for a in amounts) / len(amounts)) ** 0.5
        if stdev == 0:
            continue
        for txn in txns:
            z = (txn.amount - mean) / stdev
            if z >= settings.anomaly_z_threshold:
                anomalies.append(Anomaly(txn, category, mean, stdev, z))

    anomalies.sort(key=lambda a: a.z_score, reverse=True)
    return anomalies
