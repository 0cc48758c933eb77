"""
Financial Health Metrics.

Indicators derived from transaction history:
- Emergency fund ratio: months of expenses the current balance covers
- Expense velocity: whether recent spending is rising or falling
- Income profile: average monthly income and its stability
- Financial freedom score: a 0-100 composite of four 25-point parts
- Net worth timeline: bank balance plus investment value per month
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

from src.domain.entities import NWIConfig, Transaction

from .analytics import calculate_monthly_trends
from .nwi import calculate_nwi_adherence


VELOCITY_THRESHOLD_PERCENT = 5.0
VARIABLE_INCOME_STABILITY = 0.7


@dataclass
class ExpenseVelocity:
    current_monthly_avg: float
    previous_monthly_avg: float
    change_percent: float
    trend: str

    def to_dict(self) -> dict:
        return {
            "current_monthly_avg": round(self.current_monthly_avg, 2),
            "previous_monthly_avg": round(self.previous_monthly_avg, 2),
            "change_percent": round(self.change_percent, 2),
            "trend": self.trend,
        }


@dataclass
class IncomeProfile:
    avg_monthly_income: float
    income_stability: float
    is_variable: bool
    last_income_date: Optional[date]

    def to_dict(self) -> dict:
        return {
            "avg_monthly_income": round(self.avg_monthly_income, 2),
            "income_stability": round(self.income_stability, 4),
            "is_variable": self.is_variable,
            "last_income_date": self.last_income_date.isoformat() if self.last_income_date else None,
        }


@dataclass
class FreedomScore:
    score: float
    savings_rate: float
    emergency_fund: float
    nwi_adherence: float
    investment_rate: float

    def to_dict(self) -> dict:
        return {
            "score": round(self.score, 2),
            "breakdown": {
                "savings_rate": self.savings_rate,
                "emergency_fund": self.emergency_fund,
                "nwi_adherence": round(self.nwi_adherence, 2),
                "investment_rate": self.investment_rate,
            },
        }


def calculate_emergency_fund_ratio(current_balance: float, avg_monthly_expense: float) -> float:
    if avg_monthly_expense <= 0:
        return 0.0
    return current_balance / avg_monthly_expense


def calculate_expense_velocity(monthly_expenses: List[float]) -> ExpenseVelocity:
    """
    Compare the newer half of the last 6 months against the older half.

    Args:
        monthly_expenses: Expense totals per month, oldest first

    Returns:
        ExpenseVelocity; trend is "increasing" above +5%, "decreasing"
        below -5%, otherwise "stable"
    """
    recent = monthly_expenses[-6:]
    if len(recent) < 2:
        return ExpenseVelocity(
            current_monthly_avg=recent[0] if recent else 0.0,
            previous_monthly_avg=0.0,
            change_percent=0.0,
            trend="stable",
        )

    midpoint = len(recent) // 2
    previous = recent[:midpoint]
    current = recent[midpoint:]
    current_avg = sum(current) / len(current)
    previous_avg = sum(previous) / len(previous)

    change = (current_avg - previous_avg) / previous_avg * 100 if previous_avg > 0 else 0.0

    trend = "stable"
    if change > VELOCITY_THRESHOLD_PERCENT:
        trend = "increasing"
    elif change < -VELOCITY_THRESHOLD_PERCENT:
        trend = "decreasing"

    return ExpenseVelocity(current_avg, previous_avg, change, trend)


def score_savings_rate(savings_rate: float) -> float:
    if savings_rate > 30:
        return 25
    if savings_rate > 20:
        return 20
    if savings_rate > 10:
        return 15
    if savings_rate > 0:
        return 10
    return 0


def score_emergency_fund(months: float) -> float:
    if months > 6:
        return 25
    if months > 3:
        return 20
    if months > 1:
        return 10
    return 0


def score_investment_rate(investment_rate: float) -> float:
    if investment_rate > 20:
        return 25
    if investment_rate > 15:
        return 20
    if investment_rate > 10:
        return 15
    if investment_rate > 5:
        return 10
    if investment_rate > 0:
        return 5
    return 0


def calculate_freedom_score(
    savings_rate: float,
    emergency_fund_months: float,
    nwi_adherence: float,
    investment_rate: float,
) -> FreedomScore:
    """
    Composite financial freedom score (0-100).

    Each part contributes up to 25 points:
        - Savings rate: >30% -> 25, >20% -> 20, >10% -> 15, >0% -> 10
        - Emergency fund: >6 months -> 25, >3 -> 20, >1 -> 10
        - NWI adherence: adherence / 4, clamped to 0-25
        - Investment rate: >20% -> 25, >15% -> 20, >10% -> 15, >5% -> 10, >0% -> 5
    """
    parts = (
        score_savings_rate(savings_rate),
        score_emergency_fund(emergency_fund_months),
        min(25.0, max(0.0, nwi_adherence / 4)),
        score_investment_rate(investment_rate),
    )
    return FreedomScore(sum(parts), *parts)


def detect_income(transactions: List[Transaction]) -> IncomeProfile:
    """
    Profile income from completed income transactions.

    Stability is `max(0, 1 - CV)` of monthly income totals, where CV is
    the population coefficient of variation. A single month of data is
    treated as fully stable; no income at all is fully variable.
    """
    income = [t for t in transactions if t.is_income and t.is_completed]
    if not income:
        return IncomeProfile(0.0, 0.0, True, None)

    monthly: Dict[Tuple[int, int], float] = defaultdict(float)
    for txn in income:
        monthly[(txn.date.year, txn.date.month)] += txn.amount

    totals = list(monthly.values())
    avg = sum(totals) / len(totals)

    stability = 0.0
    if avg > 0 and len(totals) > 1:
        variance = sum((v - avg) ** 2 for v in totals) / len(totals)
        stability = max(0.0, 1 - variance ** 0.5 / avg)
    elif len(totals) == 1:
        stability = 1.0

    return IncomeProfile(
        avg_monthly_income=avg,
        income_stability=stability,
        is_variable=stability < VARIABLE_INCOME_STABILITY,
        last_income_date=max(t.date for t in income),
    )


def calculate_net_worth_timeline(
    monthly_balances: Dict[str, float],
    investment_values: Dict[str, float],
) -> List[dict]:
    """Merge per-month ("YYYY-MM") bank balances and investment values."""
    months = sorted(set(monthly_balances) | set(investment_values))
    timeline = []
    for month in months:
        bank = monthly_balances.get(month, 0.0)
        invested = investment_values.get(month, 0.0)
        timeline.append({
            "month": month,
            "bank_balance": round(bank, 2),
            "investment_value": round(invested, 2),
            "total_net_worth": round(bank + invested, 2),
        })
    return timeline


def monthly_closing_balances(transactions: List[Transaction]) -> Dict[str, float]:
    """Last recorded balance of each month, keyed "YYYY-MM"."""
    balances: Dict[str, float] = {}
    for txn in sorted(transactions, key=lambda t: t.date):
        if txn.is_completed and txn.balance is not None:
            balances[f"{txn.date.year}-{txn.date.month:02d}"] = txn.balance
    return balances


def current_balance(transactions: List[Transaction]) -> float:
    with_balance = [t for t in transactions if t.is_completed and t.balance is not None]
    if not with_balance:
        return 0.0
    return float(max(with_balance, key=lambda t: t.date).balance)


def calculate_financial_health(
    transactions: List[Transaction],
    nwi_config: Optional[NWIConfig],
    investment_value: float = 0.0,
) -> dict:
    """
    Assemble every health metric for the health endpoint.

    Args:
        transactions: Full transaction history
        nwi_config: The user's NWI config (adherence defaults to 50 without it)
        investment_value: Current value of holdings, added to the latest
            net worth point
    """
    trends = calculate_monthly_trends(transactions)
    months = len(trends)
    avg_expense = sum(m.expenses for m in trends) / months if months else 0.0
    total_income = sum(m.income for m in trends)
    total_expenses = sum(m.expenses for m in trends)

    balance = current_balance(transactions)
    emergency_months = calculate_emergency_fund_ratio(balance, avg_expense)

    invested = sum(t.amount for t in transactions if t.is_completed and t.is_investment)
    savings_rate = (total_income - total_expenses) / total_income * 100 if total_income > 0 else 0.0
    savings_rate = max(-100.0, min(100.0, savings_rate))
    investment_rate = invested / total_income * 100 if total_income > 0 else 0.0

    adherence = calculate_nwi_adherence(transactions, nwi_config)
    freedom = calculate_freedom_score(savings_rate, emergency_months, adherence, investment_rate)

    balances = monthly_closing_balances(transactions)
    investments: Dict[str, float] = {}
    if balances and investment_value:
        investments[max(balances)] = investment_value

    return {
        "emergency_fund_ratio": round(emergency_months, 2),
        "current_balance": round(balance, 2),
        "avg_monthly_expense": round(avg_expense, 2),
        "savings_rate": round(savings_rate, 2),
        "investment_rate": round(investment_rate, 2),
        "nwi_adherence": round(adherence, 2),
        "expense_velocity": calculate_expense_velocity([m.expenses for m in trends]).to_dict(),
        "income_profile": detect_income(transactions).to_dict(),
        "freedom_score": freedom.to_dict(),
        "net_worth_timeline": calculate_net_worth_timeline(balances, investments),
    }
