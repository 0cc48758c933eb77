"""
Budget Pro-rating and Rollover.

Budgets are monthly amounts attached to budget categories, each of
which groups one or more transaction categories. Mid-month, the full
monthly budget is a poor yardstick, so every status figure is based on
a pro-rated budget:

    prorated_budget = budget * elapsed_days / days_in_month
    projected_spent = spent / elapsed_days * days_in_month

Elapsed days depend on where the month sits relative to today:
- Current month: today's day of month
- Past month: the whole month
- Future month: zero (nothing is projected)
"""

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from src.domain.entities import BudgetCategory, Transaction

from .formatting import format_inr
from .settings import FinanceSettings, finance_settings


BUDGET_CATEGORY_MAPPING: Dict[str, List[str]] = {
    "Food & Dining": ["Dining", "Groceries"],
    "Transport": ["Transport", "Fuel"],
    "Shopping": ["Shopping"],
    "Bills & Utilities": ["Utilities", "Rent"],
    "Entertainment": ["Entertainment", "Subscription"],
    "Healthcare": ["Healthcare", "Insurance"],
    "Education": ["Education"],
    "Fitness": ["Fitness", "Personal Care"],
    "Travel": ["Travel"],
    "Others": ["Miscellaneous", "Uncategorized", "Gifts", "Charity"],
}

DEFAULT_BUDGETS: Dict[str, float] = {
    "Food & Dining": 15000,
    "Transport": 5000,
    "Shopping": 10000,
    "Bills & Utilities": 8000,
    "Entertainment": 5000,
    "Healthcare": 3000,
    "Education": 5000,
    "Fitness": 3000,
    "Travel": 10000,
    "Others": 5000,
}

BUDGET_STATUS_ON_TRACK = "on_track"
BUDGET_STATUS_WARNING = "warning"
BUDGET_STATUS_EXCEEDED = "exceeded"


@dataclass
class BudgetPeriod:
    year: int
    month: int
    days_in_month: int
    elapsed_days: int
    remaining_days: int
    is_partial: bool
    label: str

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "days_in_month": self.days_in_month,
            "elapsed_days": self.elapsed_days,
            "remaining_days": self.remaining_days,
            "is_partial": self.is_partial,
            "label": self.label,
        }


@dataclass
class BudgetSpending:
    """Pro-rated spending figures for one budget category."""

    name: str
    budget: float
    rollover: float
    effective_budget: float
    prorated_budget: float
    actual_spent: float
    projected_spent: float
    remaining: float
    percent_used: float
    is_overspent: bool
    status: str
    transaction_count: int

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "budget": round(self.budget, 2),
            "rollover": round(self.rollover, 2),
            "effective_budget": round(self.effective_budget, 2),
            "prorated_budget": round(self.prorated_budget, 2),
            "actual_spent": round(self.actual_spent, 2),
            "projected_spent": round(self.projected_spent, 2),
            "remaining": round(self.remaining, 2),
            "percent_used": round(self.percent_used, 2),
            "is_overspent": self.is_overspent,
            "status": self.status,
            "transaction_count": self.transaction_count,
        }


def build_default_budgets(user_id: str) -> List[BudgetCategory]:
    """Seed budget categories for a user who has none yet."""
    return [
        BudgetCategory(
            user_id=user_id,
            name=name,
            budget_amount=amount,
            transaction_categories=list(BUDGET_CATEGORY_MAPPING[name]),
        )
        for name, amount in DEFAULT_BUDGETS.items()
    ]


def get_budget_category_for(
    transaction_category: str,
    mapping: Optional[Dict[str, List[str]]] = None,
) -> Optional[str]:
    """Reverse lookup: which budget category covers a transaction category."""
    for budget_name, categories in (mapping or BUDGET_CATEGORY_MAPPING).items():
        if transaction_category in categories:
            return budget_name
    return None


def get_budget_period(year: int, month: int, today: date) -> BudgetPeriod:
    """
    Work out how much of a month has elapsed relative to `today`.

    Args:
        year: Budget year
        month: Budget month (1-12)
        today: Reference date, injected so results are reproducible

    Returns:
        BudgetPeriod with elapsed/remaining days and a display label
    """
    days_in_month = calendar.monthrange(year, month)[1]

    if (year, month) == (today.year, today.month):
        elapsed = today.day
    elif (year, month) < (today.year, today.month):
        elapsed = days_in_month
    else:
        elapsed = 0

    return BudgetPeriod(
        year=year,
        month=month,
        days_in_month=days_in_month,
        elapsed_days=elapsed,
        remaining_days=days_in_month - elapsed,
        is_partial=elapsed < days_in_month,
        label=f"{calendar.month_name[month]} {year} ({elapsed} of {days_in_month} days)",
    )


def get_budget_status(
    spent: float,
    budget: float,
    settings: FinanceSettings = finance_settings,
) -> str:
    """
    Classify spend against the full budget.

    Ratios below the warning threshold are on track, even when they sit
    between the on-track and warning thresholds.
    """
    if budget <= 0:
        return BUDGET_STATUS_EXCEEDED if spent > 0 else BUDGET_STATUS_ON_TRACK

    ratio = spent / budget
    if ratio >= settings.budget_exceeded_threshold:
        return BUDGET_STATUS_EXCEEDED
    if ratio >= settings.budget_warning_threshold:
        return BUDGET_STATUS_WARNING
    return BUDGET_STATUS_ON_TRACK


def _spent_by_budget(
    transactions: List[Transaction],
    budgets: List[BudgetCategory],
) -> Dict[str, Dict[str, float]]:
    spent: Dict[str, Dict[str, float]] = {
        b.name: {"amount": 0.0, "count": 0} for b in budgets
    }
    lookup = {
        category: b.name for b in budgets for category in b.transaction_categories
    }
    for txn in transactions:
        if not (txn.is_completed and txn.is_expense):
            continue
        name = lookup.get(txn.category.value)
        if name is None:
            continue
        spent[name]["amount"] += abs(txn.amount)
        spent[name]["count"] += 1
    return spent


def calculate_rollover(
    budget_amount: float,
    previous_spent: float,
    settings: FinanceSettings = finance_settings,
) -> float:
    """
    Amount carried forward from the previous month.

    Unspent budget carries forward, overspend is not deducted, and the
    carry is capped at `rollover_cap_ratio * budget_amount`.
    """
    leftover = budget_amount - previous_spent
    if leftover <= 0:
        return 0.0
    return min(leftover, budget_amount * settings.rollover_cap_ratio)


def calculate_budget_spending(
    transactions: List[Transaction],
    budgets: List[BudgetCategory],
    period: BudgetPeriod,
    previous_transactions: Optional[List[Transaction]] = None,
    settings: FinanceSettings = finance_settings,
) -> List[BudgetSpending]:
    """
    Compute pro-rated spending for every budget category.

    Args:
        transactions: Transactions inside the budget month
        budgets: The user's budget categories
        period: Elapsed-day information for the month
        previous_transactions: Transactions of the previous month; when
            given, unspent budget rolls over into this month
        settings: Finance settings (uses defaults if not provided)

    Returns:
        One BudgetSpending per budget category, in input order
    """
    spent = _spent_by_budget(transactions, budgets)
    previous = (
        _spent_by_budget(previous_transactions, budgets)
        if previous_transactions is not None
        else None
    )

    results: List[BudgetSpending] = []
    for budget in budgets:
        rollover = 0.0
        if previous is not None:
            rollover = calculate_rollover(
                budget.budget_amount, previous[budget.name]["amount"], settings
            )
        effective = budget.budget_amount + rollover

        actual = spent[budget.name]["amount"]
        elapsed = period.elapsed_days
        days = period.days_in_month

        prorated = effective * elapsed / days if days else 0.0
        projected = actual / elapsed * days if elapsed > 0 else 0.0

        results.append(
            BudgetSpending(
                name=budget.name,
                budget=budget.budget_amount,
                rollover=rollover,
                effective_budget=effective,
                prorated_budget=prorated,
                actual_spent=actual,
                projected_spent=projected,
                remaining=effective - actual,
                percent_used=(actual / effective * 100) if effective > 0 else 0.0,
                is_overspent=actual > prorated,
                status=get_budget_status(actual, effective, settings),
                transaction_count=int(spent[budget.name]["count"]),
            )
        )

    return results


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


@dataclass
class BudgetSuggestion:
    name: str
    current_budget: float
    avg_3_month: float
    suggested_budget: float
    reasoning: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "current_budget": round(self.current_budget, 2),
            "avg_3_month": self.avg_3_month,
            "suggested_budget": self.suggested_budget,
            "reasoning": self.reasoning,
        }


def suggestion_window_start(today: date, months: int = 3) -> date:
    year, month = today.year, today.month
    for _ in range(months):
        year, month = previous_month(year, month)
    return date(year, month, 1)


def suggest_budgets(
    transactions: List[Transaction],
    budgets: List[BudgetCategory],
    today: date,
) -> dict:
    """
    Suggest budgets from recent spending.

    Completed expenses from the first day of the month three months back
    are averaged per month with data. Per budget category:
        - average above twice the budget: suggest 80% of the average
        - average above the budget: suggest 90% of the average
        - otherwise keep the current budget

    Expenses whose category no budget covers count towards "Others"
    when that budget exists.
    """
    start = suggestion_window_start(today)
    names = {b.name for b in budgets}
    lookup = {
        category: b.name for b in budgets for category in b.transaction_categories
    }

    monthly: Dict[tuple, Dict[str, float]] = {}
    for txn in transactions:
        if not (txn.is_completed and txn.is_expense) or txn.date < start:
            continue
        category = txn.category.value
        if category in names:
            name = category
        else:
            name = lookup.get(category) or ("Others" if "Others" in names else None)
        if name is None:
            continue
        by_name = monthly.setdefault((txn.date.year, txn.date.month), {})
        by_name[name] = by_name.get(name, 0.0) + abs(txn.amount)

    month_count = max(len(monthly), 1)
    totals: Dict[str, float] = {}
    for by_name in monthly.values():
        for name, amount in by_name.items():
            totals[name] = totals.get(name, 0.0) + amount

    suggestions: List[BudgetSuggestion] = []
    for budget in budgets:
        current = budget.budget_amount
        average = round(totals.get(budget.name, 0.0) / month_count)

        if average > current * 2:
            suggested = round(average * 0.8)
            share = f", {round(average / current * 100)}% of your budget" if current > 0 else ""
            reasoning = (
                f"Your 3-month average is {format_inr(average, 0)}{share}. "
                f"{format_inr(suggested, 0)} is a realistic target with a 20% cut "
                "from actual spending."
            )
        elif average > current:
            suggested = round(average * 0.9)
            reasoning = (
                f"Your 3-month average of {format_inr(average, 0)} exceeds your budget. "
                f"{format_inr(suggested, 0)} is a target with a 10% cut."
            )
        else:
            suggested = current
            reasoning = (
                f"Your spending of {format_inr(average, 0)}/mo is within budget. No change needed."
                if current > 0
                else "No spending recorded and no budget set."
            )

        suggestions.append(
            BudgetSuggestion(
                name=budget.name,
                current_budget=current,
                avg_3_month=average,
                suggested_budget=suggested,
                reasoning=reasoning,
            )
        )

    return {
        "suggestions": [s.to_dict() for s in suggestions],
        "total_current": round(sum(s.current_budget for s in suggestions), 2),
        "total_suggested": round(sum(s.suggested_budget for s in suggestions), 2),
        "months_analyzed": month_count,
    }
