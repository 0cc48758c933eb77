"""
Income Goal Tracking.

Income is measured over the Indian fiscal year, 1 April to 31 March.
Progress covers completed income transactions in the current fiscal
year, broken down per month and per source (the transaction category).
"""

import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

from src.domain.entities import IncomeGoal, Transaction

FISCAL_YEAR_START_MONTH = 4


@dataclass
class IncomeProgress:
    total_income: float
    fiscal_year_start: date
    fiscal_year_end: date
    monthly_breakdown: List[dict] = field(default_factory=list)
    month_over_month_growth: Optional[float] = None
    income_sources: List[str] = field(default_factory=list)

    @property
    def months_with_data(self) -> int:
        return len(self.monthly_breakdown)

    def to_dict(self) -> dict:
        return {
            "total_income": round(self.total_income, 2),
            "fiscal_year_start": self.fiscal_year_start.isoformat(),
            "fiscal_year_end": self.fiscal_year_end.isoformat(),
            "monthly_breakdown": self.monthly_breakdown,
            "month_over_month_growth": (
                round(self.month_over_month_growth, 2)
                if self.month_over_month_growth is not None
                else None
            ),
            "income_sources": self.income_sources,
            "months_with_data": self.months_with_data,
        }


@dataclass
class IncomeGoalStatus:
    percent_complete: float
    remaining: float
    months_remaining: int
    monthly_required: float
    on_track: bool

    def to_dict(self) -> dict:
        return {
            "percent_complete": round(self.percent_complete, 2),
            "remaining": round(self.remaining, 2),
            "months_remaining": self.months_remaining,
            "monthly_required": round(self.monthly_required, 2),
            "on_track": self.on_track,
        }


def get_fiscal_year_range(today: date) -> Tuple[date, date]:
    start_year = today.year if today.month >= FISCAL_YEAR_START_MONTH else today.year - 1
    return date(start_year, 4, 1), date(start_year + 1, 3, 31)


def calculate_income_progress(
    transactions: List[Transaction],
    today: Optional[date] = None,
) -> IncomeProgress:
    """Income totals for the fiscal year containing `today`."""
    today = today or date.today()
    start, end = get_fiscal_year_range(today)

    monthly: Dict[str, Dict[str, float]] = defaultdict(lambda: defaultdict(float))
    sources: List[str] = []
    total = 0.0

    for txn in sorted(transactions, key=lambda t: t.date):
        if not (txn.is_income and txn.is_completed and start <= txn.date <= end):
            continue
        if txn.amount == 0:
            continue

        source = txn.category.value
        monthly[txn.date.strftime("%Y-%m")][source] += txn.amount
        total += txn.amount
        if source not in sources:
            sources.append(source)

    breakdown = [
        {
            "month": month,
            "total": round(sum(by_source.values()), 2),
            "sources": {name: round(amount, 2) for name, amount in by_source.items()},
        }
        for month, by_source in sorted(monthly.items())
    ]

    growth = None
    if len(breakdown) >= 2:
        previous, current = breakdown[-2]["total"], breakdown[-1]["total"]
        if previous > 0:
            growth = (current - previous) / previous * 100

    return IncomeProgress(
        total_income=total,
        fiscal_year_start=start,
        fiscal_year_end=end,
        monthly_breakdown=breakdown,
        month_over_month_growth=growth,
        income_sources=sources,
    )


def evaluate_income_goal(
    goal: IncomeGoal,
    progress: IncomeProgress,
    today: Optional[date] = None,
) -> IncomeGoalStatus:
    """
    Gap between the goal and income so far.

    Months remaining are counted in 30-day blocks, rounded up. The goal
    is on track when it is met, or when the required monthly income does
    not exceed the average earned per month with data so far.
    """
    today = today or date.today()

    remaining = max(goal.target_amount - progress.total_income, 0.0)
    months_remaining = max(math.ceil((goal.target_date - today).days / 30), 0)
    monthly_required = remaining / months_remaining if months_remaining > 0 else remaining
    percent = (
        min(progress.total_income / goal.target_amount * 100, 100.0)
        if goal.target_amount > 0
        else 0.0
    )

    average_monthly = progress.total_income / max(progress.months_with_data, 1)
    on_track = remaining <= 0 or (months_remaining > 0 and monthly_required <= average_monthly)

    return IncomeGoalStatus(
        percent_complete=percent,
        remaining=remaining,
        months_remaining=months_remaining,
        monthly_required=monthly_required,
        on_track=on_track,
    )
