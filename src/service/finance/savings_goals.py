"""
Savings Goal Progress.

A goal has a target amount, a target date, what has been saved so far
and an optional planned monthly contribution. Months are counted by
calendar month, not by day:

    months_remaining = (target.year - today.year) * 12 + (target.month - today.month)

clamped at zero. The required monthly amount spreads what is left over
those months; with no months left the whole remainder is due now.
"""

import calendar
import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from src.domain.entities import SavingsGoal


@dataclass
class SavingsGoalProgress:
    percentage_complete: float
    on_track: bool
    required_monthly: float
    projected_completion_date: Optional[date]
    months_remaining: int

    def to_dict(self) -> dict:
        return {
            "percentage_complete": round(self.percentage_complete, 2),
            "on_track": self.on_track,
            "required_monthly": round(self.required_monthly, 2),
            "projected_completion_date": (
                self.projected_completion_date.isoformat()
                if self.projected_completion_date
                else None
            ),
            "months_remaining": self.months_remaining,
        }


def months_until(target: date, today: date) -> int:
    months = (target.year - today.year) * 12 + (target.month - today.month)
    return max(0, months)


def add_months(start: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def calculate_required_monthly(goal: SavingsGoal, today: date) -> float:
    remaining = goal.target_amount - goal.current_amount
    if remaining <= 0:
        return 0.0

    months = months_until(goal.target_date, today)
    if months <= 0:
        return remaining
    return remaining / months


def project_goal_completion(
    goal: SavingsGoal,
    monthly_savings: float,
    today: date,
) -> Optional[date]:
    """
    Date the goal is reached at a steady monthly saving.

    None when the goal is already met or nothing is being saved.
    """
    if goal.is_complete or monthly_savings <= 0:
        return None

    months_needed = math.ceil((goal.target_amount - goal.current_amount) / monthly_savings)
    return add_months(today, months_needed)


def calculate_goal_progress(
    goal: SavingsGoal,
    today: Optional[date] = None,
    monthly_savings: Optional[float] = None,
) -> SavingsGoalProgress:
    """
    Progress, on-track status and projected completion for one goal.

    A goal is on track when it is complete, or when the planned
    contribution covers the required monthly amount. When an observed
    `monthly_savings` figure is given it must cover the requirement too;
    without a planned contribution it decides on its own.

    Args:
        goal: The savings goal
        today: Reference date (defaults to today)
        monthly_savings: Observed monthly savings, e.g. from transactions
    """
    today = today or date.today()

    percentage = (
        min(100.0, goal.current_amount / goal.target_amount * 100)
        if goal.target_amount > 0
        else 0.0
    )
    months_remaining = months_until(goal.target_date, today)
    remaining = goal.target_amount - goal.current_amount
    required = remaining / months_remaining if months_remaining > 0 else remaining

    if goal.is_complete:
        on_track = True
    elif goal.monthly_contribution > 0:
        on_track = goal.monthly_contribution >= required
        if monthly_savings is not None:
            on_track = on_track and monthly_savings >= required
    elif monthly_savings is not None:
        on_track = monthly_savings >= required
    else:
        on_track = False

    projected = (
        project_goal_completion(goal, goal.monthly_contribution, today)
        if goal.monthly_contribution > 0
        else None
    )

    return SavingsGoalProgress(
        percentage_complete=percentage,
        on_track=on_track,
        required_monthly=max(0.0, required),
        projected_completion_date=projected,
        months_remaining=months_remaining,
    )
