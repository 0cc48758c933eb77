"""
Unit Tests for Savings Goal Progress.

These tests verify:
1. Calendar-month counting and month arithmetic
2. Required monthly saving
3. On-track rules for planned and observed saving
4. Projected completion dates
"""

import pytest
from datetime import date

from src.domain.entities import SavingsGoal
from src.service.finance.savings_goals import (
    add_months,
    calculate_goal_progress,
    calculate_required_monthly,
    months_until,
    project_goal_completion,
)


TODAY = date(2025, 3, 15)


def make_goal(
    target: float = 120000,
    current: float = 30000,
    target_date: date = date(2025, 12, 31),
    contribution: float = 0,
) -> SavingsGoal:
    return SavingsGoal(
        user_id="default",
        name="Emergency fund",
        target_amount=target,
        target_date=target_date,
        current_amount=current,
        monthly_contribution=contribution,
    )


# =============================================================================
# Month Arithmetic Tests
# =============================================================================

class TestMonthArithmetic:
    """Tests for months_until() and add_months()."""

    def test_counts_calendar_months(self):
        assert months_until(date(2025, 12, 31), TODAY) == 9

    def test_same_month_is_zero(self):
        assert months_until(date(2025, 3, 1), date(2025, 3, 31)) == 0

    def test_past_target_clamped(self):
        assert months_until(date(2024, 6, 30), TODAY) == 0

    @pytest.mark.parametrize(
        "start,months,expected",
        [
            (date(2025, 1, 31), 1, date(2025, 2, 28)),
            (date(2024, 1, 31), 1, date(2024, 2, 29)),
            (date(2024, 11, 30), 3, date(2025, 2, 28)),
            (date(2025, 3, 15), 12, date(2026, 3, 15)),
        ],
    )
    def test_add_months_clamps_day(self, start, months, expected):
        assert add_months(start, months) == expected


# =============================================================================
# Progress Tests
# =============================================================================

class TestRequiredMonthly:
    """Tests for calculate_required_monthly()."""

    def test_spreads_remainder(self):
        assert calculate_required_monthly(make_goal(), TODAY) == 10000

    def test_whole_remainder_due_when_no_months_left(self):
        goal = make_goal(target_date=date(2025, 3, 31))
        assert calculate_required_monthly(goal, TODAY) == 90000

    def test_complete_goal_needs_nothing(self):
        assert calculate_required_monthly(make_goal(current=130000), TODAY) == 0


class TestGoalProgress:
    """Tests for calculate_goal_progress()."""

    def test_contribution_covering_requirement(self):
        progress = calculate_goal_progress(make_goal(contribution=10000), TODAY)

        assert progress.percentage_complete == 25
        assert progress.on_track is True
        assert progress.required_monthly == 10000
        assert progress.months_remaining == 9
        assert progress.projected_completion_date == date(2025, 12, 15)

    def test_contribution_short_of_requirement(self):
        progress = calculate_goal_progress(make_goal(contribution=8000), TODAY)

        assert progress.on_track is False
        assert progress.projected_completion_date == date(2026, 3, 15)

    def test_no_contribution_is_off_track(self):
        progress = calculate_goal_progress(make_goal(), TODAY)

        assert progress.on_track is False
        assert progress.projected_completion_date is None

    def test_observed_savings_decide_without_contribution(self):
        progress = calculate_goal_progress(make_goal(), TODAY, monthly_savings=12000)
        assert progress.on_track is True

    def test_observed_savings_must_also_cover(self):
        progress = calculate_goal_progress(
            make_goal(contribution=10000), TODAY, monthly_savings=5000
        )
        assert progress.on_track is False

    def test_complete_goal(self):
        progress = calculate_goal_progress(make_goal(current=150000, contribution=5000), TODAY)

        assert progress.percentage_complete == 100
        assert progress.on_track is True
        assert progress.required_monthly == 0
        assert progress.projected_completion_date is None

    def test_to_dict_formats_dates(self):
        data = calculate_goal_progress(make_goal(contribution=10000), TODAY).to_dict()

        assert data["projected_completion_date"] == "2025-12-15"
        assert data["required_monthly"] == 10000


class TestProjection:
    """Tests for project_goal_completion()."""

    def test_rounds_months_up(self):
        assert project_goal_completion(make_goal(), 7000, TODAY) == date(2026, 4, 15)

    def test_nothing_saved(self):
        assert project_goal_completion(make_goal(), 0, TODAY) is None
