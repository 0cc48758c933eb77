"""
Growth Projections and FIRE.

SIP future value uses the annuity-due formula with monthly compounding:

    FV = P * (((1 + r) ** n - 1) / r) * (1 + r)

where r is the monthly rate and n the number of monthly contributions.

FIRE (financial independence) uses the 4% rule: the target corpus is
25x annual expenses.
"""

import math
from dataclasses import dataclass, field
from typing import List

MAX_FIRE_YEARS = 100
FIRE_REQUIRED_HORIZON_YEARS = 30
MAX_PROJECTION_YEARS = 50


@dataclass
class FIRECalculation:
    fire_number: float
    annual_expenses: float
    current_net_worth: float
    progress_percent: float
    years_to_fire: int
    monthly_required: float
    projection: List[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "fire_number": self.fire_number,
            "annual_expenses": round(self.annual_expenses, 2),
            "current_net_worth": round(self.current_net_worth, 2),
            "progress_percent": self.progress_percent,
            "years_to_fire": self.years_to_fire,
            "monthly_required": self.monthly_required,
            "projection": self.projection,
        }


def project_sip_future_value(
    monthly_amount: float,
    expected_annual_return: float,
    years: float,
) -> float:
    """
    Future value of a monthly SIP.

    Args:
        monthly_amount: Contribution per month
        expected_annual_return: Annual return as a percentage (12 = 12%)
        years: Investment horizon
    """
    n = years * 12
    r = expected_annual_return / 100 / 12
    if r == 0:
        return monthly_amount * n
    fv = monthly_amount * (((1 + r) ** n - 1) / r) * (1 + r)
    return round(fv, 2)


def project_emergency_fund_progress(
    current_balance: float,
    monthly_savings: float,
    target_months: int,
    monthly_expense: float,
) -> dict:
    """
    Months of expenses covered now, and months until the target is met.

    `months_to_target` is 0 when already funded and -1 when there are no
    savings to close the gap.
    """
    current_months = round(current_balance / monthly_expense, 2) if monthly_expense > 0 else 0.0
    gap = target_months * monthly_expense - current_balance

    if gap <= 0:
        months_to_target = 0
    elif monthly_savings <= 0:
        months_to_target = -1
    else:
        months_to_target = math.ceil(gap / monthly_savings)

    return {
        "current_months": current_months,
        "target_months": target_months,
        "months_to_target": months_to_target,
    }


def project_net_worth_growth(
    current_net_worth: float,
    monthly_savings: float,
    investment_return_percent: float,
    years: int,
) -> List[dict]:
    """
    Year-by-year net worth projection.

    `invested` grows linearly with savings; `projected` adds the year's
    savings to the running value and then compounds it.
    """
    annual_return = investment_return_percent / 100
    annual_savings = monthly_savings * 12
    value = current_net_worth

    results = []
    for year in range(1, years + 1):
        value = (value + annual_savings) * (1 + annual_return)
        results.append({
            "year": year,
            "invested": round(current_net_worth + annual_savings * year, 2),
            "projected": round(value, 2),
        })
    return results


def required_monthly_savings(
    target_amount: float,
    current_amount: float,
    annual_return_percent: float,
    years: int,
) -> float:
    """Monthly contribution that grows `current_amount` to `target_amount` in `years`."""
    r = annual_return_percent / 100 / 12
    n = years * 12

    if r == 0:
        return max(0.0, (target_amount - current_amount) / n) if n > 0 else 0.0

    compound = (1 + r) ** n
    gap = target_amount - current_amount * compound
    if gap <= 0:
        return 0.0
    return gap / ((compound - 1) / r)


def calculate_fire(
    annual_expenses: float,
    current_net_worth: float,
    monthly_savings: float,
    expected_return_percent: float,
) -> FIRECalculation:
    """
    Calculate FIRE metrics.

    Years to FIRE are found by simulating `nw = nw * (1 + r) + savings`
    each year, capped at 100. The projection runs from year 0 through
    `min(years_to_fire + 5, 50)`. The monthly amount required is for a
    30-year horizon.
    """
    fire_number = 25 * annual_expenses
    progress = round(current_net_worth / fire_number * 100, 2) if fire_number > 0 else 0.0

    annual_return = expected_return_percent / 100
    annual_savings = monthly_savings * 12

    years_to_fire = 0
    if current_net_worth < fire_number:
        net_worth = current_net_worth
        years_to_fire = MAX_FIRE_YEARS
        for year in range(1, MAX_FIRE_YEARS + 1):
            net_worth = net_worth * (1 + annual_return) + annual_savings
            if net_worth >= fire_number:
                years_to_fire = year
                break

    monthly_required = required_monthly_savings(
        fire_number, current_net_worth, expected_return_percent, FIRE_REQUIRED_HORIZON_YEARS
    )

    projection_end = min(years_to_fire + 5, MAX_PROJECTION_YEARS)
    projected = current_net_worth
    projection = [{"year": 0, "net_worth": round(projected, 2), "fire_target": round(fire_number, 2)}]
    for year in range(1, projection_end + 1):
        projected = projected * (1 + annual_return) + annual_savings
        projection.append({
            "year": year,
            "net_worth": round(projected, 2),
            "fire_target": round(fire_number, 2),
        })

    return FIRECalculation(
        fire_number=round(fire_number, 2),
        annual_expenses=annual_expenses,
        current_net_worth=current_net_worth,
        progress_percent=progress,
        years_to_fire=years_to_fire,
        monthly_required=round(monthly_required, 2),
        projection=projection,
    )
