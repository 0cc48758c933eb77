"""
XIRR and CAGR Calculations.

XIRR is the annualized rate r that makes the net present value of a
set of dated cash flows zero:

    sum(amount_i / (1 + r) ** years_i) = 0

where years_i is the distance from the first flow in 365.25-day years.
Outflows (money invested) are negative; inflows (redemptions, current
value) are positive.

The root is found with Newton's method starting at 10%. When the
derivative vanishes or Newton does not converge, a bisection search
over [-0.99, 10] (widened to 100) takes over.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

DAYS_PER_YEAR = 365.25

MIN_RATE = -0.99
MAX_RATE = 100.0


@dataclass(frozen=True)
class CashFlow:
    date: date
    amount: float


def _years_between(start: date, end: date) -> float:
    return (end - start).days / DAYS_PER_YEAR


def npv(cash_flows: Sequence[CashFlow], rate: float) -> float:
    """Net present value at `rate`, discounted to the first flow's date."""
    base = cash_flows[0].date
    return sum(
        cf.amount / (1 + rate) ** _years_between(base, cf.date) for cf in cash_flows
    )


def npv_derivative(cash_flows: Sequence[CashFlow], rate: float) -> float:
    base = cash_flows[0].date
    total = 0.0
    for cf in cash_flows:
        years = _years_between(base, cf.date)
        if years == 0:
            continue
        total -= years * cf.amount / (1 + rate) ** (years + 1)
    return total


def _bisection(
    cash_flows: Sequence[CashFlow],
    tolerance: float,
    max_iterations: int,
) -> Optional[float]:
    low, high = MIN_RATE, 10.0
    f_low = npv(cash_flows, low)
    f_high = npv(cash_flows, high)

    if f_low * f_high > 0:
        high = MAX_RATE
        f_high = npv(cash_flows, high)
        if f_low * f_high > 0:
            return None

    for _ in range(max_iterations):
        mid = (low + high) / 2
        f_mid = npv(cash_flows, mid)

        if abs(f_mid) < tolerance or (high - low) / 2 < tolerance:
            return round(mid, 4)

        if f_mid * f_low < 0:
            high = mid
        else:
            low = mid
            f_low = f_mid

    return None


def calculate_xirr(
    cash_flows: List[CashFlow],
    guess: float = 0.1,
    tolerance: float = 1e-7,
    max_iterations: int = 100,
) -> Optional[float]:
    """
    Calculate XIRR for irregular cash flows.

    Args:
        cash_flows: Dated flows; negative for outflows, positive for inflows
        guess: Starting rate for Newton's method
        tolerance: Convergence tolerance on the rate
        max_iterations: Newton iterations before falling back to bisection

    Returns:
        Annual rate as a decimal rounded to 4 places (0.1234 = 12.34%),
        or None when fewer than two flows, flows of one sign only, or
        no root can be found
    """
    if len(cash_flows) < 2:
        return None

    ordered = sorted(cash_flows, key=lambda cf: cf.date)
    if not any(cf.amount < 0 for cf in ordered) or not any(cf.amount > 0 for cf in ordered):
        return None

    rate = guess
    for _ in range(max_iterations):
        f = npv(ordered, rate)
        f_prime = npv_derivative(ordered, rate)

        if abs(f_prime) < 1e-12:
            return _bisection(ordered, tolerance, max_iterations)

        new_rate = rate - f / f_prime
        if abs(new_rate - rate) < tolerance:
            return round(new_rate, 4)

        rate = max(MIN_RATE, min(new_rate, MAX_RATE))

    return _bisection(ordered, tolerance, max_iterations * 2)


def calculate_investment_xirr(
    investments: List[CashFlow],
    current_value: float,
    current_date: date,
) -> Optional[float]:
    """
    XIRR of a series of investments valued at `current_value` today.

    Investment amounts may be given as positive numbers; they are
    treated as outflows.

    Returns:
        XIRR as a percentage rounded to 2 places (12.5 = 12.5%), or None
    """
    if not investments or current_value <= 0:
        return None

    flows = [CashFlow(date=inv.date, amount=-abs(inv.amount)) for inv in investments]
    flows.append(CashFlow(date=current_date, amount=current_value))

    rate = calculate_xirr(flows)
    if rate is None:
        return None
    return round(rate * 100, 2)


def calculate_cagr(
    invested_amount: float,
    current_value: float,
    start_date: date,
    end_date: date,
) -> float:
    """
    Compound annual growth rate as a percentage rounded to 2 places.

    Returns 0 for non-positive amounts or periods shorter than 0.01 years.
    """
    if invested_amount <= 0 or current_value <= 0:
        return 0.0

    years = _years_between(start_date, end_date)
    if years < 0.01:
        return 0.0

    cagr = ((current_value / invested_amount) ** (1 / years) - 1) * 100
    return round(cagr, 2)
