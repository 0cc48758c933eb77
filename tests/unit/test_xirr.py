"""
Unit Tests for XIRR and CAGR.

Known-answer cases use 1461-day spans (four 365.25-day years) so the
expected rates are exact:
- 1000 growing to 1000 * 1.1^4 is 10% a year
- 1000 growing to 16000 is 100% a year
"""

import pytest
from datetime import date, timedelta

from src.service.finance.xirr import (
    CashFlow,
    calculate_cagr,
    calculate_investment_xirr,
    calculate_xirr,
    npv,
)


START = date(2020, 1, 1)


# =============================================================================
# XIRR Tests
# =============================================================================

class TestXIRR:
    """Tests for calculate_xirr()."""

    def test_single_period_ten_percent(self):
        flows = [
            CashFlow(START, -1000),
            CashFlow(START + timedelta(days=1461), 1000 * 1.1 ** 4),
        ]
        # 1461 days = 4 x 365.25
        assert calculate_xirr(flows) == pytest.approx(0.1, abs=1e-4)

    def test_negative_return(self):
        flows = [
            CashFlow(START, -1000),
            CashFlow(START + timedelta(days=1461), 1000 * 0.9 ** 4),
        ]
        assert calculate_xirr(flows) == pytest.approx(-0.1, abs=1e-4)

    def test_multiple_investments(self):
        """Result must zero the NPV of the flows."""
        flows = [
            CashFlow(date(2023, 1, 10), -5000),
            CashFlow(date(2023, 4, 10), -5000),
            CashFlow(date(2023, 7, 10), -5000),
            CashFlow(date(2024, 1, 10), 16500),
        ]
        rate = calculate_xirr(flows)
        assert rate is not None
        assert rate > 0
        assert abs(npv(sorted(flows, key=lambda f: f.date), rate)) < 5

    def test_unsorted_input(self):
        flows = [
            CashFlow(START + timedelta(days=1461), 1000 * 1.1 ** 4),
            CashFlow(START, -1000),
        ]
        assert calculate_xirr(flows) == pytest.approx(0.1, abs=1e-4)

    def test_rounded_to_four_places(self):
        flows = [
            CashFlow(date(2023, 1, 10), -5000),
            CashFlow(date(2023, 4, 10), -5000),
            CashFlow(date(2024, 1, 10), 11000),
        ]
        rate = calculate_xirr(flows)
        assert rate == round(rate, 4)

    def test_fewer_than_two_flows(self):
        assert calculate_xirr([CashFlow(START, -1000)]) is None
        assert calculate_xirr([]) is None

    def test_requires_both_signs(self):
        flows = [CashFlow(START, -1000), CashFlow(START + timedelta(days=30), -500)]
        assert calculate_xirr(flows) is None

        flows = [CashFlow(START, 1000), CashFlow(START + timedelta(days=30), 500)]
        assert calculate_xirr(flows) is None


class TestInvestmentXIRR:
    """Tests for calculate_investment_xirr()."""

    def test_percentage_result(self):
        investments = [CashFlow(START, 1000)]
        result = calculate_investment_xirr(
            investments, 1000 * 1.1 ** 4, START + timedelta(days=1461)
        )
        assert result == pytest.approx(10.0, abs=0.01)

    def test_positive_amounts_treated_as_outflows(self):
        as_positive = calculate_investment_xirr(
            [CashFlow(START, 1000)], 1200, START + timedelta(days=730)
        )
        as_negative = calculate_investment_xirr(
            [CashFlow(START, -1000)], 1200, START + timedelta(days=730)
        )
        assert as_positive == as_negative

    def test_no_investments(self):
        assert calculate_investment_xirr([], 1000, START) is None

    def test_non_positive_current_value(self):
        assert calculate_investment_xirr([CashFlow(START, 1000)], 0, START) is None


# =============================================================================
# CAGR Tests
# =============================================================================

class TestCAGR:
    """Tests for calculate_cagr()."""

    def test_doubling_every_year(self):
        end = START + timedelta(days=1461)
        assert calculate_cagr(1000, 16000, START, end) == pytest.approx(100.0, abs=0.01)

    def test_known_value(self):
        end = START + timedelta(days=1461)  # exactly 4 years of 365.25 days
        assert calculate_cagr(100000, 146410, START, end) == 10.0

    def test_non_positive_inputs(self):
        end = START + timedelta(days=365)
        assert calculate_cagr(0, 1000, START, end) == 0
        assert calculate_cagr(1000, 0, START, end) == 0
        assert calculate_cagr(-5, 1000, START, end) == 0

    def test_too_short_period(self):
        assert calculate_cagr(1000, 2000, START, START + timedelta(days=3)) == 0
