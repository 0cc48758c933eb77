"""
Unit Tests for NAV Parsing and Trailing Returns.
"""

import pytest
from datetime import date

from src.domain.entities import NAVPoint, SchemeSearchResult
from src.service.finance.returns import (
    calculate_trailing_returns,
    lookup_common_scheme_code,
    parse_nav_date,
    parse_nav_history,
    pick_scheme_code,
)
from src.service.finance.settings import FinanceSettings


# =============================================================================
# Parsing Tests
# =============================================================================

class TestParseNavHistory:
    """Tests for parse_nav_history()."""

    def test_parses_and_sorts_newest_first(self):
        points = parse_nav_history([
            {"date": "13-01-2026", "nav": "199.00"},
            {"date": "15-01-2026", "nav": "200.50"},
        ])
        assert points == [
            NAVPoint(date(2026, 1, 15), 200.5),
            NAVPoint(date(2026, 1, 13), 199.0),
        ]

    def test_malformed_records_dropped(self):
        points = parse_nav_history([
            {"date": "2026-01-15", "nav": "1"},
            {"date": "14-01-2026", "nav": "N.A."},
            {"date": "12-01-2026"},
            {"nav": "10"},
            {"date": "11-01-2026", "nav": "98.1"},
        ])
        assert points == [NAVPoint(date(2026, 1, 11), 98.1)]

    def test_parse_nav_date(self):
        assert parse_nav_date("29-02-2024") == date(2024, 2, 29)
        assert parse_nav_date("31-02-2024") is None
        assert parse_nav_date(None) is None


# =============================================================================
# Trailing Return Tests
# =============================================================================

class TestTrailingReturns:
    """Tests for calculate_trailing_returns()."""

    def test_one_and_five_year(self):
        points = [
            NAVPoint(date(2026, 1, 15), 200),
            NAVPoint(date(2025, 1, 15), 160),
            NAVPoint(date(2021, 1, 15), 100),
        ]
        results = {r.period: r for r in calculate_trailing_returns(points)}

        assert set(results) == {"1Y", "5Y"}
        assert results["1Y"].annualized_return == pytest.approx(25.0, abs=0.1)
        assert results["1Y"].start_nav == 160
        assert results["1Y"].end_date == date(2026, 1, 15)
        assert results["5Y"].annualized_return == pytest.approx(14.87, abs=0.05)

    def test_nearest_nav_within_gap_used(self):
        points = [
            NAVPoint(date(2026, 1, 15), 110),
            NAVPoint(date(2025, 1, 2), 100),
            NAVPoint(date(2024, 9, 1), 90),
        ]
        [result] = calculate_trailing_returns(points)
        assert result.start_date == date(2025, 1, 2)

    def test_gap_too_large_skipped(self):
        points = [
            NAVPoint(date(2026, 1, 15), 110),
            NAVPoint(date(2025, 2, 20), 100),
        ]
        assert calculate_trailing_returns(points) == []

    def test_short_span_skipped(self):
        settings = FinanceSettings(nav_max_gap_days=400)
        points = [
            NAVPoint(date(2026, 1, 15), 110),
            NAVPoint(date(2025, 10, 15), 100),
        ]
        assert calculate_trailing_returns(points, settings) == []

    def test_leap_day_target(self):
        points = [
            NAVPoint(date(2024, 2, 29), 121),
            NAVPoint(date(2023, 2, 28), 110),
        ]
        [result] = calculate_trailing_returns(points)
        assert result.period == "1Y"
        assert result.start_date == date(2023, 2, 28)

    def test_insufficient_history(self):
        assert calculate_trailing_returns([NAVPoint(date(2026, 1, 1), 10)]) == []
        assert calculate_trailing_returns([]) == []


# =============================================================================
# Scheme Lookup Tests
# =============================================================================

class TestSchemeLookup:
    """Tests for lookup_common_scheme_code() and pick_scheme_code()."""

    def test_common_scheme_substring(self):
        assert lookup_common_scheme_code("Parag Parikh Flexi Cap Fund - Direct Growth") == 122639
        assert lookup_common_scheme_code("Unknown Fund") is None

    def test_exact_name_preferred(self):
        results = [
            SchemeSearchResult(1, "Axis Bluechip Fund - Direct Plan - Growth"),
            SchemeSearchResult(2, "Axis Bluechip Fund"),
        ]
        assert pick_scheme_code("axis bluechip fund", results) == 2

    def test_direct_growth_preferred(self):
        results = [
            SchemeSearchResult(1, "Axis Bluechip Fund - Regular Plan - IDCW"),
            SchemeSearchResult(2, "Axis Bluechip Fund - Direct Plan - Growth"),
        ]
        assert pick_scheme_code("Axis Bluechip", results) == 2

    def test_first_result_fallback(self):
        results = [
            SchemeSearchResult(7, "Axis Bluechip Fund - Regular Plan - IDCW"),
            SchemeSearchResult(8, "Axis Bluechip Fund - Regular Plan - Bonus"),
        ]
        assert pick_scheme_code("Axis Bluechip", results) == 7

    def test_no_results(self):
        assert pick_scheme_code("Axis Bluechip", []) is None
