"""
Mutual Fund NAV Parsing and Trailing Returns.

The NAV provider reports history as `{"date": "DD-MM-YYYY", "nav": "123.45"}`
records. Trailing returns annualize the change between the latest NAV
and the NAV nearest to `latest_date - N years`:

    total = (latest_nav - start_nav) / start_nav
    annualized = ((1 + total) ** (1 / actual_years) - 1) * 100

A period is skipped when the nearest NAV is more than `nav_max_gap_days`
from its target date, or when the actual span is shorter than
`nav_min_years` (annualizing a few weeks is meaningless).
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from src.domain.entities import NAVPoint, SchemeSearchResult

from .settings import FinanceSettings, finance_settings


DAYS_PER_YEAR = 365.25

COMMON_SCHEME_CODES: Dict[str, int] = {
    # Nifty 50 index funds
    "UTI Nifty 50 Index Fund": 120716,
    "HDFC Index Fund-NIFTY 50 Plan": 101525,
    "ICICI Prudential Nifty 50 Index Fund": 120837,
    # Flexi cap
    "Parag Parikh Flexi Cap Fund": 122639,
    "HDFC Flexi Cap Fund": 100056,
    # Small cap
    "Nippon India Small Cap Fund": 113177,
    "SBI Small Cap Fund": 125497,
    # Mid cap
    "HDFC Mid-Cap Opportunities Fund": 100090,
    "Kotak Emerging Equity Fund": 105091,
}


@dataclass(frozen=True)
class TrailingReturn:
    period: str
    years: int
    annualized_return: float
    start_nav: float
    end_nav: float
    start_date: date
    end_date: date

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "years": self.years,
            "annualized_return": self.annualized_return,
            "start_nav": self.start_nav,
            "end_nav": self.end_nav,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
        }


def parse_nav_date(value: str) -> Optional[date]:
    """Parse a `DD-MM-YYYY` date; None when malformed."""
    try:
        return datetime.strptime(value, "%d-%m-%Y").date()
    except (TypeError, ValueError):
        return None


def parse_nav_history(entries: Iterable[Dict[str, Any]]) -> List[NAVPoint]:
    """
    Convert raw provider records to NAV points, newest first.

    Records with an unparseable date or NAV are dropped.
    """
    points: List[NAVPoint] = []
    for entry in entries:
        parsed_date = parse_nav_date(entry.get("date", ""))
        if parsed_date is None:
            continue
        try:
            nav = float(entry.get("nav"))
        except (TypeError, ValueError):
            continue
        if nav != nav:  # NaN
            continue
        points.append(NAVPoint(date=parsed_date, nav=nav))

    points.sort(key=lambda p: p.date, reverse=True)
    return points


def _years_before(value: date, years: int) -> date:
    try:
        return value.replace(year=value.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return value.replace(year=value.year - years, day=28)


def calculate_trailing_returns(
    points: List[NAVPoint],
    settings: FinanceSettings = finance_settings,
) -> List[TrailingReturn]:
    """
    Calculate annualized trailing returns for the configured periods.

    Args:
        points: NAV history (any order)
        settings: Finance settings (periods, gap tolerance, minimum span)

    Returns:
        One TrailingReturn per period that has usable data
    """
    if len(points) < 2:
        return []

    ordered = sorted(points, key=lambda p: p.date, reverse=True)
    latest = ordered[0]
    results: List[TrailingReturn] = []

    for years in settings.trailing_periods:
        target = _years_before(latest.date, years)

        closest = ordered[-1]
        closest_gap = abs((closest.date - target).days)
        for point in ordered:
            gap = abs((point.date - target).days)
            if gap < closest_gap:
                closest, closest_gap = point, gap

        if closest_gap > settings.nav_max_gap_days:
            continue

        actual_years = (latest.date - closest.date).days / DAYS_PER_YEAR
        if actual_years < settings.nav_min_years:
            continue
        if closest.nav <= 0:
            continue

        total_return = (latest.nav - closest.nav) / closest.nav
        annualized = ((1 + total_return) ** (1 / actual_years) - 1) * 100

        results.append(
            TrailingReturn(
                period=f"{years}Y",
                years=years,
                annualized_return=round(annualized, 2),
                start_nav=closest.nav,
                end_nav=latest.nav,
                start_date=closest.date,
                end_date=latest.date,
            )
        )

    return results


def lookup_common_scheme_code(scheme_name: str) -> Optional[int]:
    """Match a scheme name against well-known funds, substring in either direction."""
    needle = scheme_name.lower()
    for name, code in COMMON_SCHEME_CODES.items():
        known = name.lower()
        if known in needle or needle in known:
            return code
    return None


def pick_scheme_code(
    scheme_name: str,
    results: List[SchemeSearchResult],
) -> Optional[int]:
    """
    Choose the best search result for a scheme name.

    Preference: exact name, then a Direct plan Growth option, then the
    first result.
    """
    if not results:
        return None

    needle = scheme_name.lower()
    for result in results:
        if result.scheme_name.lower() == needle:
            return result.scheme_code

    for result in results:
        name = result.scheme_name.lower()
        if "direct" in name and "growth" in name:
            return result.scheme_code

    return results[0].scheme_code
