"""
Personal Finance Calculations

Pure functions over domain entities: no I/O, no database, no HTTP.
"""

from .settings import FinanceSettings, finance_settings
from .nwi import (
    calculate_nwi_adherence,
    calculate_nwi_split,
    classify_transaction,
    get_default_nwi_config,
    validate_nwi_config,
)
from .budget import (
    BUDGET_CATEGORY_MAPPING,
    DEFAULT_BUDGETS,
    build_default_budgets,
    calculate_budget_spending,
    calculate_rollover,
    get_budget_category_for,
    get_budget_period,
    get_budget_status,
)
from .categorizer import apply_rules, categorize, resolve_category, suggest_categories
from .recurring import detect_recurring_transactions, upcoming_patterns
from .xirr import CashFlow, calculate_cagr, calculate_investment_xirr, calculate_xirr
from .returns import (
    COMMON_SCHEME_CODES,
    calculate_trailing_returns,
    lookup_common_scheme_code,
    parse_nav_history,
    pick_scheme_code,
)
from .monthly import calculate_monthly_metrics, get_month_transactions
from .analytics import (
    calculate_analytics,
    calculate_week_metrics,
    calculate_year_metrics,
    detect_anomalies,
    separate_one_time_expenses,
)
from .health import calculate_financial_health, calculate_freedom_score
from .projections import calculate_fire, project_net_worth_growth, project_sip_future_value
from .formatting import format_compact_inr, format_inr
from .learn import QUIZZES, TOPICS, score_quiz
from .notifications import (
    build_budget_breach_notifications,
    build_renewal_notifications,
    build_weekly_digest,
)
from .insights import build_insight_prompt, parse_insight_response

__all__ = [
    # Settings
    "FinanceSettings",
    "finance_settings",
    # NWI
    "calculate_nwi_adherence",
    "calculate_nwi_split",
    "classify_transaction",
    "get_default_nwi_config",
    "validate_nwi_config",
    # Budgets
    "BUDGET_CATEGORY_MAPPING",
    "DEFAULT_BUDGETS",
    "build_default_budgets",
    "calculate_budget_spending",
    "calculate_rollover",
    "get_budget_category_for",
    "get_budget_period",
    "get_budget_status",
    # Categorization
    "apply_rules",
    "categorize",
    "resolve_category",
    "suggest_categories",
    # Recurring
    "detect_recurring_transactions",
    "upcoming_patterns",
    # Returns
    "CashFlow",
    "calculate_cagr",
    "calculate_investment_xirr",
    "calculate_xirr",
    "COMMON_SCHEME_CODES",
    "calculate_trailing_returns",
    "lookup_common_scheme_code",
    "parse_nav_history",
    "pick_scheme_code",
    # Analytics
    "calculate_monthly_metrics",
    "get_month_transactions",
    "calculate_analytics",
    "calculate_week_metrics",
    "calculate_year_metrics",
    "detect_anomalies",
    "separate_one_time_expenses",
    # Health and projections
    "calculate_financial_health",
    "calculate_freedom_score",
    "calculate_fire",
    "project_net_worth_growth",
    "project_sip_future_value",
    # Formatting
    "format_compact_inr",
    "format_inr",
    # Learn
    "QUIZZES",
    "TOPICS",
    "score_quiz",
    # Notifications
    "build_budget_breach_notifications",
    "build_renewal_notifications",
    "build_weekly_digest",
    # Insights
    "build_insight_prompt",
    "parse_insight_response",
]
