"""
Notification Builders.

Each builder inspects data and returns the notifications that should
exist. Deduplication against already-stored notifications happens in
the application layer using each notification's `dedup_key`:

- Budget breach: `budget:{name}:{severity}` within 24 hours
- Renewal alert: `renewal:{subscription_id}` within 24 hours
- Weekly digest: `weekly` within 144 hours (6 days)
"""

from datetime import date, timedelta
from typing import Dict, List, Optional

from src.domain.entities import (
    BudgetCategory,
    MutualFundHolding,
    Notification,
    NotificationSeverity,
    NotificationType,
    StockHolding,
    Subscription,
    Transaction,
)

from .formatting import RUPEE, format_short
from .settings import FinanceSettings, finance_settings


DEFAULT_DEDUP_HOURS = 24
DIGEST_DEDUP_HOURS = 144
DIGEST_DEDUP_KEY = "weekly"


def dedup_window_hours(notification_type: NotificationType) -> int:
    if notification_type == NotificationType.WEEKLY_DIGEST:
        return DIGEST_DEDUP_HOURS
    return DEFAULT_DEDUP_HOURS


def build_budget_breach_notifications(
    user_id: str,
    budgets: List[BudgetCategory],
    month_transactions: List[Transaction],
    settings: FinanceSettings = finance_settings,
) -> List[Notification]:
    """
    Compare this month's spend against each budget.

    Spend at or above `breach_warning_ratio` of the budget produces a
    warning; at or above the full budget, a critical alert. Budgets of
    zero are ignored.
    """
    lookup = {c: b.name for b in budgets for c in b.transaction_categories}
    spent: Dict[str, float] = {}
    for txn in month_transactions:
        if not (txn.is_expense and txn.is_completed):
            continue
        name = lookup.get(txn.category.value, txn.category.value)
        spent[name] = spent.get(name, 0.0) + abs(txn.amount)

    notifications: List[Notification] = []
    for budget in budgets:
        if budget.budget_amount <= 0:
            continue
        amount = spent.get(budget.name, 0.0)
        ratio = amount / budget.budget_amount
        if ratio < settings.breach_warning_ratio:
            continue

        exceeded = ratio >= 1
        severity = NotificationSeverity.CRITICAL if exceeded else NotificationSeverity.WARNING
        percent = round(ratio * 100)
        spent_text = f"{RUPEE}{format_short(amount)}"
        budget_text = f"{RUPEE}{format_short(budget.budget_amount)}"

        if exceeded:
            title = f"{budget.name} budget exceeded"
            message = (
                f"You've spent {spent_text} on {budget.name} "
                f"vs {budget_text} budget ({percent}%)"
            )
        else:
            title = f"{budget.name} budget nearing limit"
            message = (
                f"You've used {percent}% of your {budget.name} budget "
                f"({spent_text} / {budget_text})"
            )

        notifications.append(
            Notification(
                user_id=user_id,
                type=NotificationType.BUDGET_BREACH,
                title=title,
                message=message,
                severity=severity,
                action_url="/budget",
                dedup_key=f"budget:{budget.name}:{severity.value}",
            )
        )

    return notifications


def _day_label(days_until: int) -> str:
    if days_until <= 0:
        return "today"
    if days_until == 1:
        return "tomorrow"
    return f"in {days_until} days"


def build_renewal_notifications(
    user_id: str,
    subscriptions: List[Subscription],
    today: date,
    settings: FinanceSettings = finance_settings,
) -> List[Notification]:
    """Reminders for active subscriptions due within the renewal window."""
    horizon = today + timedelta(days=settings.renewal_window_days)
    notifications: List[Notification] = []

    for sub in subscriptions:
        if not sub.is_active or not (today <= sub.next_expected <= horizon):
            continue
        label = _day_label((sub.next_expected - today).days)
        notifications.append(
            Notification(
                user_id=user_id,
                type=NotificationType.RENEWAL_ALERT,
                title=f"{sub.name} renewing {label}",
                message=(
                    f"Your {sub.name} subscription "
                    f"({RUPEE}{format_short(sub.amount)}/{sub.frequency.value}) renews {label}"
                ),
                severity=NotificationSeverity.INFO,
                action_url="/subscriptions",
                dedup_key=f"renewal:{sub.id}",
            )
        )

    return notifications


def build_weekly_digest(
    user_id: str,
    week_transactions: List[Transaction],
    stocks: Optional[List[StockHolding]] = None,
    funds: Optional[List[MutualFundHolding]] = None,
) -> Notification:
    """
    Summarize the past week: spend, top 3 categories, savings rate and
    portfolio value with its overall change.
    """
    total_spent = 0.0
    total_income = 0.0
    by_category: Dict[str, float] = {}
    for txn in week_transactions:
        if not txn.is_completed:
            continue
        amount = abs(txn.amount)
        if txn.is_expense:
            total_spent += amount
            by_category[txn.category.value] = by_category.get(txn.category.value, 0.0) + amount
        elif txn.is_income:
            total_income += amount

    top = sorted(by_category.items(), key=lambda item: item[1], reverse=True)[:3]

    portfolio_value = 0.0
    portfolio_invested = 0.0
    for stock in stocks or []:
        portfolio_value += stock.current_value
        portfolio_invested += stock.invested_value
    for fund in funds or []:
        portfolio_value += fund.current_value or 0.0
        portfolio_invested += fund.invested_value

    lines = [f"Total spent this week: {RUPEE}{format_short(total_spent)}"]
    if top:
        lines.append(
            "Top categories: "
            + ", ".join(f"{name} ({RUPEE}{format_short(amount)})" for name, amount in top)
        )
    if total_income > 0:
        savings_rate = round((total_income - total_spent) / total_income * 100)
        lines.append(f"Savings rate: {savings_rate}%")
    if portfolio_value > 0:
        change = (
            (portfolio_value - portfolio_invested) / portfolio_invested * 100
            if portfolio_invested > 0
            else 0.0
        )
        sign = "+" if change >= 0 else ""
        lines.append(f"Portfolio: {RUPEE}{format_short(portfolio_value)} ({sign}{change:.1f}%)")

    return Notification(
        user_id=user_id,
        type=NotificationType.WEEKLY_DIGEST,
        title="Your weekly financial digest",
        message=" • ".join(lines),
        severity=NotificationSeverity.INFO,
        action_url="/dashboard",
        dedup_key=DIGEST_DEDUP_KEY,
    )
