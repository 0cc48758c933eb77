"""Analytics service - summaries, periods, health and projections."""

from datetime import date
from typing import List, Optional

import structlog

from src.domain.exceptions import InsufficientDataException
from src.domain.interfaces import HoldingRepository, NWIConfigRepository, TransactionRepository
from src.service.finance import (
    calculate_analytics,
    calculate_financial_health,
    calculate_fire,
    calculate_monthly_metrics,
    calculate_week_metrics,
    calculate_year_metrics,
    detect_anomalies,
    get_default_nwi_config,
    project_net_worth_growth,
    project_sip_future_value,
)
from src.service.finance.analytics import Anomaly, calculate_monthly_trends
from src.service.finance.health import current_balance
from src.service.finance.monthly import MonthlyMetrics, latest_month
from src.service.finance.projections import project_emergency_fund_progress

logger = structlog.get_logger(__name__)

DEFAULT_EXPECTED_RETURN = 12.0
EMERGENCY_FUND_TARGET_MONTHS = 6
SIP_HORIZONS = (3, 5, 10)


class AnalyticsService:
    """
    Application service for read-only analytics.

    Every method loads the user's full history and delegates to the pure
    finance calculations.
    """

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        nwi_repository: NWIConfigRepository,
        holding_repository: HoldingRepository,
    ):
        self._txn_repo = transaction_repository
        self._nwi_repo = nwi_repository
        self._holding_repo = holding_repository

    async def get_summary(self, user_id: str) -> dict:
        transactions = await self._txn_repo.list(user_id)
        analytics = calculate_analytics(transactions)

        logger.info("analytics_summary", user_id=user_id, transactions=len(transactions))
        return {"transaction_count": len(transactions), **analytics.to_dict()}

    async def get_monthly(
        self,
        user_id: str,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> MonthlyMetrics:
        """
        Metrics for one month; defaults to the latest month with data.

        Raises:
            InsufficientDataException: If no month is given and there is no data
            InvalidPeriodException: If the month is out of range
        """
        transactions = await self._txn_repo.list(user_id)

        if year is None or month is None:
            latest = latest_month(transactions)
            if latest is None:
                raise InsufficientDataException()
            year, month = latest

        return calculate_monthly_metrics(transactions, year, month)

    async def get_weekly(
        self,
        user_id: str,
        year: Optional[int] = None,
        week: Optional[int] = None,
        today: Optional[date] = None,
    ) -> dict:
        """Metrics for one ISO week; defaults to the current week."""
        if year is None or week is None:
            iso = (today or date.today()).isocalendar()
            year, week = iso[0], iso[1]

        transactions = await self._txn_repo.list(user_id)
        return calculate_week_metrics(transactions, year, week)

    async def get_yearly(
        self,
        user_id: str,
        year: Optional[int] = None,
        today: Optional[date] = None,
    ) -> dict:
        today = today or date.today()
        transactions = await self._txn_repo.list(user_id)
        return calculate_year_metrics(transactions, year or today.year, today)

    async def get_anomalies(self, user_id: str) -> List[Anomaly]:
        transactions = await self._txn_repo.list(user_id)
        anomalies = detect_anomalies(transactions)

        logger.info("anomalies_detected", user_id=user_id, count=len(anomalies))
        return anomalies

    async def get_financial_health(self, user_id: str) -> dict:
        transactions = await self._txn_repo.list(user_id)
        config = await self._nwi_repo.get(user_id) or get_default_nwi_config(user_id)

        return calculate_financial_health(
            transactions,
            config,
            investment_value=await self._investment_value(user_id),
        )

    async def get_projections(
        self,
        user_id: str,
        monthly_sip: Optional[float] = None,
        expected_return: float = DEFAULT_EXPECTED_RETURN,
        years: int = 10,
    ) -> dict:
        """
        SIP, emergency fund, net worth and FIRE projections.

        Monthly savings are the average net savings per month with data.
        `monthly_sip` defaults to those savings (never below zero).
        """
        transactions = await self._txn_repo.list(user_id)
        completed = [t for t in transactions if t.is_completed]

        trends = calculate_monthly_trends(completed)
        months = max(len(trends), 1)
        total_income = sum(m.income for m in trends)
        total_expenses = sum(m.expenses for m in trends)
        monthly_savings = (total_income - total_expenses) / months
        avg_monthly_expense = total_expenses / len(trends) if trends else 0.0

        balance = current_balance(transactions)
        net_worth = balance + await self._investment_value(user_id)

        sip_amount = monthly_sip if monthly_sip is not None else max(monthly_savings, 0.0)

        return {
            "current_net_worth": round(net_worth, 2),
            "monthly_savings": round(monthly_savings, 2),
            "avg_monthly_expense": round(avg_monthly_expense, 2),
            "sip": {
                "monthly_amount": round(sip_amount, 2),
                "expected_return": expected_return,
                "projections": {
                    f"{horizon}y": project_sip_future_value(sip_amount, expected_return, horizon)
                    for horizon in SIP_HORIZONS
                },
            },
            "emergency_fund": project_emergency_fund_progress(
                balance,
                max(monthly_savings, 0.0),
                EMERGENCY_FUND_TARGET_MONTHS,
                avg_monthly_expense,
            ),
            "net_worth_growth": project_net_worth_growth(
                net_worth, max(monthly_savings, 0.0), expected_return, years
            ),
            "fire": calculate_fire(
                avg_monthly_expense * 12,
                net_worth,
                max(monthly_savings, 0.0),
                expected_return,
            ).to_dict(),
        }

    async def _investment_value(self, user_id: str) -> float:
        stocks = await self._holding_repo.list_stocks(user_id)
        funds = await self._holding_repo.list_funds(user_id)
        return sum(s.current_value for s in stocks) + sum(
            f.current_value if f.current_value is not None else f.invested_value for f in funds
        )
