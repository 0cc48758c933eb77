"""Insight service - cache-first AI analysis with stale fallback."""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import structlog

from src.application.dto import InsightResponse
from src.core.config import Settings, settings as app_settings
from src.core.metrics import record_insight
from src.domain.entities import AIInsight, InsightType
from src.domain.exceptions import (
    DomainException,
    InsightUnavailableException,
    InsufficientDataException,
)
from src.domain.interfaces import (
    BudgetRepository,
    HoldingRepository,
    InsightGeneratorClient,
    InsightRepository,
    TransactionRepository,
)
from src.service.finance import build_insight_prompt, parse_insight_response

logger = structlog.get_logger(__name__)

BUDGET_TYPES = (InsightType.MONTHLY_BUDGET, InsightType.WEEKLY_BUDGET)
PORTFOLIO_TYPES = (InsightType.INVESTMENT_INSIGHTS, InsightType.PLANNER_RECOMMENDATION)


class InsightService:
    """
    Application service for AI insights.

    Reads are served from the cache while it is fresh. When a refresh
    fails, the last cached insight is returned marked as stale; only
    when nothing is cached does the failure reach the caller.
    """

    def __init__(
        self,
        insight_repository: InsightRepository,
        transaction_repository: TransactionRepository,
        budget_repository: BudgetRepository,
        holding_repository: HoldingRepository,
        generator: InsightGeneratorClient,
        settings: Settings = app_settings,
    ):
        self._insight_repo = insight_repository
        self._txn_repo = transaction_repository
        self._budget_repo = budget_repository
        self._holding_repo = holding_repository
        self._generator = generator
        self._max_age = timedelta(hours=settings.insight_staleness_hours)
        self._keep = settings.insight_max_per_type

    async def get_insight(
        self,
        user_id: str,
        insight_type: InsightType,
        now: Optional[datetime] = None,
    ) -> InsightResponse:
        """
        Return a fresh cached insight or generate a new one.

        Raises:
            InsightUnavailableException: If generation failed, including for
                lack of data, and nothing is cached
        """
        log = logger.bind(user_id=user_id, insight_type=insight_type.value)
        cached = await self._insight_repo.latest(user_id, insight_type)

        if cached is not None and not cached.is_stale(self._max_age, now):
            record_insight(insight_type.value, "cached")
            log.info("insight_cache_hit")
            return InsightResponse.from_entity(cached, from_cache=True)

        try:
            insight = await self._generate(user_id, insight_type)
        except DomainException as e:
            if cached is None:
                record_insight(insight_type.value, "failed")
                log.warning("insight_unavailable", error=e.message)
                raise InsightUnavailableException(insight_type.value, e.message)

            record_insight(insight_type.value, "stale_fallback")
            log.warning("insight_stale_fallback", error=e.message)
            return InsightResponse.from_entity(
                cached,
                from_cache=True,
                stale=True,
                warning=f"AI refresh failed, showing cached analysis: {e.message}",
            )

        return InsightResponse.from_entity(insight)

    async def regenerate(self, user_id: str, insight_type: InsightType) -> InsightResponse:
        """
        Force a new insight, ignoring the cache.

        Raises:
            InsufficientDataException: If the type needs transactions and there are none
            InsightGenerationException: If the provider fails
        """
        try:
            insight = await self._generate(user_id, insight_type)
        except DomainException:
            record_insight(insight_type.value, "failed")
            raise

        return InsightResponse.from_entity(insight)

    async def _generate(self, user_id: str, insight_type: InsightType) -> AIInsight:
        transactions = await self._txn_repo.list(user_id)
        if insight_type.requires_transactions and not transactions:
            raise InsufficientDataException()

        prompt = build_insight_prompt(
            insight_type,
            transactions,
            extra=await self._extra_context(user_id, insight_type),
        )
        text = await self._generator.complete(prompt.messages())
        content, sections = parse_insight_response(text)

        insight = AIInsight(
            user_id=user_id,
            type=insight_type,
            content=content,
            sections=sections,
            data_points=prompt.data_points,
        )
        await self._insight_repo.save(insight)
        pruned = await self._insight_repo.prune(user_id, insight_type, self._keep)

        record_insight(insight_type.value, "generated")
        logger.info(
            "insight_generated",
            user_id=user_id,
            insight_type=insight_type.value,
            data_points=prompt.data_points,
            has_sections=sections is not None,
            pruned=pruned,
        )
        return insight

    async def _extra_context(self, user_id: str, insight_type: InsightType) -> Dict[str, Any]:
        extra: Dict[str, Any] = {}

        if insight_type in BUDGET_TYPES:
            budgets = await self._budget_repo.list(user_id)
            extra["Monthly budgets"] = {b.name: b.budget_amount for b in budgets}

        if insight_type in PORTFOLIO_TYPES:
            stocks = await self._holding_repo.list_stocks(user_id)
            funds = await self._holding_repo.list_funds(user_id)
            extra["Stocks"] = [
                {"symbol": s.symbol, "invested": s.invested_value, "current": s.current_value}
                for s in stocks
            ]
            extra["Mutual funds"] = [
                {"name": f.scheme_name, "invested": f.invested_value, "current": f.current_value}
                for f in funds
            ]

        return extra
