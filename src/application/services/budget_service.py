"""Budget service - budget amounts, status and NWI configuration."""

import calendar
from dataclasses import replace
from datetime import date
from typing import List, Optional

import structlog

from src.application.dto import BudgetUpdateRequest, NWIConfigUpdateRequest
from src.domain.entities import BudgetCategory, NWIConfig, utcnow
from src.domain.exceptions import (
    BudgetCategoryNotFoundException,
    InvalidBudgetRequestException,
    InvalidNWIConfigException,
)
from src.domain.interfaces import BudgetRepository, NWIConfigRepository, TransactionRepository
from src.service.finance import (
    build_default_budgets,
    calculate_budget_spending,
    calculate_nwi_split,
    get_budget_period,
    get_default_nwi_config,
    validate_nwi_config,
)
from src.service.finance.budget import previous_month, suggest_budgets, suggestion_window_start
from src.service.finance.monthly import validate_month
from src.service.finance.nwi import NWISplit

logger = structlog.get_logger(__name__)


def _month_range(year: int, month: int) -> tuple[date, date]:
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


class BudgetService:
    """
    Application service for budgets and the NWI split.

    Budgets and the NWI config are seeded with defaults the first time a
    user reads them.
    """

    def __init__(
        self,
        budget_repository: BudgetRepository,
        nwi_repository: NWIConfigRepository,
        transaction_repository: TransactionRepository,
    ):
        self._budget_repo = budget_repository
        self._nwi_repo = nwi_repository
        self._txn_repo = transaction_repository

    async def get_budgets(self, user_id: str) -> List[BudgetCategory]:
        budgets = await self._budget_repo.list(user_id)

        if not budgets:
            budgets = build_default_budgets(user_id)
            await self._budget_repo.save_many(budgets)
            logger.info("budgets_seeded", user_id=user_id, count=len(budgets))

        return budgets

    async def update_budgets(self, request: BudgetUpdateRequest) -> List[BudgetCategory]:
        """
        Bulk update budget amounts.

        Unknown names create new budget categories with no mapped
        transaction categories.

        Raises:
            InvalidBudgetRequestException: If any amount is negative
        """
        errors = request.validate()
        if errors:
            raise InvalidBudgetRequestException("; ".join(errors))

        budgets = {b.name: b for b in await self.get_budgets(request.user_id)}
        now = utcnow()
        changed = []

        for name, amount in request.budgets.items():
            if name in budgets:
                budgets[name] = replace(budgets[name], budget_amount=amount, updated_at=now)
            else:
                budgets[name] = BudgetCategory(user_id=request.user_id, name=name, budget_amount=amount)
            changed.append(budgets[name])

        await self._budget_repo.save_many(changed)
        logger.info("budgets_updated", user_id=request.user_id, count=len(changed))

        return list(budgets.values())

    async def update_budget(self, user_id: str, category: str, amount: float) -> BudgetCategory:
        """
        Update one budget category.

        Raises:
            InvalidBudgetRequestException: If the amount is negative
            BudgetCategoryNotFoundException: If the category does not exist
        """
        if amount < 0:
            raise InvalidBudgetRequestException(f"Budget for {category} must be zero or more")

        await self.get_budgets(user_id)
        budget = await self._budget_repo.get_by_name(user_id, category)
        if budget is None:
            raise BudgetCategoryNotFoundException(category)

        updated = replace(budget, budget_amount=amount, updated_at=utcnow())
        await self._budget_repo.save_many([updated])

        logger.info("budget_updated", user_id=user_id, category=category, amount=amount)
        return updated

    async def get_budget_status(
        self,
        user_id: str,
        year: int,
        month: int,
        today: Optional[date] = None,
    ) -> dict:
        """
        Pro-rated spending per budget category for one month, with
        unspent budget rolled over from the previous month.
        """
        validate_month(year, month)
        today = today or date.today()

        budgets = await self.get_budgets(user_id)
        period = get_budget_period(year, month, today)

        start, end = _month_range(year, month)
        transactions = await self._txn_repo.list(user_id, start=start, end=end)

        prev_year, prev_month = previous_month(year, month)
        prev_start, prev_end = _month_range(prev_year, prev_month)
        previous = await self._txn_repo.list(user_id, start=prev_start, end=prev_end)

        spending = calculate_budget_spending(
            transactions,
            budgets,
            period,
            previous_transactions=previous,
        )

        total_budget = sum(s.effective_budget for s in spending)
        total_spent = sum(s.actual_spent for s in spending)

        return {
            "period": period.to_dict(),
            "categories": [s.to_dict() for s in spending],
            "total_budget": round(total_budget, 2),
            "total_spent": round(total_spent, 2),
            "total_remaining": round(total_budget - total_spent, 2),
        }

    async def suggest_budgets(self, user_id: str, today: Optional[date] = None) -> dict:
        """Budget suggestions from the last three months of spending."""
        today = today or date.today()
        budgets = await self.get_budgets(user_id)
        transactions = await self._txn_repo.list(
            user_id, start=suggestion_window_start(today), end=today
        )

        result = suggest_budgets(transactions, budgets, today)
        logger.info(
            "budget_suggestions_built",
            user_id=user_id,
            months_analyzed=result["months_analyzed"],
        )
        return result

    async def get_nwi_config(self, user_id: str) -> NWIConfig:
        config = await self._nwi_repo.get(user_id)

        if config is None:
            config = get_default_nwi_config(user_id)
            await self._nwi_repo.save(config)
            logger.info("nwi_config_seeded", user_id=user_id)

        return config

    async def update_nwi_config(self, request: NWIConfigUpdateRequest) -> NWIConfig:
        """
        Update the NWI configuration.

        Raises:
            InvalidNWIConfigException: If percentages do not sum to 100 or a
                category appears in two buckets
        """
        current = await self.get_nwi_config(request.user_id)

        merged = NWIConfig(
            user_id=request.user_id,
            needs=request.needs or current.needs,
            wants=request.wants or current.wants,
            investments=request.investments or current.investments,
            savings=request.savings if request.savings is not None else current.savings,
            updated_at=utcnow(),
        )

        errors = validate_nwi_config(merged.needs, merged.wants, merged.investments, merged.savings)
        if errors:
            raise InvalidNWIConfigException("; ".join(errors))

        await self._nwi_repo.save(merged)
        logger.info("nwi_config_updated", user_id=request.user_id)

        return merged

    async def get_nwi_split(self, user_id: str, year: int, month: int) -> NWISplit:
        validate_month(year, month)
        config = await self.get_nwi_config(user_id)

        start, end = _month_range(year, month)
        transactions = await self._txn_repo.list(user_id, start=start, end=end)

        return calculate_nwi_split(transactions, config)
