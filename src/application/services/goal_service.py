"""Savings goal and income goal services."""

from dataclasses import replace
from datetime import date
from typing import Optional
from uuid import UUID

import structlog

from src.application.dto import (
    CreateSavingsGoalRequest,
    IncomeGoalRequest,
    UpdateSavingsGoalRequest,
)
from src.domain.entities import IncomeGoal, SavingsGoal, utcnow
from src.domain.exceptions import InvalidGoalRequestException, SavingsGoalNotFoundException
from src.domain.interfaces import (
    IncomeGoalRepository,
    SavingsGoalRepository,
    TransactionRepository,
)
from src.service.finance.income_goals import (
    calculate_income_progress,
    evaluate_income_goal,
    get_fiscal_year_range,
)
from src.service.finance.savings_goals import calculate_goal_progress

logger = structlog.get_logger(__name__)


def _goal_dict(goal: SavingsGoal) -> dict:
    return {
        "id": str(goal.id),
        "name": goal.name,
        "target_amount": goal.target_amount,
        "current_amount": goal.current_amount,
        "target_date": goal.target_date.isoformat(),
        "monthly_contribution": goal.monthly_contribution,
        "auto_track": goal.auto_track,
        "category": goal.category,
        "created_at": goal.created_at.isoformat(),
        "updated_at": goal.updated_at.isoformat(),
    }


class GoalService:
    """Application service for savings goals and the yearly income goal."""

    def __init__(
        self,
        savings_goal_repository: SavingsGoalRepository,
        income_goal_repository: IncomeGoalRepository,
        transaction_repository: TransactionRepository,
    ):
        self._savings_repo = savings_goal_repository
        self._income_repo = income_goal_repository
        self._txn_repo = transaction_repository

    # ------------------------------------------------------------------
    # Savings goals
    # ------------------------------------------------------------------

    def describe_goal(self, goal: SavingsGoal, today: Optional[date] = None) -> dict:
        """A goal's stored fields merged with its computed progress."""
        return {**_goal_dict(goal), **calculate_goal_progress(goal, today).to_dict()}

    async def list_goals(self, user_id: str, today: Optional[date] = None) -> list:
        goals = await self._savings_repo.list(user_id)
        return [self.describe_goal(goal, today) for goal in goals]

    async def create_goal(self, request: CreateSavingsGoalRequest) -> SavingsGoal:
        errors = request.validate()
        if errors:
            raise InvalidGoalRequestException("; ".join(errors))

        goal = SavingsGoal(
            user_id=request.user_id,
            name=request.name.strip(),
            target_amount=request.target_amount,
            target_date=request.target_date,
            current_amount=request.current_amount,
            monthly_contribution=request.monthly_contribution,
            auto_track=request.auto_track,
            category=request.category.strip() if request.category else None,
        )
        await self._savings_repo.save(goal)

        logger.info("savings_goal_created", user_id=request.user_id, goal_id=str(goal.id))
        return goal

    async def update_goal(
        self,
        user_id: str,
        goal_id: UUID,
        request: UpdateSavingsGoalRequest,
    ) -> SavingsGoal:
        """
        Apply a partial update.

        Raises:
            InvalidGoalRequestException: If validation fails
            SavingsGoalNotFoundException: If the goal does not exist
        """
        errors = request.validate()
        if errors:
            raise InvalidGoalRequestException("; ".join(errors))

        goal = await self._savings_repo.get_by_id(user_id, goal_id)
        if goal is None:
            raise SavingsGoalNotFoundException(str(goal_id))

        current = request.current_amount
        if request.add_amount is not None:
            current = goal.current_amount + request.add_amount
            if current < 0:
                raise InvalidGoalRequestException("current_amount cannot go below zero")

        changes = {
            key: value
            for key, value in (
                ("name", request.name.strip() if request.name else None),
                ("target_amount", request.target_amount),
                ("target_date", request.target_date),
                ("current_amount", current),
                ("monthly_contribution", request.monthly_contribution),
                ("auto_track", request.auto_track),
                ("category", request.category),
            )
            if value is not None
        }
        updated = replace(goal, updated_at=utcnow(), **changes)
        await self._savings_repo.save(updated)

        logger.info(
            "savings_goal_updated",
            user_id=user_id,
            goal_id=str(goal_id),
            fields=sorted(changes),
        )
        return updated

    async def delete_goal(self, user_id: str, goal_id: UUID) -> None:
        deleted = await self._savings_repo.delete(user_id, goal_id)
        if not deleted:
            raise SavingsGoalNotFoundException(str(goal_id))

        logger.info("savings_goal_deleted", user_id=user_id, goal_id=str(goal_id))

    # ------------------------------------------------------------------
    # Income goal
    # ------------------------------------------------------------------

    async def get_income_goal(self, user_id: str, today: Optional[date] = None) -> dict:
        """
        The user's income goal with fiscal-year progress.

        Progress is computed even when no goal is set; `goal` and
        `status` are then None.
        """
        today = today or date.today()
        start, end = get_fiscal_year_range(today)
        transactions = await self._txn_repo.list(user_id, start=start, end=end)
        progress = calculate_income_progress(transactions, today)

        goal = await self._income_repo.get(user_id)
        if goal is None:
            return {"goal": None, "progress": progress.to_dict(), "status": None}

        return {
            "goal": {
                "id": str(goal.id),
                "target_amount": goal.target_amount,
                "target_date": goal.target_date.isoformat(),
                "sources": [source.to_dict() for source in goal.sources],
                "updated_at": goal.updated_at.isoformat(),
            },
            "progress": progress.to_dict(),
            "status": evaluate_income_goal(goal, progress, today).to_dict(),
        }

    async def save_income_goal(self, request: IncomeGoalRequest) -> IncomeGoal:
        """Create the user's income goal or replace the existing one."""
        errors = request.validate()
        if errors:
            raise InvalidGoalRequestException("; ".join(errors))

        goal = await self._income_repo.save(
            IncomeGoal(
                user_id=request.user_id,
                target_amount=request.target_amount,
                target_date=request.target_date,
                sources=list(request.sources),
            )
        )

        logger.info(
            "income_goal_saved",
            user_id=request.user_id,
            target_amount=request.target_amount,
            sources=len(request.sources),
        )
        return goal

    async def delete_income_goal(self, user_id: str) -> bool:
        deleted = await self._income_repo.delete(user_id)
        logger.info("income_goal_deleted", user_id=user_id, deleted=deleted)
        return deleted
