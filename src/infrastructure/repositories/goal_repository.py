"""PostgreSQL implementations of SavingsGoalRepository and IncomeGoalRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import IncomeGoal, IncomeSource, SavingsGoal
from src.domain.interfaces import IncomeGoalRepository, SavingsGoalRepository
from src.infrastructure.database.models import IncomeGoalModel, SavingsGoalModel


class PostgresSavingsGoalRepository(SavingsGoalRepository):
    """PostgreSQL implementation of the savings goal repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list(self, user_id: str) -> List[SavingsGoal]:
        stmt = (
            select(SavingsGoalModel)
            .where(SavingsGoalModel.user_id == user_id)
            .order_by(SavingsGoalModel.target_date, SavingsGoalModel.name)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def get_by_id(self, user_id: str, goal_id: UUID) -> Optional[SavingsGoal]:
        stmt = select(SavingsGoalModel).where(
            SavingsGoalModel.id == str(goal_id),
            SavingsGoalModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def save(self, goal: SavingsGoal) -> SavingsGoal:
        await self._session.merge(
            SavingsGoalModel(
                id=str(goal.id),
                user_id=goal.user_id,
                name=goal.name,
                target_amount=goal.target_amount,
                current_amount=goal.current_amount,
                target_date=goal.target_date,
                monthly_contribution=goal.monthly_contribution,
                auto_track=goal.auto_track,
                category=goal.category,
                created_at=goal.created_at,
                updated_at=goal.updated_at,
            )
        )
        await self._session.flush()
        return goal

    async def delete(self, user_id: str, goal_id: UUID) -> bool:
        stmt = delete(SavingsGoalModel).where(
            SavingsGoalModel.id == str(goal_id),
            SavingsGoalModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    def _to_entity(self, model: SavingsGoalModel) -> SavingsGoal:
        return SavingsGoal(
            id=UUID(model.id),
            user_id=model.user_id,
            name=model.name,
            target_amount=model.target_amount,
            current_amount=model.current_amount,
            target_date=model.target_date,
            monthly_contribution=model.monthly_contribution,
            auto_track=model.auto_track,
            category=model.category,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class PostgresIncomeGoalRepository(IncomeGoalRepository):
    """
    PostgreSQL implementation of the income goal repository.

    Sources are stored as a JSON list of `{"name", "expected", "frequency"}`.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, user_id: str) -> Optional[IncomeGoal]:
        model = await self._find(user_id)
        return self._to_entity(model) if model else None

    async def save(self, goal: IncomeGoal) -> IncomeGoal:
        model = await self._find(goal.user_id)
        if model is None:
            model = IncomeGoalModel(
                id=str(goal.id),
                user_id=goal.user_id,
                created_at=goal.created_at,
            )
            self._session.add(model)

        model.target_amount = goal.target_amount
        model.target_date = goal.target_date
        model.sources = [source.to_dict() for source in goal.sources]
        model.updated_at = goal.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, user_id: str) -> bool:
        stmt = delete(IncomeGoalModel).where(IncomeGoalModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def _find(self, user_id: str) -> Optional[IncomeGoalModel]:
        stmt = select(IncomeGoalModel).where(IncomeGoalModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: IncomeGoalModel) -> IncomeGoal:
        return IncomeGoal(
            id=UUID(model.id),
            user_id=model.user_id,
            target_amount=model.target_amount,
            target_date=model.target_date,
            sources=[
                IncomeSource(
                    name=item["name"],
                    expected=item["expected"],
                    frequency=item.get("frequency", "monthly"),
                )
                for item in model.sources or []
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
