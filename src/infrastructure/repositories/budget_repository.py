"""PostgreSQL implementations of BudgetRepository and NWIConfigRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import BudgetCategory, NWIBucketConfig, NWIConfig
from src.domain.interfaces import BudgetRepository, NWIConfigRepository
from src.infrastructure.database.models import BudgetCategoryModel, NWIConfigModel


class PostgresBudgetRepository(BudgetRepository):
    """PostgreSQL implementation of the budget category repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list(self, user_id: str) -> List[BudgetCategory]:
        stmt = (
            select(BudgetCategoryModel)
            .where(BudgetCategoryModel.user_id == user_id)
            .order_by(BudgetCategoryModel.created_at, BudgetCategoryModel.name)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def get_by_name(self, user_id: str, name: str) -> Optional[BudgetCategory]:
        stmt = select(BudgetCategoryModel).where(
            BudgetCategoryModel.user_id == user_id,
            BudgetCategoryModel.name == name,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def save_many(self, budgets: List[BudgetCategory]) -> List[BudgetCategory]:
        for budget in budgets:
            await self._session.merge(
                BudgetCategoryModel(
                    id=str(budget.id),
                    user_id=budget.user_id,
                    name=budget.name,
                    budget_amount=budget.budget_amount,
                    transaction_categories=list(budget.transaction_categories),
                    description=budget.description,
                    created_at=budget.created_at,
                    updated_at=budget.updated_at,
                )
            )
        await self._session.flush()
        return budgets

    def _to_entity(self, model: BudgetCategoryModel) -> BudgetCategory:
        return BudgetCategory(
            id=UUID(model.id),
            user_id=model.user_id,
            name=model.name,
            budget_amount=model.budget_amount,
            transaction_categories=list(model.transaction_categories or []),
            description=model.description,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class PostgresNWIConfigRepository(NWIConfigRepository):
    """
    PostgreSQL implementation of the NWI config repository.

    Each bucket is stored as a JSON object `{"percentage", "categories"}`.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, user_id: str) -> Optional[NWIConfig]:
        model = await self._session.get(NWIConfigModel, user_id)
        if model is None:
            return None

        return NWIConfig(
            user_id=model.user_id,
            needs=self._bucket(model.needs),
            wants=self._bucket(model.wants),
            investments=self._bucket(model.investments),
            savings=self._bucket(model.savings) if model.savings else None,
            updated_at=model.updated_at,
        )

    async def save(self, config: NWIConfig) -> NWIConfig:
        await self._session.merge(
            NWIConfigModel(
                user_id=config.user_id,
                needs=config.needs.to_dict(),
                wants=config.wants.to_dict(),
                investments=config.investments.to_dict(),
                savings=config.savings.to_dict() if config.savings else None,
                updated_at=config.updated_at,
            )
        )
        await self._session.flush()
        return config

    @staticmethod
    def _bucket(data: dict) -> NWIBucketConfig:
        return NWIBucketConfig(
            percentage=float(data.get("percentage", 0)),
            categories=list(data.get("categories", [])),
        )
