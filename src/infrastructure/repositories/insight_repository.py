"""PostgreSQL implementation of InsightRepository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import AIInsight, InsightType
from src.domain.interfaces import InsightRepository
from src.infrastructure.database.models import AIInsightModel


class PostgresInsightRepository(InsightRepository):
    """
    PostgreSQL implementation of the AI insight cache.

    Insights are append-only; `prune` bounds the history per type.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def latest(self, user_id: str, insight_type: InsightType) -> Optional[AIInsight]:
        stmt = (
            select(AIInsightModel)
            .where(
                AIInsightModel.user_id == user_id,
                AIInsightModel.insight_type == insight_type.value,
            )
            .order_by(AIInsightModel.generated_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return AIInsight(
            id=UUID(model.id),
            user_id=model.user_id,
            type=InsightType(model.insight_type),
            content=model.content,
            sections=model.sections,
            data_points=model.data_points,
            generated_at=model.generated_at,
        )

    async def save(self, insight: AIInsight) -> AIInsight:
        model = AIInsightModel(
            id=str(insight.id),
            user_id=insight.user_id,
            insight_type=insight.type.value,
            content=insight.content,
            sections=insight.sections,
            data_points=insight.data_points,
            generated_at=insight.generated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return insight

    async def prune(self, user_id: str, insight_type: InsightType, keep: int) -> int:
        stmt = (
            select(AIInsightModel.id)
            .where(
                AIInsightModel.user_id == user_id,
                AIInsightModel.insight_type == insight_type.value,
            )
            .order_by(AIInsightModel.generated_at.desc())
            .offset(keep)
        )
        result = await self._session.execute(stmt)
        stale_ids = list(result.scalars().all())

        if not stale_ids:
            return 0

        await self._session.execute(
            delete(AIInsightModel).where(AIInsightModel.id.in_(stale_ids))
        )
        await self._session.flush()
        return len(stale_ids)
