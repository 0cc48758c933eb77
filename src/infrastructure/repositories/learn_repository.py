"""PostgreSQL implementation of LearnProgressRepository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import LearnProgress, LearnStatus
from src.domain.interfaces import LearnProgressRepository
from src.infrastructure.database.models import LearnProgressModel


class PostgresLearnProgressRepository(LearnProgressRepository):
    """PostgreSQL implementation of the learn progress repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list(self, user_id: str) -> List[LearnProgress]:
        stmt = select(LearnProgressModel).where(LearnProgressModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def get(self, user_id: str, topic_id: str) -> Optional[LearnProgress]:
        model = await self._get_model(user_id, topic_id)
        return self._to_entity(model) if model else None

    async def save(self, progress: LearnProgress) -> LearnProgress:
        model = await self._get_model(progress.user_id, progress.topic_id)

        if model is None:
            model = LearnProgressModel(
                user_id=progress.user_id,
                topic_id=progress.topic_id,
            )
            self._session.add(model)

        model.status = progress.status.value
        model.quiz_score = progress.quiz_score
        model.read_at = progress.read_at
        model.quizzed_at = progress.quizzed_at
        model.updated_at = progress.updated_at

        await self._session.flush()
        return progress

    async def _get_model(self, user_id: str, topic_id: str) -> Optional[LearnProgressModel]:
        stmt = select(LearnProgressModel).where(
            LearnProgressModel.user_id == user_id,
            LearnProgressModel.topic_id == topic_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: LearnProgressModel) -> LearnProgress:
        return LearnProgress(
            user_id=model.user_id,
            topic_id=model.topic_id,
            status=LearnStatus(model.status),
            quiz_score=model.quiz_score,
            read_at=model.read_at,
            quizzed_at=model.quizzed_at,
            updated_at=model.updated_at,
        )
