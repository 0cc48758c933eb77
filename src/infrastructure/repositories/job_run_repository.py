"""PostgreSQL implementation of JobRunRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import JobRun, JobStatus
from src.domain.interfaces import JobRunRepository
from src.infrastructure.database.models import JobRunModel


class PostgresJobRunRepository(JobRunRepository):
    """PostgreSQL implementation of the job run repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, run: JobRun) -> JobRun:
        await self._session.merge(
            JobRunModel(
                id=str(run.id),
                job=run.job,
                trigger=run.trigger,
                status=run.status.value,
                result=run.result,
                error=run.error,
                started_at=run.started_at,
                finished_at=run.finished_at,
            )
        )
        await self._session.flush()
        return run

    async def discard_pending(self) -> None:
        await self._session.rollback()

    async def list_recent(self, job: Optional[str] = None, limit: int = 20) -> List[JobRun]:
        stmt = select(JobRunModel)
        if job is not None:
            stmt = stmt.where(JobRunModel.job == job)

        stmt = stmt.order_by(JobRunModel.started_at.desc()).limit(limit)
        result = await self._session.execute(stmt)

        return [
            JobRun(
                id=UUID(model.id),
                job=model.job,
                trigger=model.trigger,
                status=JobStatus(model.status),
                result=model.result or {},
                error=model.error,
                started_at=model.started_at,
                finished_at=model.finished_at,
            )
            for model in result.scalars().all()
        ]
