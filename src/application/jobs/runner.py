"""In-process job runner."""

from typing import Any, Dict, List, Optional

import structlog

from src.core.metrics import record_job_run, track_job_duration
from src.domain.entities import JobRun, JobStatus
from src.domain.interfaces import JobRunRepository

from .context import JobContext
from .definitions import JOBS, JobDefinition, get_job

logger = structlog.get_logger(__name__)


class JobRunner:
    """
    Runs declared job bodies once and records each run.

    A body that raises is recorded as a failed run rather than
    propagated. Whatever the body left unsaved in the session is rolled
    back first, so the failed run itself can still be written.
    """

    def __init__(self, job_run_repository: JobRunRepository, context: JobContext):
        self._job_run_repo = job_run_repository
        self._context = context

    def list_jobs(self) -> List[JobDefinition]:
        return list(JOBS)

    async def recent_runs(self, job_id: Optional[str] = None, limit: int = 20) -> List[JobRun]:
        return await self._job_run_repo.list_recent(job_id, limit)

    async def run(
        self,
        job_id: str,
        user_id: str,
        trigger: str = "manual",
        payload: Optional[Dict[str, Any]] = None,
    ) -> JobRun:
        """
        Run a job body.

        Raises:
            JobNotFoundException: If the job id is not declared
        """
        job = get_job(job_id)
        run = JobRun(job=job.id, trigger=trigger)
        log = logger.bind(job=job.id, user_id=user_id, trigger=trigger)
        log.info("job_started")

        with track_job_duration(job.id):
            try:
                result = await job.handler(self._context, user_id, payload or {})
            except Exception as e:
                await self._job_run_repo.discard_pending()
                run.finish(JobStatus.FAILED, error=str(e))
                log.exception("job_failed", error=str(e))
            else:
                status = JobStatus.SKIPPED if result.get("skipped") else JobStatus.SUCCESS
                run.finish(status, result)

        record_job_run(job.id, run.status.value)
        await self._job_run_repo.save(run)

        log.info("job_finished", status=run.status.value, duration_ms=run.duration_ms)
        return run
