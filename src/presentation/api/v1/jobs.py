"""Background job endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, Path

from src.application.jobs import JobRunner
from src.core.dependencies import get_job_runner
from src.presentation.schemas import (
    ErrorResponseSchema,
    JobListSchema,
    JobRunRequestSchema,
    JobRunSchema,
)

from .params import DEFAULT_USER_ID, UserIdQuery

job_router = APIRouter(prefix="/jobs")


@job_router.get(
    "",
    response_model=JobListSchema,
    summary="List Jobs",
    description="Declared jobs with their triggers, and the most recent runs.",
)
async def list_jobs(
    job_runner: Annotated[JobRunner, Depends(get_job_runner)],
) -> JobListSchema:
    runs = await job_runner.recent_runs()
    return JobListSchema(
        jobs=[job.to_dict() for job in job_runner.list_jobs()],
        recent_runs=[run.to_dict() for run in runs],
    )


@job_router.post(
    "/{job_id}/run",
    response_model=JobRunSchema,
    summary="Run Job",
    description="Run a job body once, in-process. A failing body is reported as a failed run.",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Job not found"},
    },
)
async def run_job(
    job_id: Annotated[str, Path(description="Job id, e.g. sync-transactions")],
    job_runner: Annotated[JobRunner, Depends(get_job_runner)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
    request: Annotated[Optional[JobRunRequestSchema], Body()] = None,
) -> JobRunSchema:
    run = await job_runner.run(
        job_id,
        user_id,
        payload=request.payload if request else None,
    )
    return JobRunSchema(**run.to_dict())
