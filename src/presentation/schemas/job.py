"""Background job Pydantic schemas."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class JobSchema(BaseModel):
    id: str
    name: str
    cron: Optional[str] = None
    event: Optional[str] = None


class JobRunSchema(BaseModel):
    id: str
    job: str
    trigger: str
    status: str = Field(..., description="success, skipped or failed")
    result: Dict[str, Any]
    error: Optional[str] = None
    started_at: datetime
    finished_at: Optional[datetime] = None
    duration_ms: Optional[int] = None


class JobListSchema(BaseModel):
    jobs: List[JobSchema]
    recent_runs: List[JobRunSchema]


class JobRunRequestSchema(BaseModel):
    """Optional body for POST /v1/jobs/{job_id}/run."""

    payload: Dict[str, Any] = Field(
        default_factory=dict,
        description="Event data passed to the job body",
        examples=[{"types": ["spending_analysis"]}],
    )
