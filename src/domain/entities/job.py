"""JobRun entity recording background job executions."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from .common import utcnow


class JobStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class JobRun:
    """
    Outcome of one execution of a background job body.

    Runs are persisted so that the last sync, price refresh and
    insight generation are visible without the external scheduler.
    """

    job: str
    trigger: str
    status: JobStatus = JobStatus.SUCCESS
    result: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    started_at: datetime = field(default_factory=utcnow)
    finished_at: Optional[datetime] = None
    id: UUID = field(default_factory=uuid4)

    @property
    def duration_ms(self) -> Optional[int]:
        if self.finished_at is None:
            return None
        return int((self.finished_at - self.started_at).total_seconds() * 1000)

    def finish(self, status: JobStatus, result: Dict[str, Any] | None = None, error: str | None = None) -> None:
        self.status = status
        self.result = result or {}
        self.error = error
        self.finished_at = utcnow()

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "job": self.job,
            "trigger": self.trigger,
            "status": self.status.value,
            "result": self.result,
            "error": self.error,
            "started_at": self.started_at.isoformat() + "Z",
            "finished_at": self.finished_at.isoformat() + "Z" if self.finished_at else None,
            "duration_ms": self.duration_ms,
        }
