"""Background jobs: declarations, bodies and the in-process runner."""

from .context import JobContext
from .definitions import JOBS, JobDefinition, get_job
from .runner import JobRunner

__all__ = [
    "JOBS",
    "JobContext",
    "JobDefinition",
    "JobRunner",
    "get_job",
]
