"""Background job exceptions."""

from .base import NotFoundException


class JobNotFoundException(NotFoundException):
    """Raised when a job id is not declared."""

    def __init__(self, job_id: str):
        super().__init__("Job", job_id, "JOB_NOT_FOUND")
        self.job_id = job_id
