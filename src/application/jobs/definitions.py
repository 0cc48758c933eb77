"""Declared background jobs."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from src.domain.exceptions import JobNotFoundException

from .context import JobContext
from .handlers import (
    budget_breach_check,
    generate_insights,
    refresh_prices,
    renewal_alert,
    sync_transactions,
    weekly_digest,
)

JobHandler = Callable[[JobContext, str, Dict[str, Any]], Awaitable[Dict[str, Any]]]


@dataclass(frozen=True)
class JobDefinition:
    """
    A job body plus the trigger it is declared with.

    Exactly one of `cron` or `event` is set. Triggers are metadata for the
    external scheduler; in-process runs go through `JobRunner.run`.
    """

    id: str
    name: str
    handler: JobHandler
    cron: Optional[str] = None
    event: Optional[str] = None

    @property
    def trigger(self) -> str:
        return f"cron:{self.cron}" if self.cron else f"event:{self.event}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "cron": self.cron,
            "event": self.event,
        }


JOBS: List[JobDefinition] = [
    JobDefinition(
        id="sync-transactions",
        name="Sync transactions from the feed",
        handler=sync_transactions,
        cron="0 6 * * *",
    ),
    JobDefinition(
        id="refresh-prices",
        name="Refresh stock prices and fund NAVs",
        handler=refresh_prices,
        cron="0 10 * * 1-5",
    ),
    JobDefinition(
        id="generate-insights",
        name="Regenerate AI insights",
        handler=generate_insights,
        event="finance/insights.generate",
    ),
    JobDefinition(
        id="budget-breach-check",
        name="Check budgets for breaches",
        handler=budget_breach_check,
        cron="0 20 * * *",
    ),
    JobDefinition(
        id="renewal-alert",
        name="Alert on upcoming subscription renewals",
        handler=renewal_alert,
        cron="0 9 * * *",
    ),
    JobDefinition(
        id="weekly-digest",
        name="Send the weekly digest",
        handler=weekly_digest,
        cron="0 9 * * 0",
    ),
]


def get_job(job_id: str) -> JobDefinition:
    """
    Raises:
        JobNotFoundException: If no job has this id
    """
    for job in JOBS:
        if job.id == job_id:
            return job
    raise JobNotFoundException(job_id)
