"""Prometheus metrics for the finance tracker service.

Metrics are organized into two categories:

Business Metrics (for Product):
- finance_transactions_created_total: Transactions created by type
- finance_transactions_synced_total: Transactions upserted by the sync job
- finance_insight_total: AI insight requests by outcome
- finance_budget_breach_total: Budget breach notifications by severity

Technical Metrics (for Engineering/SRE):
- finance_provider_latency_seconds: External provider latency
- finance_provider_requests_total: External provider requests by status
- finance_provider_failures_total: External provider failures
- finance_job_runs_total: Background job runs by job and status
- finance_job_duration_seconds: Background job duration
- finance_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

transactions_created_total = Counter(
    "finance_transactions_created_total",
    "Total number of transactions created through the API",
    ["type"],
)

transactions_synced_total = Counter(
    "finance_transactions_synced_total",
    "Total number of transactions upserted by the sync job",
)

insight_total = Counter(
    "finance_insight_total",
    "AI insight requests by outcome",
    ["insight_type", "outcome"],  # generated, cached, stale_fallback, failed
)

budget_breach_total = Counter(
    "finance_budget_breach_total",
    "Budget breach notifications created",
    ["severity"],
)


# =============================================================================
# Technical Metrics
# =============================================================================

provider_latency = Histogram(
    "finance_provider_latency_seconds",
    "External provider request latency in seconds",
    ["provider"],  # mfapi, yahoo, finnhub, llm, feed
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

provider_requests_total = Counter(
    "finance_provider_requests_total",
    "Total number of external provider requests",
    ["provider", "status"],  # success, failure
)

provider_failures = Counter(
    "finance_provider_failures_total",
    "Total number of external provider failures",
    ["provider", "error_type"],  # timeout, error, not_found
)

job_runs_total = Counter(
    "finance_job_runs_total",
    "Background job runs by job and status",
    ["job", "status"],
)

job_duration = Histogram(
    "finance_job_duration_seconds",
    "Background job duration in seconds",
    ["job"],
    buckets=[0.1, 0.5, 1.0, 5.0, 15.0, 60.0, 300.0],
)

http_requests_total = Counter(
    "finance_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "finance_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_transaction_created(txn_type: str) -> None:
    """Record a transaction created through the API."""
    transactions_created_total.labels(type=txn_type).inc()


def record_transactions_synced(count: int) -> None:
    """Record transactions upserted by a sync run."""
    if count > 0:
        transactions_synced_total.inc(count)


def record_insight(insight_type: str, outcome: str) -> None:
    """Record an AI insight request outcome."""
    insight_total.labels(insight_type=insight_type, outcome=outcome).inc()


def record_budget_breach(severity: str) -> None:
    """Record a budget breach notification."""
    budget_breach_total.labels(severity=severity).inc()


@contextmanager
def track_provider_latency(provider: str) -> Generator[None, None, None]:
    """Context manager to track external provider latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        provider_latency.labels(provider=provider).observe(duration)


def record_provider_success(provider: str) -> None:
    """Record a successful provider request."""
    provider_requests_total.labels(provider=provider, status="success").inc()


def record_provider_failure(provider: str, error_type: str) -> None:
    """Record a provider request failure."""
    provider_requests_total.labels(provider=provider, status="failure").inc()
    provider_failures.labels(provider=provider, error_type=error_type).inc()


@contextmanager
def track_job_duration(job: str) -> Generator[None, None, None]:
    """Context manager to track background job duration."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        job_duration.labels(job=job).observe(duration)


def record_job_run(job: str, status: str) -> None:
    """Record a background job run."""
    job_runs_total.labels(job=job, status=status).inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
