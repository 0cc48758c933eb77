"""Health check endpoint for service monitoring."""

from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel

from src import __version__
from src.core.config import settings
from src.infrastructure.database import db_manager

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: Literal["healthy", "degraded"]
    service: str
    version: str
    database: Literal["ok", "unavailable", "not_initialized"]


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="""
    Liveness plus a database check.

    `degraded` means the service is up but its database is unreachable.
    """,
)
async def health_check() -> HealthResponse:
    if not db_manager.initialized:
        database = "not_initialized"
    elif await db_manager.ping():
        database = "ok"
    else:
        database = "unavailable"

    return HealthResponse(
        status="degraded" if database == "unavailable" else "healthy",
        service=settings.app_name,
        version=__version__,
        database=database,
    )
