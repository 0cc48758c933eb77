"""AI insight endpoints."""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.application.services import InsightService
from src.core.dependencies import get_insight_service
from src.domain.entities import InsightType
from src.presentation.schemas import (
    ErrorResponseSchema,
    InsightRequestSchema,
    InsightResponseSchema,
)

from .params import DEFAULT_USER_ID, UserIdQuery

insight_router = APIRouter(
    prefix="/ai/insights",
    responses={
        400: {"model": ErrorResponseSchema, "description": "No data to analyze"},
        503: {"model": ErrorResponseSchema, "description": "AI provider unavailable"},
    },
)


@insight_router.get(
    "",
    response_model=InsightResponseSchema,
    summary="Get Insight",
    description="""
    Cached insight when it is less than 24 hours old, otherwise a new one.

    If regeneration fails and an older insight exists, that insight is
    returned with `stale=true` and a `warning`.
    """,
)
async def get_insight(
    insight_service: Annotated[InsightService, Depends(get_insight_service)],
    type: Annotated[InsightType, Query(description="Insight type")] = InsightType.SPENDING_ANALYSIS,
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> InsightResponseSchema:
    response = await insight_service.get_insight(user_id, type)
    return InsightResponseSchema(**asdict(response))


@insight_router.post(
    "",
    response_model=InsightResponseSchema,
    summary="Regenerate Insight",
    description="Always generates a new insight; failures are returned as errors.",
)
async def regenerate_insight(
    request: InsightRequestSchema,
    insight_service: Annotated[InsightService, Depends(get_insight_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> InsightResponseSchema:
    response = await insight_service.regenerate(user_id, request.type)
    return InsightResponseSchema(**asdict(response))
