"""Analytics, financial health and projection endpoints."""

from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from src.application.services import AnalyticsService
from src.core.dependencies import get_analytics_service
from src.presentation.schemas import ErrorResponseSchema

from .params import DEFAULT_USER_ID, UserIdQuery

analytics_router = APIRouter(
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid period or no data"},
    },
)

YearQuery = Annotated[Optional[int], Query(ge=1900, le=2200)]


@analytics_router.get(
    "/analytics/summary",
    response_model=Dict[str, Any],
    summary="Analytics Summary",
    description="Totals, savings rate, category breakdown and monthly trends over all history.",
)
async def get_summary(
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> Dict[str, Any]:
    return await analytics_service.get_summary(user_id)


@analytics_router.get(
    "/analytics/monthly",
    response_model=Dict[str, Any],
    summary="Monthly Metrics",
    description="Metrics for one month. Without `year`/`month`, the latest month with data.",
)
async def get_monthly(
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
    year: YearQuery = None,
    month: Annotated[Optional[int], Query(ge=1, le=12)] = None,
) -> Dict[str, Any]:
    metrics = await analytics_service.get_monthly(user_id, year, month)
    return metrics.to_dict()


@analytics_router.get(
    "/analytics/weekly",
    response_model=Dict[str, Any],
    summary="Weekly Metrics",
    description="Metrics for one ISO week with a daily breakdown. Defaults to the current week.",
)
async def get_weekly(
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
    year: YearQuery = None,
    week: Annotated[Optional[int], Query(ge=1, le=53)] = None,
) -> Dict[str, Any]:
    return await analytics_service.get_weekly(user_id, year, week)


@analytics_router.get(
    "/analytics/yearly",
    response_model=Dict[str, Any],
    summary="Yearly Metrics",
    description="Year totals, monthly trends and year-over-year growth.",
)
async def get_yearly(
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
    year: YearQuery = None,
) -> Dict[str, Any]:
    return await analytics_service.get_yearly(user_id, year)


@analytics_router.get(
    "/analytics/anomalies",
    response_model=Dict[str, Any],
    summary="Spending Anomalies",
    description="Expenses more than two standard deviations above their category mean.",
)
async def get_anomalies(
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> Dict[str, Any]:
    anomalies = await analytics_service.get_anomalies(user_id)
    return {"anomalies": [a.to_dict() for a in anomalies], "count": len(anomalies)}


@analytics_router.get(
    "/financial-health",
    response_model=Dict[str, Any],
    summary="Financial Health",
    description="Emergency fund, savings rate, NWI adherence and the freedom score.",
)
async def get_financial_health(
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> Dict[str, Any]:
    return await analytics_service.get_financial_health(user_id)


@analytics_router.get(
    "/projections",
    response_model=Dict[str, Any],
    summary="Projections",
    description="SIP future value, emergency fund progress, net worth growth and FIRE.",
)
async def get_projections(
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
    monthly_sip: Annotated[
        Optional[float],
        Query(ge=0, description="Defaults to average monthly savings"),
    ] = None,
    expected_return: Annotated[float, Query(ge=0, le=50, description="Annual return in percent")] = 12.0,
    years: Annotated[int, Query(ge=1, le=50)] = 10,
) -> Dict[str, Any]:
    return await analytics_service.get_projections(
        user_id,
        monthly_sip=monthly_sip,
        expected_return=expected_return,
        years=years,
    )
