"""Budget and NWI API endpoints."""

from datetime import date
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query

from src.application.dto import BudgetUpdateRequest, NWIConfigUpdateRequest
from src.application.services import BudgetService
from src.core.dependencies import get_budget_service
from src.domain.entities import BudgetCategory, NWIBucketConfig, NWIConfig
from src.presentation.schemas import (
    BudgetCategorySchema,
    BudgetsResponseSchema,
    BudgetStatusSchema,
    BudgetSuggestionsSchema,
    BudgetsUpdateSchema,
    BudgetUpdateSchema,
    ErrorResponseSchema,
    NWIConfigSchema,
    NWIConfigUpdateSchema,
    NWISplitSchema,
)
from src.presentation.schemas.budget import NWIBucketConfigSchema

from .params import DEFAULT_USER_ID, UserIdQuery

budget_router = APIRouter(
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
)

YearQuery = Annotated[Optional[int], Query(ge=1900, le=2200, description="Defaults to the current year")]
MonthQuery = Annotated[Optional[int], Query(ge=1, le=12, description="Defaults to the current month")]


def _budgets_response(budgets: List[BudgetCategory]) -> BudgetsResponseSchema:
    return BudgetsResponseSchema(
        budgets={b.name: b.budget_amount for b in budgets},
        updated_at=max((b.updated_at for b in budgets), default=None),
    )


def _bucket(schema: Optional[NWIBucketConfigSchema]) -> Optional[NWIBucketConfig]:
    if schema is None:
        return None
    return NWIBucketConfig(percentage=schema.percentage, categories=list(schema.categories))


def _nwi_response(config: NWIConfig) -> NWIConfigSchema:
    return NWIConfigSchema(**config.to_dict())


@budget_router.get(
    "/budgets",
    response_model=BudgetsResponseSchema,
    summary="Get Budgets",
    description="Monthly budget per category. Default budgets are created on first access.",
)
async def get_budgets(
    budget_service: Annotated[BudgetService, Depends(get_budget_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> BudgetsResponseSchema:
    return _budgets_response(await budget_service.get_budgets(user_id))


@budget_router.post(
    "/budgets",
    response_model=BudgetsResponseSchema,
    summary="Update Budgets",
    description="Bulk update budget amounts. Every amount must be zero or more.",
)
async def update_budgets(
    request: BudgetsUpdateSchema,
    budget_service: Annotated[BudgetService, Depends(get_budget_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> BudgetsResponseSchema:
    budgets = await budget_service.update_budgets(
        BudgetUpdateRequest(user_id=user_id, budgets=request.budgets)
    )
    return _budgets_response(budgets)


@budget_router.put(
    "/budgets",
    response_model=BudgetCategorySchema,
    summary="Update One Budget",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Budget category not found"},
    },
)
async def update_budget(
    request: BudgetUpdateSchema,
    budget_service: Annotated[BudgetService, Depends(get_budget_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> BudgetCategorySchema:
    budget = await budget_service.update_budget(user_id, request.category, request.amount)
    return BudgetCategorySchema(**budget.to_dict())


@budget_router.get(
    "/budgets/status",
    response_model=BudgetStatusSchema,
    summary="Budget Status",
    description="""
    Spending against each budget for one month.

    Budgets are pro-rated by elapsed days for the current month, and
    unspent budget from the previous month rolls over.
    """,
)
async def get_budget_status(
    budget_service: Annotated[BudgetService, Depends(get_budget_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
    year: YearQuery = None,
    month: MonthQuery = None,
) -> BudgetStatusSchema:
    today = date.today()
    status = await budget_service.get_budget_status(
        user_id,
        year or today.year,
        month or today.month,
        today=today,
    )
    return BudgetStatusSchema(**status)


@budget_router.get(
    "/budgets/suggestions",
    response_model=BudgetSuggestionsSchema,
    summary="Budget Suggestions",
    description="""
    Suggested budgets from the last three months of spending.

    Categories averaging more than twice their budget get 80% of the
    average, those over budget get 90%, and the rest keep their budget.
    """,
)
async def get_budget_suggestions(
    budget_service: Annotated[BudgetService, Depends(get_budget_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> BudgetSuggestionsSchema:
    suggestions = await budget_service.suggest_budgets(user_id)
    return BudgetSuggestionsSchema(**suggestions)


@budget_router.get(
    "/nwi-config",
    response_model=NWIConfigSchema,
    summary="Get NWI Config",
    description="Needs/Wants/Investments targets. The 50/30/20 default is created on first access.",
)
async def get_nwi_config(
    budget_service: Annotated[BudgetService, Depends(get_budget_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> NWIConfigSchema:
    return _nwi_response(await budget_service.get_nwi_config(user_id))


@budget_router.put(
    "/nwi-config",
    response_model=NWIConfigSchema,
    summary="Update NWI Config",
    description="Percentages must sum to 100 and no category may sit in two buckets.",
)
async def update_nwi_config(
    request: NWIConfigUpdateSchema,
    budget_service: Annotated[BudgetService, Depends(get_budget_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> NWIConfigSchema:
    config = await budget_service.update_nwi_config(
        NWIConfigUpdateRequest(
            user_id=user_id,
            needs=_bucket(request.needs),
            wants=_bucket(request.wants),
            investments=_bucket(request.investments),
            savings=_bucket(request.savings),
        )
    )
    return _nwi_response(config)


@budget_router.get(
    "/nwi/split",
    response_model=NWISplitSchema,
    summary="NWI Split",
    description="Actual vs. target spend per NWI bucket for one month.",
)
async def get_nwi_split(
    budget_service: Annotated[BudgetService, Depends(get_budget_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
    year: YearQuery = None,
    month: MonthQuery = None,
) -> NWISplitSchema:
    today = date.today()
    year = year or today.year
    month = month or today.month

    split = await budget_service.get_nwi_split(user_id, year, month)
    return NWISplitSchema(year=year, month=month, **split.to_dict())
