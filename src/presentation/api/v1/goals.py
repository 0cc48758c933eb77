"""Savings goal and income goal endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Response

from src.application.dto import (
    CreateSavingsGoalRequest,
    IncomeGoalRequest,
    UpdateSavingsGoalRequest,
)
from src.application.services import GoalService
from src.core.dependencies import get_goal_service
from src.domain.entities import IncomeSource
from src.presentation.schemas import (
    ErrorResponseSchema,
    IncomeGoalRequestSchema,
    IncomeGoalSchema,
    SavingsGoalCreateSchema,
    SavingsGoalListSchema,
    SavingsGoalSchema,
    SavingsGoalUpdateSchema,
)

from .params import DEFAULT_USER_ID, UserIdQuery

savings_goal_router = APIRouter(
    prefix="/savings-goals",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Savings goal not found"},
    },
)

income_goal_router = APIRouter(
    prefix="/income-goals",
    responses={400: {"model": ErrorResponseSchema, "description": "Invalid request"}},
)


# === Savings goals ===


@savings_goal_router.get(
    "",
    response_model=SavingsGoalListSchema,
    summary="List Savings Goals",
    description="Every goal with its progress, required monthly saving and projected completion.",
)
async def list_savings_goals(
    goal_service: Annotated[GoalService, Depends(get_goal_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> SavingsGoalListSchema:
    goals = await goal_service.list_goals(user_id)
    return SavingsGoalListSchema(goals=[SavingsGoalSchema(**g) for g in goals])


@savings_goal_router.post(
    "",
    response_model=SavingsGoalSchema,
    status_code=201,
    summary="Create Savings Goal",
)
async def create_savings_goal(
    request: SavingsGoalCreateSchema,
    goal_service: Annotated[GoalService, Depends(get_goal_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> SavingsGoalSchema:
    goal = await goal_service.create_goal(
        CreateSavingsGoalRequest(
            user_id=user_id,
            name=request.name,
            target_amount=request.target_amount,
            target_date=request.target_date,
            current_amount=request.current_amount,
            monthly_contribution=request.monthly_contribution,
            auto_track=request.auto_track,
            category=request.category,
        )
    )
    return SavingsGoalSchema(**goal_service.describe_goal(goal))


@savings_goal_router.patch(
    "/{goal_id}",
    response_model=SavingsGoalSchema,
    summary="Update Savings Goal",
    description="Partial update. `add_amount` records a deposit on top of the current amount.",
)
async def update_savings_goal(
    goal_id: Annotated[UUID, Path(description="UUID of the savings goal")],
    request: SavingsGoalUpdateSchema,
    goal_service: Annotated[GoalService, Depends(get_goal_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> SavingsGoalSchema:
    goal = await goal_service.update_goal(
        user_id,
        goal_id,
        UpdateSavingsGoalRequest(
            name=request.name,
            target_amount=request.target_amount,
            target_date=request.target_date,
            current_amount=request.current_amount,
            add_amount=request.add_amount,
            monthly_contribution=request.monthly_contribution,
            auto_track=request.auto_track,
            category=request.category,
        ),
    )
    return SavingsGoalSchema(**goal_service.describe_goal(goal))


@savings_goal_router.delete(
    "/{goal_id}",
    status_code=204,
    summary="Delete Savings Goal",
)
async def delete_savings_goal(
    goal_id: Annotated[UUID, Path(description="UUID of the savings goal")],
    goal_service: Annotated[GoalService, Depends(get_goal_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> Response:
    await goal_service.delete_goal(user_id, goal_id)
    return Response(status_code=204)


# === Income goal ===


@income_goal_router.get(
    "",
    response_model=IncomeGoalSchema,
    summary="Get Income Goal",
    description="The income goal with progress for the current fiscal year (April to March). "
    "Progress is returned even when no goal is set.",
)
async def get_income_goal(
    goal_service: Annotated[GoalService, Depends(get_goal_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> IncomeGoalSchema:
    return IncomeGoalSchema(**await goal_service.get_income_goal(user_id))


@income_goal_router.post(
    "",
    response_model=IncomeGoalSchema,
    summary="Set Income Goal",
    description="Create the income goal or replace the existing one.",
)
async def set_income_goal(
    request: IncomeGoalRequestSchema,
    goal_service: Annotated[GoalService, Depends(get_goal_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> IncomeGoalSchema:
    await goal_service.save_income_goal(
        IncomeGoalRequest(
            user_id=user_id,
            target_amount=request.target_amount,
            target_date=request.target_date,
            sources=[
                IncomeSource(name=s.name, expected=s.expected, frequency=s.frequency)
                for s in request.sources
            ],
        )
    )
    return IncomeGoalSchema(**await goal_service.get_income_goal(user_id))


@income_goal_router.delete(
    "",
    status_code=204,
    summary="Delete Income Goal",
)
async def delete_income_goal(
    goal_service: Annotated[GoalService, Depends(get_goal_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> Response:
    await goal_service.delete_income_goal(user_id)
    return Response(status_code=204)
