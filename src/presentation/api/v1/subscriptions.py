"""Subscription and categorization rule endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Response

from src.application.dto import (
    CreateSubscriptionRequest,
    RuleRequest,
    UpdateSubscriptionRequest,
)
from src.application.services import RuleService, SubscriptionService
from src.core.dependencies import get_rule_service, get_subscription_service
from src.presentation.schemas import (
    ErrorResponseSchema,
    RuleCreateSchema,
    RuleListSchema,
    RuleSchema,
    RuleUpdateSchema,
    SubscriptionCreateSchema,
    SubscriptionListSchema,
    SubscriptionSchema,
    SubscriptionUpdateSchema,
)

from .params import DEFAULT_USER_ID, UserIdQuery

subscription_router = APIRouter(
    prefix="/subscriptions",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Subscription not found"},
    },
)

rule_router = APIRouter(
    prefix="/categorization-rules",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Rule not found"},
    },
)


# === Subscriptions ===


@subscription_router.get(
    "",
    response_model=SubscriptionListSchema,
    summary="List Subscriptions",
    description="Tracked subscriptions with monthly and yearly totals of the active ones.",
)
async def list_subscriptions(
    subscription_service: Annotated[SubscriptionService, Depends(get_subscription_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> SubscriptionListSchema:
    return SubscriptionListSchema(**await subscription_service.list_subscriptions(user_id))


@subscription_router.post(
    "",
    response_model=SubscriptionSchema,
    status_code=201,
    summary="Create Subscription",
)
async def create_subscription(
    request: SubscriptionCreateSchema,
    subscription_service: Annotated[SubscriptionService, Depends(get_subscription_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> SubscriptionSchema:
    subscription = await subscription_service.create_subscription(
        CreateSubscriptionRequest(
            user_id=user_id,
            name=request.name,
            amount=request.amount,
            frequency=request.frequency,
            next_expected=request.next_expected,
            category=request.category,
        )
    )
    return SubscriptionSchema(**subscription.to_dict())


@subscription_router.patch(
    "/{subscription_id}",
    response_model=SubscriptionSchema,
    summary="Update Subscription",
)
async def update_subscription(
    subscription_id: Annotated[UUID, Path(description="UUID of the subscription")],
    request: SubscriptionUpdateSchema,
    subscription_service: Annotated[SubscriptionService, Depends(get_subscription_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> SubscriptionSchema:
    subscription = await subscription_service.update_subscription(
        user_id,
        subscription_id,
        UpdateSubscriptionRequest(
            name=request.name,
            amount=request.amount,
            frequency=request.frequency,
            next_expected=request.next_expected,
            category=request.category,
            status=request.status,
        ),
    )
    return SubscriptionSchema(**subscription.to_dict())


@subscription_router.delete(
    "/{subscription_id}",
    status_code=204,
    summary="Delete Subscription",
)
async def delete_subscription(
    subscription_id: Annotated[UUID, Path(description="UUID of the subscription")],
    subscription_service: Annotated[SubscriptionService, Depends(get_subscription_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> Response:
    await subscription_service.delete_subscription(user_id, subscription_id)
    return Response(status_code=204)


# === Categorization rules ===


@rule_router.get(
    "",
    response_model=RuleListSchema,
    summary="List Rules",
)
async def list_rules(
    rule_service: Annotated[RuleService, Depends(get_rule_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> RuleListSchema:
    rules = await rule_service.list_rules(user_id)
    return RuleListSchema(rules=[RuleSchema(**r.to_dict()) for r in rules])


@rule_router.post(
    "",
    response_model=RuleSchema,
    status_code=201,
    summary="Create Rule",
    description="Substring rule applied before the keyword categorizer.",
)
async def create_rule(
    request: RuleCreateSchema,
    rule_service: Annotated[RuleService, Depends(get_rule_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> RuleSchema:
    rule = await rule_service.create_rule(
        user_id,
        RuleRequest(
            pattern=request.pattern,
            category=request.category,
            match_field=request.match_field,
            case_sensitive=request.case_sensitive,
            enabled=request.enabled,
        ),
    )
    return RuleSchema(**rule.to_dict())


@rule_router.put(
    "/{rule_id}",
    response_model=RuleSchema,
    summary="Update Rule",
)
async def update_rule(
    rule_id: Annotated[UUID, Path(description="UUID of the rule")],
    request: RuleUpdateSchema,
    rule_service: Annotated[RuleService, Depends(get_rule_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> RuleSchema:
    rule = await rule_service.update_rule(
        user_id,
        rule_id,
        RuleRequest(
            pattern=request.pattern,
            category=request.category,
            match_field=request.match_field,
            case_sensitive=request.case_sensitive,
            enabled=request.enabled,
        ),
    )
    return RuleSchema(**rule.to_dict())


@rule_router.delete(
    "/{rule_id}",
    status_code=204,
    summary="Delete Rule",
)
async def delete_rule(
    rule_id: Annotated[UUID, Path(description="UUID of the rule")],
    rule_service: Annotated[RuleService, Depends(get_rule_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> Response:
    await rule_service.delete_rule(user_id, rule_id)
    return Response(status_code=204)
