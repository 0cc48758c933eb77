"""Notification endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from src.application.services import NotificationService
from src.core.dependencies import get_notification_service
from src.presentation.schemas import (
    ErrorResponseSchema,
    NotificationListSchema,
    NotificationSchema,
)

from .params import DEFAULT_USER_ID, UserIdQuery

notification_router = APIRouter(prefix="/notifications")


@notification_router.get(
    "",
    response_model=NotificationListSchema,
    summary="List Notifications",
)
async def list_notifications(
    notification_service: Annotated[NotificationService, Depends(get_notification_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
    unread_only: Annotated[bool, Query()] = False,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
) -> NotificationListSchema:
    notifications = await notification_service.list_notifications(
        user_id,
        unread_only=unread_only,
        limit=limit,
    )
    return NotificationListSchema(
        notifications=[n.to_dict() for n in notifications],
        unread_count=sum(1 for n in notifications if not n.read),
    )


@notification_router.post(
    "/{notification_id}/read",
    response_model=NotificationSchema,
    summary="Mark Notification Read",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Notification not found"},
    },
)
async def mark_read(
    notification_id: Annotated[UUID, Path(description="UUID of the notification")],
    notification_service: Annotated[NotificationService, Depends(get_notification_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> NotificationSchema:
    notification = await notification_service.mark_read(user_id, notification_id)
    return NotificationSchema(**notification.to_dict())
