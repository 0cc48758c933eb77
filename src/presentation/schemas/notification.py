"""Notification Pydantic schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class NotificationSchema(BaseModel):
    id: str
    type: str
    title: str
    message: str
    severity: str
    read: bool
    action_url: Optional[str] = None
    created_at: datetime


class NotificationListSchema(BaseModel):
    notifications: List[NotificationSchema]
    unread_count: int
