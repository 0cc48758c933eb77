"""Notification entity for in-app alerts."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from .common import utcnow


class NotificationType(str, Enum):
    BUDGET_BREACH = "budget_breach"
    GOAL_MILESTONE = "goal_milestone"
    WEEKLY_DIGEST = "weekly_digest"
    RENEWAL_ALERT = "renewal_alert"
    INSIGHT = "insight"


class NotificationSeverity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"


@dataclass
class Notification:
    """
    An alert shown to the user.

    `dedup_key` identifies the condition that produced the alert so the
    same condition is not reported twice inside the dedup window.
    """

    user_id: str
    type: NotificationType
    title: str
    message: str
    severity: NotificationSeverity
    read: bool = False
    action_url: Optional[str] = None
    dedup_key: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "severity": self.severity.value,
            "read": self.read,
            "action_url": self.action_url,
            "created_at": self.created_at.isoformat() + "Z",
        }
