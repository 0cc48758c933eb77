"""Notification-related domain exceptions."""

from .base import NotFoundException


class NotificationNotFoundException(NotFoundException):
    """Raised when a notification cannot be found."""

    def __init__(self, notification_id: str):
        super().__init__("Notification", notification_id, "NOTIFICATION_NOT_FOUND")
        self.notification_id = notification_id
