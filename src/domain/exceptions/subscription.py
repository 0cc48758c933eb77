"""Subscription-related domain exceptions."""

from .base import DomainException, NotFoundException


class SubscriptionNotFoundException(NotFoundException):
    """Raised when a subscription cannot be found."""

    def __init__(self, subscription_id: str):
        super().__init__("Subscription", subscription_id, "SUBSCRIPTION_NOT_FOUND")
        self.subscription_id = subscription_id


class InvalidSubscriptionRequestException(DomainException):
    """Raised when a subscription request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_SUBSCRIPTION_REQUEST",
        )
