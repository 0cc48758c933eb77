"""Savings and income goal exceptions."""

from .base import DomainException, NotFoundException


class SavingsGoalNotFoundException(NotFoundException):
    """Raised when a savings goal cannot be found."""

    def __init__(self, goal_id: str):
        super().__init__("Savings goal", goal_id, "SAVINGS_GOAL_NOT_FOUND")
        self.goal_id = goal_id


class InvalidGoalRequestException(DomainException):
    """Raised when a savings or income goal request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_GOAL_REQUEST",
        )
