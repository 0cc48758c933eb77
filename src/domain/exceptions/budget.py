"""Budget and NWI configuration exceptions."""

from .base import DomainException, NotFoundException


class BudgetCategoryNotFoundException(NotFoundException):
    """Raised when a budget category does not exist for the user."""

    def __init__(self, category: str):
        super().__init__("Budget category", category, "BUDGET_CATEGORY_NOT_FOUND")
        self.category = category


class InvalidBudgetRequestException(DomainException):
    """Raised when budget amounts fail validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_BUDGET_REQUEST",
        )


class InvalidNWIConfigException(DomainException):
    """Raised when an NWI configuration update is inconsistent."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_NWI_CONFIG",
        )
