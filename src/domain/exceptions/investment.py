"""Investment request exceptions."""

from .base import DomainException


class InvalidInvestmentRequestException(DomainException):
    """Raised when a holding or XIRR request fails validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_INVESTMENT_REQUEST",
        )
