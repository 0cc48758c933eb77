"""Transaction-related domain exceptions."""

from .base import DomainException, NotFoundException


class TransactionNotFoundException(NotFoundException):
    """Raised when a transaction cannot be found."""

    def __init__(self, transaction_id: str):
        super().__init__("Transaction", transaction_id, "TRANSACTION_NOT_FOUND")
        self.transaction_id = transaction_id


class InvalidTransactionRequestException(DomainException):
    """Raised when a transaction request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_TRANSACTION_REQUEST",
        )


class InvalidPeriodException(DomainException):
    """Raised when a requested year/month/week is out of range."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_PERIOD",
        )
