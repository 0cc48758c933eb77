"""Data transfer objects for transaction operations."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from src.domain.entities import (
    NWIBucket,
    PaymentMethod,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)


@dataclass(frozen=True)
class CreateTransactionRequest:
    """Input data for recording a transaction."""

    user_id: str
    date: date
    amount: float
    type: TransactionType
    description: str = ""
    merchant: str = ""
    category: Optional[TransactionCategory] = None
    payment_method: PaymentMethod = PaymentMethod.OTHER
    account: str = ""
    status: TransactionStatus = TransactionStatus.COMPLETED
    tags: List[str] = field(default_factory=list)
    notes: str = ""
    recurring: bool = False
    balance: Optional[float] = None
    nwi_override: Optional[NWIBucket] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.user_id or not self.user_id.strip():
            errors.append("user_id is required")

        if self.amount <= 0:
            errors.append("amount must be positive")

        if not self.description.strip() and not self.merchant.strip():
            errors.append("description or merchant is required")

        return errors


@dataclass(frozen=True)
class TransactionQuery:
    """Filters for listing transactions."""

    user_id: str
    year: Optional[int] = None
    month: Optional[int] = None
    type: Optional[TransactionType] = None
    category: Optional[TransactionCategory] = None
    limit: Optional[int] = None

    def validate(self) -> List[str]:
        errors = []

        if self.month is not None and self.year is None:
            errors.append("month requires year")

        return errors
