"""Transaction-related Pydantic schemas."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.entities import (
    NWIBucket,
    PaymentMethod,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)


class TransactionCreateSchema(BaseModel):
    """Schema for POST /v1/transactions request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "date": "2025-01-15",
                    "amount": 450.0,
                    "type": "expense",
                    "description": "Lunch",
                    "merchant": "Swiggy",
                    "payment_method": "UPI",
                }
            ]
        }
    )

    date: date
    amount: float = Field(..., gt=0, description="Positive amount in rupees", examples=[450.0])
    type: TransactionType
    description: str = Field("", max_length=500)
    merchant: str = Field("", max_length=255)
    category: Optional[TransactionCategory] = Field(
        None,
        description="Omit to categorize automatically from rules and keywords",
    )
    payment_method: PaymentMethod = PaymentMethod.OTHER
    account: str = ""
    status: TransactionStatus = TransactionStatus.COMPLETED
    tags: List[str] = Field(default_factory=list)
    notes: str = ""
    recurring: bool = False
    balance: Optional[float] = None
    nwi_override: Optional[NWIBucket] = None

    @field_validator("description", "merchant")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class TransactionSchema(BaseModel):
    """A stored transaction."""

    id: str
    external_id: Optional[str] = None
    date: date
    description: str
    merchant: str
    category: str
    amount: float
    type: str
    payment_method: str
    account: str
    status: str
    tags: List[str]
    notes: str
    recurring: bool
    balance: Optional[float] = None
    nwi_override: Optional[str] = None
    category_override: bool


class TransactionListSchema(BaseModel):
    """Schema for GET /v1/transactions response body."""

    transactions: List[TransactionSchema]
    count: int


class RecurringPatternSchema(BaseModel):
    merchant: str
    category: str
    average_amount: float
    frequency: str
    confidence: float
    last_date: date
    next_expected_date: date
    occurrences: int
    total_spent: float
    is_subscription: bool
    amount_variance: float


class RecurringListSchema(BaseModel):
    """Schema for GET /v1/transactions/recurring response body."""

    patterns: List[RecurringPatternSchema]
    monthly_total: float = Field(
        ...,
        description="Sum of average amounts of monthly patterns",
    )
