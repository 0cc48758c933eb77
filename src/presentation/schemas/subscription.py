"""Subscription and categorization rule Pydantic schemas."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import MatchField, SubscriptionFrequency, SubscriptionStatus


class SubscriptionCreateSchema(BaseModel):
    """Schema for POST /v1/subscriptions request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Netflix",
                    "amount": 649,
                    "frequency": "monthly",
                    "next_expected": "2025-02-05",
                }
            ]
        }
    )

    name: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., gt=0)
    frequency: SubscriptionFrequency
    next_expected: date
    category: str = "Subscription"


class SubscriptionUpdateSchema(BaseModel):
    """Schema for PATCH /v1/subscriptions/{id}; omitted fields are unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[float] = Field(None, gt=0)
    frequency: Optional[SubscriptionFrequency] = None
    next_expected: Optional[date] = None
    category: Optional[str] = None
    status: Optional[SubscriptionStatus] = None


class SubscriptionSchema(BaseModel):
    id: str
    name: str
    amount: float
    frequency: str
    next_expected: date
    category: str
    status: str
    monthly_equivalent: float


class SubscriptionListSchema(BaseModel):
    """Schema for GET /v1/subscriptions response body."""

    subscriptions: List[SubscriptionSchema]
    active_count: int
    monthly_total: float = Field(..., description="Monthly cost of active subscriptions")
    yearly_total: float


class RuleCreateSchema(BaseModel):
    """Schema for POST /v1/categorization-rules request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [{"pattern": "GROWSY", "category": "Investment", "match_field": "description"}]
        }
    )

    pattern: str = Field(..., min_length=1, max_length=255)
    category: str
    match_field: MatchField = MatchField.ANY
    case_sensitive: bool = False
    enabled: bool = True


class RuleUpdateSchema(BaseModel):
    """Schema for PUT /v1/categorization-rules/{id}; omitted fields are unchanged."""

    pattern: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = None
    match_field: Optional[MatchField] = None
    case_sensitive: Optional[bool] = None
    enabled: Optional[bool] = None


class RuleSchema(BaseModel):
    id: str
    pattern: str
    match_field: str
    category: str
    case_sensitive: bool
    enabled: bool
    created_at: datetime


class RuleListSchema(BaseModel):
    rules: List[RuleSchema]
