"""Budget and NWI Pydantic schemas."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BudgetsResponseSchema(BaseModel):
    """Schema for GET/POST /v1/budgets response body."""

    budgets: Dict[str, float] = Field(
        ...,
        description="Monthly budget amount per budget category",
        examples=[{"Food & Dining": 15000, "Transport": 5000}],
    )
    updated_at: Optional[datetime] = None


class BudgetsUpdateSchema(BaseModel):
    """Schema for POST /v1/budgets request body."""

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"budgets": {"Food & Dining": 12000, "Shopping": 8000}}]}
    )

    budgets: Dict[str, float]


class BudgetUpdateSchema(BaseModel):
    """Schema for PUT /v1/budgets request body."""

    category: str = Field(..., min_length=1, examples=["Food & Dining"])
    amount: float = Field(..., examples=[12000])


class BudgetCategorySchema(BaseModel):
    id: str
    name: str
    budget_amount: float
    transaction_categories: List[str]
    description: str
    updated_at: datetime


class BudgetPeriodSchema(BaseModel):
    year: int
    month: int
    days_in_month: int
    elapsed_days: int
    remaining_days: int
    is_partial: bool
    label: str


class BudgetSpendingSchema(BaseModel):
    name: str
    budget: float
    rollover: float
    effective_budget: float
    prorated_budget: float
    actual_spent: float
    projected_spent: float
    remaining: float
    percent_used: float
    is_overspent: bool
    status: str = Field(..., description="on_track, warning or exceeded")
    transaction_count: int


class BudgetStatusSchema(BaseModel):
    """Schema for GET /v1/budgets/status response body."""

    period: BudgetPeriodSchema
    categories: List[BudgetSpendingSchema]
    total_budget: float
    total_spent: float
    total_remaining: float


class BudgetSuggestionSchema(BaseModel):
    name: str
    current_budget: float
    avg_3_month: float = Field(..., description="Average monthly spend over the months analyzed")
    suggested_budget: float
    reasoning: str


class BudgetSuggestionsSchema(BaseModel):
    """Schema for GET /v1/budgets/suggestions response body."""

    suggestions: List[BudgetSuggestionSchema]
    total_current: float
    total_suggested: float
    months_analyzed: int


class NWIBucketConfigSchema(BaseModel):
    percentage: float = Field(..., ge=0, le=100)
    categories: List[str] = Field(default_factory=list)


class NWIConfigSchema(BaseModel):
    """NWI configuration, used for both the request and response."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "needs": {"percentage": 50, "categories": ["Rent", "Groceries"]},
                    "wants": {"percentage": 30, "categories": ["Dining", "Shopping"]},
                    "investments": {"percentage": 20, "categories": ["Investment"]},
                }
            ]
        }
    )

    needs: NWIBucketConfigSchema
    wants: NWIBucketConfigSchema
    investments: NWIBucketConfigSchema
    savings: Optional[NWIBucketConfigSchema] = None


class NWIConfigUpdateSchema(BaseModel):
    """Schema for PUT /v1/nwi-config; omitted buckets keep their current value."""

    needs: Optional[NWIBucketConfigSchema] = None
    wants: Optional[NWIBucketConfigSchema] = None
    investments: Optional[NWIBucketConfigSchema] = None
    savings: Optional[NWIBucketConfigSchema] = None


class CategoryAmountSchema(BaseModel):
    category: str
    amount: float


class NWIBucketResultSchema(BaseModel):
    bucket: str
    target_percentage: float
    actual_percentage: float
    target_amount: float
    actual_amount: float
    difference: float
    category_breakdown: List[CategoryAmountSchema]


class NWISplitSchema(BaseModel):
    """Schema for GET /v1/nwi/split response body."""

    year: int
    month: int
    total_income: float
    buckets: Dict[str, NWIBucketResultSchema]
