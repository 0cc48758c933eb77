"""Savings goal and income goal Pydantic schemas."""

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SavingsGoalCreateSchema(BaseModel):
    """Schema for POST /v1/savings-goals request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Emergency fund",
                    "target_amount": 300000,
                    "target_date": "2026-03-31",
                    "monthly_contribution": 15000,
                }
            ]
        }
    )

    name: str = Field(..., max_length=255)
    target_amount: float
    target_date: date
    current_amount: float = 0.0
    monthly_contribution: float = 0.0
    auto_track: bool = False
    category: Optional[str] = Field(None, max_length=50)


class SavingsGoalUpdateSchema(BaseModel):
    """Schema for PATCH /v1/savings-goals/{id}; omitted fields are unchanged."""

    name: Optional[str] = Field(None, max_length=255)
    target_amount: Optional[float] = None
    target_date: Optional[date] = None
    current_amount: Optional[float] = None
    add_amount: Optional[float] = Field(None, description="Added to the current amount")
    monthly_contribution: Optional[float] = None
    auto_track: Optional[bool] = None
    category: Optional[str] = Field(None, max_length=50)


class SavingsGoalSchema(BaseModel):
    id: str
    name: str
    target_amount: float
    current_amount: float
    target_date: date
    monthly_contribution: float
    auto_track: bool
    category: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    percentage_complete: float
    on_track: bool
    required_monthly: float
    projected_completion_date: Optional[date] = None
    months_remaining: int


class SavingsGoalListSchema(BaseModel):
    """Schema for GET /v1/savings-goals response body."""

    goals: List[SavingsGoalSchema]


class IncomeSourceSchema(BaseModel):
    name: str = Field(..., max_length=255)
    expected: float
    frequency: str = "monthly"


class IncomeGoalRequestSchema(BaseModel):
    """Schema for POST /v1/income-goals request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "target_amount": 1800000,
                    "target_date": "2026-03-31",
                    "sources": [{"name": "Salary", "expected": 150000, "frequency": "monthly"}],
                }
            ]
        }
    )

    target_amount: float
    target_date: date
    sources: List[IncomeSourceSchema] = Field(default_factory=list)


class IncomeGoalDetailSchema(BaseModel):
    id: str
    target_amount: float
    target_date: date
    sources: List[IncomeSourceSchema]
    updated_at: datetime


class MonthlyIncomeSchema(BaseModel):
    month: str = Field(..., description="YYYY-MM")
    total: float
    sources: Dict[str, float]


class IncomeProgressSchema(BaseModel):
    total_income: float
    fiscal_year_start: date
    fiscal_year_end: date
    monthly_breakdown: List[MonthlyIncomeSchema]
    month_over_month_growth: Optional[float] = Field(
        None, description="Percent change of the latest month over the one before"
    )
    income_sources: List[str]
    months_with_data: int


class IncomeGoalStatusSchema(BaseModel):
    percent_complete: float
    remaining: float
    months_remaining: int
    monthly_required: float
    on_track: bool


class IncomeGoalSchema(BaseModel):
    """Schema for GET /v1/income-goals response body."""

    goal: Optional[IncomeGoalDetailSchema] = None
    progress: IncomeProgressSchema
    status: Optional[IncomeGoalStatusSchema] = None
