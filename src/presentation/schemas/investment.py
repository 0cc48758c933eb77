"""Market data, XIRR and holdings Pydantic schemas."""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CashFlowSchema(BaseModel):
    date: date
    amount: float = Field(..., description="Negative for money invested, positive for money returned")


class XIRRRequestSchema(BaseModel):
    """Schema for POST /v1/investments/xirr request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "cash_flows": [
                        {"date": "2023-01-01", "amount": -10000},
                        {"date": "2024-01-01", "amount": -10000},
                    ],
                    "current_value": 23500,
                    "current_date": "2025-01-01",
                }
            ]
        }
    )

    cash_flows: List[CashFlowSchema] = Field(..., min_length=1)
    current_value: Optional[float] = Field(
        None,
        ge=0,
        description="Value today; when set the flows are treated as investments",
    )
    current_date: Optional[date] = None


class XIRRResponseSchema(BaseModel):
    xirr: Optional[float] = Field(
        ...,
        description="Annualized return in percent; null when it does not converge",
    )
    cash_flow_count: int


class NAVSchema(BaseModel):
    scheme_code: int
    scheme_name: str
    nav: float
    date: date


class SchemeSearchResultSchema(BaseModel):
    scheme_code: int
    scheme_name: str


class TrailingReturnSchema(BaseModel):
    period: str
    years: int
    annualized_return: float
    start_nav: float
    end_nav: float
    start_date: date
    end_date: date


class SchemeHistorySchema(BaseModel):
    scheme_code: int
    scheme_name: str
    meta: Dict[str, object]
    latest_nav: float
    latest_date: date
    data_points: int
    trailing_returns: List[TrailingReturnSchema]


class StockQuoteSchema(BaseModel):
    symbol: str
    price: float
    change: float
    change_percent: float
    source: str


class StockHoldingCreateSchema(BaseModel):
    """Schema for POST /v1/investments/stocks request body."""

    symbol: str = Field(..., min_length=1, max_length=32, examples=["INFY"])
    shares: float = Field(..., gt=0)
    average_cost: float = Field(..., gt=0)
    exchange: str = Field("NSE", examples=["NSE", "BSE"])


class MutualFundHoldingCreateSchema(BaseModel):
    """Schema for POST /v1/investments/mutual-funds request body."""

    scheme_name: str = Field(..., min_length=1, max_length=255)
    units: float = Field(..., gt=0)
    invested_value: float = Field(..., ge=0)
    scheme_code: Optional[int] = Field(None, description="Resolved from the scheme name when omitted")


class StockHoldingSchema(BaseModel):
    id: str
    symbol: str
    exchange: str
    shares: float
    average_cost: float
    current_price: Optional[float] = None
    day_change: Optional[float] = None
    day_change_percentage: Optional[float] = None
    invested_value: float
    current_value: float
    total_returns: float
    returns_percentage: float


class MutualFundHoldingSchema(BaseModel):
    id: str
    scheme_name: str
    scheme_code: Optional[int] = None
    units: float
    invested_value: float
    current_nav: Optional[float] = None
    current_value: Optional[float] = None
    returns: float


class PortfolioTotalsSchema(BaseModel):
    invested_value: float
    current_value: float
    total_returns: float
    returns_percentage: float


class HoldingsSchema(BaseModel):
    """Schema for GET /v1/investments/holdings response body."""

    stocks: List[StockHoldingSchema]
    mutual_funds: List[MutualFundHoldingSchema]
    totals: PortfolioTotalsSchema
