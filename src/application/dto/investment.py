"""Data transfer objects for investment operations."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from src.service.finance import CashFlow


@dataclass(frozen=True)
class XIRRRequest:
    """
    Cash flows for an XIRR calculation.

    When `current_value` is given, `cash_flows` are treated as
    investments valued at `current_value` on `current_date`.
    """

    cash_flows: List[CashFlow] = field(default_factory=list)
    current_value: Optional[float] = None
    current_date: Optional[date] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.cash_flows:
            errors.append("cash_flows cannot be empty")

        if self.current_value is None and len(self.cash_flows) < 2:
            errors.append("At least two cash flows are required")

        return errors


@dataclass(frozen=True)
class AddStockRequest:
    user_id: str
    symbol: str
    shares: float
    average_cost: float
    exchange: str = "NSE"

    def validate(self) -> List[str]:
        errors = []

        if not self.symbol.strip():
            errors.append("symbol is required")

        if self.shares <= 0:
            errors.append("shares must be positive")

        if self.average_cost <= 0:
            errors.append("average_cost must be positive")

        return errors


@dataclass(frozen=True)
class AddMutualFundRequest:
    user_id: str
    scheme_name: str
    units: float
    invested_value: float
    scheme_code: Optional[int] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.scheme_name.strip():
            errors.append("scheme_name is required")

        if self.units <= 0:
            errors.append("units must be positive")

        if self.invested_value < 0:
            errors.append("invested_value cannot be negative")

        return errors
