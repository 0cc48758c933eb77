"""Investment holding entities (stocks and mutual funds)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from .common import utcnow


@dataclass
class StockHolding:
    """An equity position priced from a quote provider."""

    user_id: str
    symbol: str
    shares: float
    average_cost: float
    exchange: str = "NSE"
    current_price: Optional[float] = None
    day_change: float = 0.0
    day_change_percentage: float = 0.0
    id: UUID = field(default_factory=uuid4)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def invested_value(self) -> float:
        return self.shares * self.average_cost

    @property
    def current_value(self) -> float:
        price = self.current_price if self.current_price is not None else self.average_cost
        return self.shares * price

    @property
    def total_returns(self) -> float:
        return self.current_value - self.invested_value

    @property
    def returns_percentage(self) -> float:
        if self.invested_value <= 0:
            return 0.0
        return self.total_returns / self.invested_value * 100

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "symbol": self.symbol,
            "exchange": self.exchange,
            "shares": self.shares,
            "average_cost": self.average_cost,
            "current_price": self.current_price,
            "day_change": self.day_change,
            "day_change_percentage": self.day_change_percentage,
            "invested_value": round(self.invested_value, 2),
            "current_value": round(self.current_value, 2),
            "total_returns": round(self.total_returns, 2),
            "returns_percentage": round(self.returns_percentage, 2),
        }


@dataclass
class MutualFundHolding:
    """A mutual fund position priced from the NAV provider."""

    user_id: str
    scheme_name: str
    units: float
    invested_value: float
    scheme_code: Optional[int] = None
    current_nav: Optional[float] = None
    current_value: Optional[float] = None
    id: UUID = field(default_factory=uuid4)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def returns(self) -> float:
        if self.current_value is None:
            return 0.0
        return self.current_value - self.invested_value

    def apply_nav(self, nav: float) -> None:
        """Revalue the holding at a new NAV."""
        self.current_nav = nav
        self.current_value = round(nav * self.units, 2)
        self.updated_at = utcnow()

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "scheme_name": self.scheme_name,
            "scheme_code": self.scheme_code,
            "units": self.units,
            "invested_value": self.invested_value,
            "current_nav": self.current_nav,
            "current_value": self.current_value,
            "returns": round(self.returns, 2),
        }
