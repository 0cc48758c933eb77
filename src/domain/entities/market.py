"""Market data value objects returned by the price providers."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List


@dataclass(frozen=True)
class SchemeSearchResult:
    scheme_code: int
    scheme_name: str

    def to_dict(self) -> dict:
        return {"scheme_code": self.scheme_code, "scheme_name": self.scheme_name}


@dataclass(frozen=True)
class NAVPoint:
    date: date
    nav: float


@dataclass(frozen=True)
class NAVResult:
    """Latest NAV of a mutual fund scheme."""

    scheme_code: int
    scheme_name: str
    nav: float
    date: date

    def to_dict(self) -> dict:
        return {
            "scheme_code": self.scheme_code,
            "scheme_name": self.scheme_name,
            "nav": self.nav,
            "date": self.date.isoformat(),
        }


@dataclass
class SchemeHistory:
    """
    Full NAV history of a scheme.

    `points` are sorted newest first. `meta` carries the provider's
    scheme metadata (fund house, category, etc.) as returned.
    """

    scheme_code: int
    scheme_name: str
    meta: Dict[str, Any] = field(default_factory=dict)
    points: List[NAVPoint] = field(default_factory=list)


@dataclass(frozen=True)
class StockQuote:
    """
    Price snapshot for one stock symbol.

    `source` names the provider that answered, or "none" when every
    provider failed for this symbol.
    """

    symbol: str
    price: float
    change: float
    change_percent: float
    source: str

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "price": self.price,
            "change": self.change,
            "change_percent": self.change_percent,
            "source": self.source,
        }
