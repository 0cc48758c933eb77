"""Savings and income goal entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional
from uuid import UUID, uuid4

from .common import utcnow


@dataclass
class SavingsGoal:
    """A target amount the user is saving towards by a date."""

    user_id: str
    name: str
    target_amount: float
    target_date: date
    current_amount: float = 0.0
    monthly_contribution: float = 0.0
    auto_track: bool = False
    category: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def remaining(self) -> float:
        return max(0.0, self.target_amount - self.current_amount)

    @property
    def is_complete(self) -> bool:
        return self.current_amount >= self.target_amount


@dataclass
class IncomeSource:
    """An expected income stream attached to an income goal."""

    name: str
    expected: float
    frequency: str = "monthly"

    def to_dict(self) -> dict:
        return {"name": self.name, "expected": self.expected, "frequency": self.frequency}


@dataclass
class IncomeGoal:
    """Annual income target; a user has at most one."""

    user_id: str
    target_amount: float
    target_date: date
    sources: List[IncomeSource] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
