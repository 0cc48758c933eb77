"""Data transfer objects for savings and income goals."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from src.domain.entities import IncomeSource

INCOME_FREQUENCIES = ("monthly", "quarterly", "yearly", "one-time")


@dataclass(frozen=True)
class CreateSavingsGoalRequest:
    user_id: str
    name: str
    target_amount: float
    target_date: date
    current_amount: float = 0.0
    monthly_contribution: float = 0.0
    auto_track: bool = False
    category: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.name.strip():
            errors.append("name is required")

        if self.target_amount <= 0:
            errors.append("target_amount must be positive")

        if self.current_amount < 0:
            errors.append("current_amount cannot be negative")

        if self.monthly_contribution < 0:
            errors.append("monthly_contribution cannot be negative")

        return errors


@dataclass(frozen=True)
class UpdateSavingsGoalRequest:
    """
    Partial savings goal update; None fields are left unchanged.

    `add_amount` is added on top of the current amount, for recording a
    deposit without reading the goal first.
    """

    name: Optional[str] = None
    target_amount: Optional[float] = None
    target_date: Optional[date] = None
    current_amount: Optional[float] = None
    add_amount: Optional[float] = None
    monthly_contribution: Optional[float] = None
    auto_track: Optional[bool] = None
    category: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if self.name is not None and not self.name.strip():
            errors.append("name cannot be empty")

        if self.target_amount is not None and self.target_amount <= 0:
            errors.append("target_amount must be positive")

        if self.current_amount is not None and self.current_amount < 0:
            errors.append("current_amount cannot be negative")

        if self.add_amount is not None and self.current_amount is not None:
            errors.append("current_amount and add_amount cannot both be set")

        if self.monthly_contribution is not None and self.monthly_contribution < 0:
            errors.append("monthly_contribution cannot be negative")

        return errors


@dataclass(frozen=True)
class IncomeGoalRequest:
    user_id: str
    target_amount: float
    target_date: date
    sources: List[IncomeSource] = field(default_factory=list)

    def validate(self) -> List[str]:
        errors = []

        if self.target_amount <= 0:
            errors.append("target_amount must be positive")

        for source in self.sources:
            if not source.name.strip():
                errors.append("source name is required")
            if source.expected < 0:
                errors.append(f"expected income for {source.name} cannot be negative")
            if source.frequency not in INCOME_FREQUENCIES:
                errors.append(f"Unknown income frequency: {source.frequency}")

        return errors
