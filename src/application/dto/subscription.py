"""Data transfer objects for subscriptions and categorization rules."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from src.domain.entities import (
    MatchField,
    SubscriptionFrequency,
    SubscriptionStatus,
    TransactionCategory,
)

_CATEGORY_VALUES = {c.value for c in TransactionCategory}


@dataclass(frozen=True)
class CreateSubscriptionRequest:
    user_id: str
    name: str
    amount: float
    frequency: SubscriptionFrequency
    next_expected: date
    category: str = TransactionCategory.SUBSCRIPTION.value

    def validate(self) -> List[str]:
        errors = []

        if not self.name.strip():
            errors.append("name is required")

        if self.amount <= 0:
            errors.append("amount must be positive")

        return errors


@dataclass(frozen=True)
class UpdateSubscriptionRequest:
    """Partial subscription update; None fields are left unchanged."""

    name: Optional[str] = None
    amount: Optional[float] = None
    frequency: Optional[SubscriptionFrequency] = None
    next_expected: Optional[date] = None
    category: Optional[str] = None
    status: Optional[SubscriptionStatus] = None

    def validate(self) -> List[str]:
        errors = []

        if self.name is not None and not self.name.strip():
            errors.append("name cannot be empty")

        if self.amount is not None and self.amount <= 0:
            errors.append("amount must be positive")

        return errors


@dataclass(frozen=True)
class RuleRequest:
    """
    Create or update a categorization rule.

    On update, None fields are left unchanged.
    """

    pattern: Optional[str] = None
    category: Optional[str] = None
    match_field: Optional[MatchField] = None
    case_sensitive: Optional[bool] = None
    enabled: Optional[bool] = None

    def validate(self, creating: bool = False) -> List[str]:
        errors = []

        if creating and not (self.pattern and self.pattern.strip()):
            errors.append("pattern is required")
        elif self.pattern is not None and not self.pattern.strip():
            errors.append("pattern cannot be empty")

        if creating and not self.category:
            errors.append("category is required")

        if self.category is not None and self.category not in _CATEGORY_VALUES:
            errors.append(f"Unknown category: {self.category}")

        return errors
