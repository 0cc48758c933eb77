"""Subscription entity for tracked recurring charges."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from uuid import UUID, uuid4

from .common import utcnow


class SubscriptionFrequency(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"


@dataclass
class Subscription:
    """A recurring charge the user tracks explicitly."""

    user_id: str
    name: str
    amount: float
    frequency: SubscriptionFrequency
    next_expected: date
    category: str = "Subscription"
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def monthly_equivalent(self) -> float:
        """Cost normalized to one month."""
        if self.frequency == SubscriptionFrequency.WEEKLY:
            return self.amount * (52 / 12)
        if self.frequency == SubscriptionFrequency.YEARLY:
            return self.amount / 12
        return self.amount

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "amount": self.amount,
            "frequency": self.frequency.value,
            "next_expected": self.next_expected.isoformat(),
            "category": self.category,
            "status": self.status.value,
            "monthly_equivalent": round(self.monthly_equivalent, 2),
        }
