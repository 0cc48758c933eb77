"""Budget category entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from uuid import UUID, uuid4

from .common import utcnow


@dataclass
class BudgetCategory:
    """
    A user-facing budget bucket (e.g. "Food & Dining").

    Each budget category groups one or more transaction categories
    and carries a monthly budget amount in rupees.
    """

    user_id: str
    name: str
    budget_amount: float
    transaction_categories: List[str] = field(default_factory=list)
    description: str = ""
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "budget_amount": self.budget_amount,
            "transaction_categories": list(self.transaction_categories),
            "description": self.description,
            "updated_at": self.updated_at.isoformat() + "Z",
        }
