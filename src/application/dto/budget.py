"""Data transfer objects for budget and NWI operations."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.domain.entities import NWIBucketConfig


@dataclass(frozen=True)
class BudgetUpdateRequest:
    """Bulk update of budget amounts keyed by budget category name."""

    user_id: str
    budgets: Dict[str, float] = field(default_factory=dict)

    def validate(self) -> List[str]:
        errors = []

        if not self.budgets:
            errors.append("budgets cannot be empty")

        for name, amount in self.budgets.items():
            if amount is None or amount < 0:
                errors.append(f"Budget for {name} must be zero or more")

        return errors


@dataclass(frozen=True)
class NWIConfigUpdateRequest:
    """Partial NWI config update; omitted buckets keep their current values."""

    user_id: str
    needs: Optional[NWIBucketConfig] = None
    wants: Optional[NWIBucketConfig] = None
    investments: Optional[NWIBucketConfig] = None
    savings: Optional[NWIBucketConfig] = None
