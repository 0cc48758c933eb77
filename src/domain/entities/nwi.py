"""NWI (Needs / Wants / Investments) configuration entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from .common import utcnow


class NWIBucket(str, Enum):
    """Spending bucket a transaction is classified into."""

    NEEDS = "needs"
    WANTS = "wants"
    INVESTMENTS = "investments"
    SAVINGS = "savings"


@dataclass
class NWIBucketConfig:
    """Target percentage and member categories for one bucket."""

    percentage: float
    categories: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "percentage": self.percentage,
            "categories": list(self.categories),
        }


@dataclass
class NWIConfig:
    """
    A user's NWI split configuration.

    The savings bucket is optional; when absent, only the three
    classic buckets are used for classification and targets.
    """

    user_id: str
    needs: NWIBucketConfig
    wants: NWIBucketConfig
    investments: NWIBucketConfig
    savings: Optional[NWIBucketConfig] = None
    updated_at: datetime = field(default_factory=utcnow)

    def buckets(self) -> Dict[NWIBucket, NWIBucketConfig]:
        """Configured buckets in classification-report order."""
        result = {
            NWIBucket.NEEDS: self.needs,
            NWIBucket.WANTS: self.wants,
            NWIBucket.INVESTMENTS: self.investments,
        }
        if self.savings is not None:
            result[NWIBucket.SAVINGS] = self.savings
        return result

    def to_dict(self) -> dict:
        data = {
            "needs": self.needs.to_dict(),
            "wants": self.wants.to_dict(),
            "investments": self.investments.to_dict(),
        }
        if self.savings is not None:
            data["savings"] = self.savings.to_dict()
        return data
