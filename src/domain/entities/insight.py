"""AI insight entity cached per user and insight type."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from .common import to_naive_utc, utcnow


class InsightType(str, Enum):
    SPENDING_ANALYSIS = "spending_analysis"
    MONTHLY_BUDGET = "monthly_budget"
    WEEKLY_BUDGET = "weekly_budget"
    INVESTMENT_INSIGHTS = "investment_insights"
    TAX_OPTIMIZATION = "tax_optimization"
    PLANNER_RECOMMENDATION = "planner_recommendation"

    @property
    def requires_transactions(self) -> bool:
        """Whether generation needs at least one transaction."""
        return self not in (
            InsightType.INVESTMENT_INSIGHTS,
            InsightType.TAX_OPTIMIZATION,
            InsightType.PLANNER_RECOMMENDATION,
        )


@dataclass
class AIInsight:
    """A generated analysis persisted for reuse until it goes stale."""

    user_id: str
    type: InsightType
    content: str
    data_points: int
    sections: Optional[List[Dict[str, Any]]] = None
    generated_at: datetime = field(default_factory=utcnow)
    id: UUID = field(default_factory=uuid4)

    def is_stale(self, max_age: timedelta, now: datetime | None = None) -> bool:
        """True when the insight is older than `max_age`."""
        current = to_naive_utc(now) if now else utcnow()
        return current - to_naive_utc(self.generated_at) > max_age
