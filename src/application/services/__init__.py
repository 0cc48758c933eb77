"""Application services (use cases)."""

from .analytics_service import AnalyticsService
from .budget_service import BudgetService
from .goal_service import GoalService
from .insight_service import InsightService
from .investment_service import InvestmentService
from .learn_service import LearnService
from .notification_service import NotificationService
from .subscription_service import RuleService, SubscriptionService
from .transaction_service import TransactionService

__all__ = [
    "AnalyticsService",
    "BudgetService",
    "GoalService",
    "InsightService",
    "InvestmentService",
    "LearnService",
    "NotificationService",
    "RuleService",
    "SubscriptionService",
    "TransactionService",
]
