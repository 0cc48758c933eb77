"""Repository implementations."""

from .budget_repository import PostgresBudgetRepository, PostgresNWIConfigRepository
from .goal_repository import PostgresIncomeGoalRepository, PostgresSavingsGoalRepository
from .holding_repository import PostgresHoldingRepository
from .insight_repository import PostgresInsightRepository
from .job_run_repository import PostgresJobRunRepository
from .learn_repository import PostgresLearnProgressRepository
from .notification_repository import PostgresNotificationRepository
from .subscription_repository import PostgresRuleRepository, PostgresSubscriptionRepository
from .transaction_repository import PostgresTransactionRepository

__all__ = [
    "PostgresBudgetRepository",
    "PostgresHoldingRepository",
    "PostgresIncomeGoalRepository",
    "PostgresInsightRepository",
    "PostgresJobRunRepository",
    "PostgresLearnProgressRepository",
    "PostgresNWIConfigRepository",
    "PostgresNotificationRepository",
    "PostgresRuleRepository",
    "PostgresSavingsGoalRepository",
    "PostgresSubscriptionRepository",
    "PostgresTransactionRepository",
]
