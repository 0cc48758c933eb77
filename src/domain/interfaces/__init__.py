"""
Domain Interfaces (Ports)
"""

from .repositories import (
    BudgetRepository,
    HoldingRepository,
    IncomeGoalRepository,
    InsightRepository,
    JobRunRepository,
    LearnProgressRepository,
    NotificationRepository,
    NWIConfigRepository,
    RuleRepository,
    SavingsGoalRepository,
    SubscriptionRepository,
    TransactionRepository,
)
from .clients import (
    InsightGeneratorClient,
    MutualFundClient,
    StockQuoteClient,
    TransactionFeedClient,
)

__all__ = [
    "BudgetRepository",
    "HoldingRepository",
    "IncomeGoalRepository",
    "InsightRepository",
    "JobRunRepository",
    "LearnProgressRepository",
    "NotificationRepository",
    "NWIConfigRepository",
    "RuleRepository",
    "SavingsGoalRepository",
    "SubscriptionRepository",
    "TransactionRepository",
    "InsightGeneratorClient",
    "MutualFundClient",
    "StockQuoteClient",
    "TransactionFeedClient",
]
