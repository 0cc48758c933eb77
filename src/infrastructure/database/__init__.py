"""Database infrastructure."""

from .connection import get_db_session, DatabaseSessionManager, db_manager
from .models import (
    AIInsightModel,
    Base,
    BudgetCategoryModel,
    CategorizationRuleModel,
    JobRunModel,
    LearnProgressModel,
    MutualFundHoldingModel,
    NotificationModel,
    NWIConfigModel,
    StockHoldingModel,
    SubscriptionModel,
    TransactionModel,
)

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "AIInsightModel",
    "Base",
    "BudgetCategoryModel",
    "CategorizationRuleModel",
    "JobRunModel",
    "LearnProgressModel",
    "MutualFundHoldingModel",
    "NotificationModel",
    "NWIConfigModel",
    "StockHoldingModel",
    "SubscriptionModel",
    "TransactionModel",
]
