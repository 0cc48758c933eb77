"""Domain Entities - Core business objects."""

from .budget import BudgetCategory
from .categorization import CategorizationRule, MatchField
from .common import utcnow
from .goal import IncomeGoal, IncomeSource, SavingsGoal
from .holding import MutualFundHolding, StockHolding
from .insight import AIInsight, InsightType
from .job import JobRun, JobStatus
from .learn import Difficulty, LearnProgress, LearnStatus, LearnTopic, QuizQuestion
from .market import NAVPoint, NAVResult, SchemeHistory, SchemeSearchResult, StockQuote
from .notification import Notification, NotificationSeverity, NotificationType
from .nwi import NWIBucket, NWIBucketConfig, NWIConfig
from .subscription import Subscription, SubscriptionFrequency, SubscriptionStatus
from .transaction import (
    PaymentMethod,
    Transaction,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)

__all__ = [
    "AIInsight",
    "BudgetCategory",
    "CategorizationRule",
    "Difficulty",
    "IncomeGoal",
    "IncomeSource",
    "InsightType",
    "JobRun",
    "JobStatus",
    "LearnProgress",
    "LearnStatus",
    "LearnTopic",
    "MatchField",
    "NAVPoint",
    "NAVResult",
    "MutualFundHolding",
    "Notification",
    "NotificationSeverity",
    "NotificationType",
    "NWIBucket",
    "NWIBucketConfig",
    "NWIConfig",
    "PaymentMethod",
    "QuizQuestion",
    "SavingsGoal",
    "SchemeHistory",
    "SchemeSearchResult",
    "StockHolding",
    "StockQuote",
    "Subscription",
    "SubscriptionFrequency",
    "SubscriptionStatus",
    "Transaction",
    "TransactionCategory",
    "TransactionStatus",
    "TransactionType",
    "utcnow",
]
