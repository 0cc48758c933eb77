"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException, NotFoundException
from .budget import (
    BudgetCategoryNotFoundException,
    InvalidBudgetRequestException,
    InvalidNWIConfigException,
)
from .goal import InvalidGoalRequestException, SavingsGoalNotFoundException
from .insight import (
    InsightGenerationException,
    InsightUnavailableException,
    InsufficientDataException,
)
from .investment import InvalidInvestmentRequestException
from .job import JobNotFoundException
from .learn import InvalidQuizSubmissionException, QuizNotFoundException
from .notification import NotificationNotFoundException
from .market_data import (
    MarketDataException,
    MarketDataTimeoutException,
    SchemeNotFoundException,
    TransactionFeedException,
)
from .rule import InvalidRuleRequestException, RuleNotFoundException
from .subscription import (
    InvalidSubscriptionRequestException,
    SubscriptionNotFoundException,
)
from .transaction import (
    InvalidPeriodException,
    InvalidTransactionRequestException,
    TransactionNotFoundException,
)

__all__ = [
    "DomainException",
    "NotFoundException",
    "BudgetCategoryNotFoundException",
    "InvalidBudgetRequestException",
    "InvalidNWIConfigException",
    "InvalidGoalRequestException",
    "SavingsGoalNotFoundException",
    "InsightGenerationException",
    "InsightUnavailableException",
    "InsufficientDataException",
    "InvalidInvestmentRequestException",
    "JobNotFoundException",
    "InvalidQuizSubmissionException",
    "QuizNotFoundException",
    "NotificationNotFoundException",
    "MarketDataException",
    "MarketDataTimeoutException",
    "SchemeNotFoundException",
    "TransactionFeedException",
    "InvalidRuleRequestException",
    "RuleNotFoundException",
    "InvalidSubscriptionRequestException",
    "SubscriptionNotFoundException",
    "InvalidPeriodException",
    "InvalidTransactionRequestException",
    "TransactionNotFoundException",
]
