"""Pydantic schemas for API request/response validation."""

from .budget import (
    BudgetCategorySchema,
    BudgetsResponseSchema,
    BudgetStatusSchema,
    BudgetSuggestionsSchema,
    BudgetsUpdateSchema,
    BudgetUpdateSchema,
    NWIConfigSchema,
    NWIConfigUpdateSchema,
    NWISplitSchema,
)
from .error import ErrorResponseSchema
from .goal import (
    IncomeGoalRequestSchema,
    IncomeGoalSchema,
    SavingsGoalCreateSchema,
    SavingsGoalListSchema,
    SavingsGoalSchema,
    SavingsGoalUpdateSchema,
)
from .insight import InsightRequestSchema, InsightResponseSchema
from .investment import (
    HoldingsSchema,
    MutualFundHoldingCreateSchema,
    MutualFundHoldingSchema,
    StockHoldingCreateSchema,
    StockHoldingSchema,
    XIRRRequestSchema,
    XIRRResponseSchema,
)
from .job import JobListSchema, JobRunRequestSchema, JobRunSchema
from .learn import (
    ProgressListSchema,
    ProgressSchema,
    ProgressUpdateSchema,
    QuizResultSchema,
    QuizSubmitSchema,
    TopicListSchema,
)
from .notification import NotificationListSchema, NotificationSchema
from .subscription import (
    RuleCreateSchema,
    RuleListSchema,
    RuleSchema,
    RuleUpdateSchema,
    SubscriptionCreateSchema,
    SubscriptionListSchema,
    SubscriptionSchema,
    SubscriptionUpdateSchema,
)
from .transaction import (
    RecurringListSchema,
    TransactionCreateSchema,
    TransactionListSchema,
    TransactionSchema,
)

__all__ = [
    "BudgetCategorySchema",
    "BudgetsResponseSchema",
    "BudgetStatusSchema",
    "BudgetSuggestionsSchema",
    "BudgetsUpdateSchema",
    "BudgetUpdateSchema",
    "NWIConfigSchema",
    "NWIConfigUpdateSchema",
    "NWISplitSchema",
    "ErrorResponseSchema",
    "IncomeGoalRequestSchema",
    "IncomeGoalSchema",
    "SavingsGoalCreateSchema",
    "SavingsGoalListSchema",
    "SavingsGoalSchema",
    "SavingsGoalUpdateSchema",
    "InsightRequestSchema",
    "InsightResponseSchema",
    "HoldingsSchema",
    "MutualFundHoldingCreateSchema",
    "MutualFundHoldingSchema",
    "StockHoldingCreateSchema",
    "StockHoldingSchema",
    "XIRRRequestSchema",
    "XIRRResponseSchema",
    "JobListSchema",
    "JobRunRequestSchema",
    "JobRunSchema",
    "ProgressListSchema",
    "ProgressSchema",
    "ProgressUpdateSchema",
    "QuizResultSchema",
    "QuizSubmitSchema",
    "TopicListSchema",
    "NotificationListSchema",
    "NotificationSchema",
    "RuleCreateSchema",
    "RuleListSchema",
    "RuleSchema",
    "RuleUpdateSchema",
    "SubscriptionCreateSchema",
    "SubscriptionListSchema",
    "SubscriptionSchema",
    "SubscriptionUpdateSchema",
    "RecurringListSchema",
    "TransactionCreateSchema",
    "TransactionListSchema",
    "TransactionSchema",
]
