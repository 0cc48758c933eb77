"""Data Transfer Objects for application layer."""

from .budget import BudgetUpdateRequest, NWIConfigUpdateRequest
from .goal import CreateSavingsGoalRequest, IncomeGoalRequest, UpdateSavingsGoalRequest
from .insight import InsightResponse
from .investment import AddMutualFundRequest, AddStockRequest, XIRRRequest
from .subscription import (
    CreateSubscriptionRequest,
    RuleRequest,
    UpdateSubscriptionRequest,
)
from .transaction import CreateTransactionRequest, TransactionQuery

__all__ = [
    "AddMutualFundRequest",
    "AddStockRequest",
    "BudgetUpdateRequest",
    "CreateSavingsGoalRequest",
    "CreateSubscriptionRequest",
    "CreateTransactionRequest",
    "IncomeGoalRequest",
    "InsightResponse",
    "NWIConfigUpdateRequest",
    "RuleRequest",
    "TransactionQuery",
    "UpdateSavingsGoalRequest",
    "UpdateSubscriptionRequest",
    "XIRRRequest",
]
