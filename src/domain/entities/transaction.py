"""Transaction entity representing a single money movement."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4

from .common import utcnow
from .nwi import NWIBucket


class TransactionType(str, Enum):
    """Direction and nature of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"
    INVESTMENT = "investment"
    REFUND = "refund"


class TransactionStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"
    CANCELLED = "cancelled"


class TransactionCategory(str, Enum):
    """Fixed category list used across budgets, NWI and analytics."""

    # Income
    SALARY = "Salary"
    FREELANCE = "Freelance"
    BUSINESS = "Business"
    INVESTMENT_INCOME = "Investment Income"
    OTHER_INCOME = "Other Income"

    # Essentials
    RENT = "Rent"
    UTILITIES = "Utilities"
    GROCERIES = "Groceries"
    HEALTHCARE = "Healthcare"
    INSURANCE = "Insurance"
    TRANSPORT = "Transport"
    FUEL = "Fuel"

    # Lifestyle
    DINING = "Dining"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    TRAVEL = "Travel"
    EDUCATION = "Education"
    FITNESS = "Fitness"
    PERSONAL_CARE = "Personal Care"

    # Financial
    SAVINGS = "Savings"
    INVESTMENT = "Investment"
    LOAN_PAYMENT = "Loan Payment"
    CREDIT_CARD = "Credit Card"
    TAX = "Tax"

    # Other
    SUBSCRIPTION = "Subscription"
    GIFTS = "Gifts"
    CHARITY = "Charity"
    MISCELLANEOUS = "Miscellaneous"
    UNCATEGORIZED = "Uncategorized"


class PaymentMethod(str, Enum):
    CASH = "Cash"
    DEBIT_CARD = "Debit Card"
    CREDIT_CARD = "Credit Card"
    UPI = "UPI"
    NEFT = "NEFT"
    IMPS = "IMPS"
    NET_BANKING = "Net Banking"
    WALLET = "Wallet"
    CHEQUE = "Cheque"
    OTHER = "Other"


@dataclass
class Transaction:
    """
    A single ledger entry for a user.

    Attributes:
        date: Date the money moved
        amount: Positive amount in rupees; direction comes from `type`
        type: Income, expense, transfer, investment or refund
        category: One of the fixed transaction categories
        balance: Account balance after this transaction, when known
        nwi_override: Forces the NWI bucket regardless of category
        category_override: True when a user set the category by hand,
            so sync and rules must not replace it
        external_id: Identifier from the upstream feed, used for upserts
    """

    date: date
    amount: float
    type: TransactionType
    category: TransactionCategory = TransactionCategory.UNCATEGORIZED
    description: str = ""
    merchant: str = ""
    payment_method: PaymentMethod = PaymentMethod.OTHER
    account: str = ""
    status: TransactionStatus = TransactionStatus.COMPLETED
    tags: List[str] = field(default_factory=list)
    notes: str = ""
    recurring: bool = False
    balance: Optional[float] = None
    nwi_override: Optional[NWIBucket] = None
    category_override: bool = False
    external_id: Optional[str] = None
    user_id: str = "default"
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)

    @property
    def is_completed(self) -> bool:
        return self.status == TransactionStatus.COMPLETED

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def is_investment(self) -> bool:
        return self.type == TransactionType.INVESTMENT

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": str(self.id),
            "external_id": self.external_id,
            "date": self.date.isoformat(),
            "description": self.description,
            "merchant": self.merchant,
            "category": self.category.value,
            "amount": round(self.amount, 2),
            "type": self.type.value,
            "payment_method": self.payment_method.value,
            "account": self.account,
            "status": self.status.value,
            "tags": list(self.tags),
            "notes": self.notes,
            "recurring": self.recurring,
            "balance": self.balance,
            "nwi_override": self.nwi_override.value if self.nwi_override else None,
            "category_override": self.category_override,
        }
