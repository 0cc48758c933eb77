"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Dict, List, Optional
from uuid import UUID

from src.domain.entities import (
    AIInsight,
    BudgetCategory,
    CategorizationRule,
    IncomeGoal,
    InsightType,
    JobRun,
    LearnProgress,
    MutualFundHolding,
    Notification,
    NotificationType,
    NWIConfig,
    SavingsGoal,
    StockHolding,
    Subscription,
    Transaction,
    TransactionCategory,
    TransactionType,
)


class TransactionRepository(ABC):
    """
    Abstract repository for Transaction persistence.

    Implementations may use PostgreSQL, in-memory storage, etc.
    """

    @abstractmethod
    async def save(self, transaction: Transaction) -> Transaction:
        """
        Persist a transaction (insert or update by id).

        Args:
            transaction: The transaction to save

        Returns:
            The saved transaction
        """
        ...

    @abstractmethod
    async def save_many(self, transactions: List[Transaction]) -> List[Transaction]:
        """Persist a batch of transactions in one unit of work."""
        ...

    @abstractmethod
    async def get_by_id(self, user_id: str, transaction_id: UUID) -> Optional[Transaction]:
        ...

    @abstractmethod
    async def list(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        txn_type: Optional[TransactionType] = None,
        category: Optional[TransactionCategory] = None,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """
        Retrieve a user's transactions.

        Args:
            user_id: The user's identifier
            start: Inclusive lower date bound
            end: Inclusive upper date bound
            txn_type: Only this transaction type
            category: Only this category
            limit: Maximum number of transactions to return

        Returns:
            List of transactions, ordered by date descending
        """
        ...

    @abstractmethod
    async def get_by_external_ids(
        self,
        user_id: str,
        external_ids: List[str],
    ) -> Dict[str, Transaction]:
        """
        Look up already-synced transactions.

        Returns:
            Mapping of external id to the stored transaction
        """
        ...


class BudgetRepository(ABC):
    """Abstract repository for budget categories."""

    @abstractmethod
    async def list(self, user_id: str) -> List[BudgetCategory]:
        ...

    @abstractmethod
    async def get_by_name(self, user_id: str, name: str) -> Optional[BudgetCategory]:
        ...

    @abstractmethod
    async def save_many(self, budgets: List[BudgetCategory]) -> List[BudgetCategory]:
        """Insert or update budget categories (keyed by user and name)."""
        ...


class NWIConfigRepository(ABC):
    """Abstract repository for per-user NWI configuration."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[NWIConfig]:
        ...

    @abstractmethod
    async def save(self, config: NWIConfig) -> NWIConfig:
        ...


class SubscriptionRepository(ABC):
    """Abstract repository for tracked subscriptions."""

    @abstractmethod
    async def list(self, user_id: str) -> List[Subscription]:
        ...

    @abstractmethod
    async def get_by_id(self, user_id: str, subscription_id: UUID) -> Optional[Subscription]:
        ...

    @abstractmethod
    async def save(self, subscription: Subscription) -> Subscription:
        ...

    @abstractmethod
    async def delete(self, user_id: str, subscription_id: UUID) -> bool:
        """
        Delete a subscription.

        Returns:
            True if a row was deleted, False if it did not exist
        """
        ...


class SavingsGoalRepository(ABC):
    """Abstract repository for savings goals."""

    @abstractmethod
    async def list(self, user_id: str) -> List[SavingsGoal]:
        """Retrieve a user's goals, earliest target date first."""
        ...

    @abstractmethod
    async def get_by_id(self, user_id: str, goal_id: UUID) -> Optional[SavingsGoal]:
        ...

    @abstractmethod
    async def save(self, goal: SavingsGoal) -> SavingsGoal:
        ...

    @abstractmethod
    async def delete(self, user_id: str, goal_id: UUID) -> bool:
        ...


class IncomeGoalRepository(ABC):
    """Abstract repository for the single income goal per user."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[IncomeGoal]:
        ...

    @abstractmethod
    async def save(self, goal: IncomeGoal) -> IncomeGoal:
        """Insert or replace the user's income goal."""
        ...

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        ...


class RuleRepository(ABC):
    """Abstract repository for categorization rules."""

    @abstractmethod
    async def list(self, user_id: str) -> List[CategorizationRule]:
        """Retrieve a user's rules, newest first."""
        ...

    @abstractmethod
    async def get_by_id(self, user_id: str, rule_id: UUID) -> Optional[CategorizationRule]:
        ...

    @abstractmethod
    async def save(self, rule: CategorizationRule) -> CategorizationRule:
        ...

    @abstractmethod
    async def delete(self, user_id: str, rule_id: UUID) -> bool:
        ...


class LearnProgressRepository(ABC):
    """Abstract repository for learn module progress."""

    @abstractmethod
    async def list(self, user_id: str) -> List[LearnProgress]:
        ...

    @abstractmethod
    async def get(self, user_id: str, topic_id: str) -> Optional[LearnProgress]:
        ...

    @abstractmethod
    async def save(self, progress: LearnProgress) -> LearnProgress:
        """Insert or update progress (keyed by user and topic)."""
        ...


class NotificationRepository(ABC):
    """
    Abstract repository for notifications.

    Notifications are deduplicated on (type, dedup_key) inside a time
    window, so the repository must answer "was this already sent?".
    """

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        ...

    @abstractmethod
    async def get_by_id(self, user_id: str, notification_id: UUID) -> Optional[Notification]:
        ...

    @abstractmethod
    async def list(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 50,
    ) -> List[Notification]:
        """Retrieve notifications, newest first."""
        ...

    @abstractmethod
    async def exists_since(
        self,
        user_id: str,
        notification_type: NotificationType,
        dedup_key: str,
        since: datetime,
    ) -> bool:
        """
        Check for a notification with the same type and dedup key.

        Args:
            user_id: The user's identifier
            notification_type: Notification type
            dedup_key: Key identifying the condition
            since: Only notifications created at or after this time count

        Returns:
            True if a matching notification exists
        """
        ...


class InsightRepository(ABC):
    """Abstract repository for cached AI insights."""

    @abstractmethod
    async def latest(self, user_id: str, insight_type: InsightType) -> Optional[AIInsight]:
        """Most recently generated insight of a type, regardless of age."""
        ...

    @abstractmethod
    async def save(self, insight: AIInsight) -> AIInsight:
        ...

    @abstractmethod
    async def prune(self, user_id: str, insight_type: InsightType, keep: int) -> int:
        """
        Delete all but the newest `keep` insights of a type.

        Returns:
            Number of insights deleted
        """
        ...


class HoldingRepository(ABC):
    """Abstract repository for stock and mutual fund holdings."""

    @abstractmethod
    async def list_stocks(self, user_id: str) -> List[StockHolding]:
        ...

    @abstractmethod
    async def list_funds(self, user_id: str) -> List[MutualFundHolding]:
        ...

    @abstractmethod
    async def save_stocks(self, holdings: List[StockHolding]) -> List[StockHolding]:
        ...

    @abstractmethod
    async def save_funds(self, holdings: List[MutualFundHolding]) -> List[MutualFundHolding]:
        ...


class JobRunRepository(ABC):
    """Abstract repository for background job run records."""

    @abstractmethod
    async def save(self, run: JobRun) -> JobRun:
        ...

    @abstractmethod
    async def discard_pending(self) -> None:
        """Roll back unsaved work left behind by a failed job body."""
        ...

    @abstractmethod
    async def list_recent(self, job: Optional[str] = None, limit: int = 20) -> List[JobRun]:
        """Retrieve job runs, newest first, optionally for one job."""
        ...
