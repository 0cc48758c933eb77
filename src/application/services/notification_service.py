"""Notification service - alert generation with deduplication."""

from datetime import date, timedelta
from typing import List, Optional
from uuid import UUID

import structlog

from src.core.metrics import record_budget_breach
from src.domain.entities import Notification, utcnow
from src.domain.exceptions import NotificationNotFoundException
from src.domain.interfaces import (
    BudgetRepository,
    HoldingRepository,
    NotificationRepository,
    SubscriptionRepository,
    TransactionRepository,
)
from src.service.finance import (
    build_budget_breach_notifications,
    build_renewal_notifications,
    build_weekly_digest,
)
from src.service.finance.monthly import month_bounds
from src.service.finance.notifications import dedup_window_hours

logger = structlog.get_logger(__name__)

DIGEST_DAYS = 7


class NotificationService:
    """
    Application service for in-app notifications.

    Each check builds candidate notifications and stores only those whose
    (type, dedup_key) has not been stored inside the type's dedup window.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        transaction_repository: TransactionRepository,
        budget_repository: BudgetRepository,
        subscription_repository: SubscriptionRepository,
        holding_repository: HoldingRepository,
    ):
        self._notification_repo = notification_repository
        self._txn_repo = transaction_repository
        self._budget_repo = budget_repository
        self._sub_repo = subscription_repository
        self._holding_repo = holding_repository

    async def list_notifications(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 50,
    ) -> List[Notification]:
        return await self._notification_repo.list(user_id, unread_only=unread_only, limit=limit)

    async def mark_read(self, user_id: str, notification_id: UUID) -> Notification:
        notification = await self._notification_repo.get_by_id(user_id, notification_id)
        if notification is None:
            raise NotificationNotFoundException(str(notification_id))

        if not notification.read:
            notification.read = True
            await self._notification_repo.save(notification)

        return notification

    async def check_budget_breaches(
        self,
        user_id: str,
        today: Optional[date] = None,
    ) -> List[Notification]:
        """Alert on budgets at 80% or more of this month's amount."""
        today = today or date.today()
        start, end = month_bounds(today.year, today.month)

        budgets = await self._budget_repo.list(user_id)
        transactions = await self._txn_repo.list(user_id, start=start, end=end)
        candidates = build_budget_breach_notifications(user_id, budgets, transactions)

        created = await self._store_new(candidates)
        for notification in created:
            record_budget_breach(notification.severity.value)

        logger.info(
            "budget_breach_check",
            user_id=user_id,
            candidates=len(candidates),
            created=len(created),
        )
        return created

    async def send_renewal_alerts(
        self,
        user_id: str,
        today: Optional[date] = None,
    ) -> List[Notification]:
        subscriptions = await self._sub_repo.list(user_id)
        candidates = build_renewal_notifications(user_id, subscriptions, today or date.today())

        created = await self._store_new(candidates)
        logger.info("renewal_alerts", user_id=user_id, created=len(created))
        return created

    async def send_weekly_digest(
        self,
        user_id: str,
        today: Optional[date] = None,
    ) -> Optional[Notification]:
        """
        Summarize the seven days up to and including `today`.

        Returns:
            The stored digest, or None when one was already sent this week
        """
        today = today or date.today()
        start = today - timedelta(days=DIGEST_DAYS - 1)

        transactions = await self._txn_repo.list(user_id, start=start, end=today)
        stocks = await self._holding_repo.list_stocks(user_id)
        funds = await self._holding_repo.list_funds(user_id)

        digest = build_weekly_digest(user_id, transactions, stocks, funds)
        created = await self._store_new([digest])

        logger.info("weekly_digest", user_id=user_id, sent=bool(created))
        return created[0] if created else None

    async def _store_new(self, candidates: List[Notification]) -> List[Notification]:
        now = utcnow()
        created = []

        for notification in candidates:
            if notification.dedup_key:
                since = now - timedelta(hours=dedup_window_hours(notification.type))
                if await self._notification_repo.exists_since(
                    notification.user_id,
                    notification.type,
                    notification.dedup_key,
                    since,
                ):
                    logger.debug(
                        "notification_deduplicated",
                        type=notification.type.value,
                        dedup_key=notification.dedup_key,
                    )
                    continue

            await self._notification_repo.save(notification)
            created.append(notification)

        return created
