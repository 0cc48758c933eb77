"""PostgreSQL implementation of NotificationRepository."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Notification, NotificationSeverity, NotificationType
from src.domain.interfaces import NotificationRepository
from src.infrastructure.database.models import NotificationModel


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of the notification repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, notification: Notification) -> Notification:
        await self._session.merge(
            NotificationModel(
                id=str(notification.id),
                user_id=notification.user_id,
                type=notification.type.value,
                title=notification.title,
                message=notification.message,
                severity=notification.severity.value,
                read=notification.read,
                action_url=notification.action_url,
                dedup_key=notification.dedup_key,
                created_at=notification.created_at,
            )
        )
        await self._session.flush()
        return notification

    async def get_by_id(self, user_id: str, notification_id: UUID) -> Optional[Notification]:
        stmt = select(NotificationModel).where(
            NotificationModel.id == str(notification_id),
            NotificationModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 50,
    ) -> List[Notification]:
        stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
        if unread_only:
            stmt = stmt.where(NotificationModel.read.is_(False))

        stmt = stmt.order_by(NotificationModel.created_at.desc()).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def exists_since(
        self,
        user_id: str,
        notification_type: NotificationType,
        dedup_key: str,
        since: datetime,
    ) -> bool:
        stmt = (
            select(NotificationModel.id)
            .where(
                NotificationModel.user_id == user_id,
                NotificationModel.type == notification_type.value,
                NotificationModel.dedup_key == dedup_key,
                NotificationModel.created_at >= since,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    def _to_entity(self, model: NotificationModel) -> Notification:
        return Notification(
            id=UUID(model.id),
            user_id=model.user_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message,
            severity=NotificationSeverity(model.severity),
            read=model.read,
            action_url=model.action_url,
            dedup_key=model.dedup_key,
            created_at=model.created_at,
        )
