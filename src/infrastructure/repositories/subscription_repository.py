"""PostgreSQL implementations of SubscriptionRepository and RuleRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import (
    CategorizationRule,
    MatchField,
    Subscription,
    SubscriptionFrequency,
    SubscriptionStatus,
)
from src.domain.interfaces import RuleRepository, SubscriptionRepository
from src.infrastructure.database.models import CategorizationRuleModel, SubscriptionModel


class PostgresSubscriptionRepository(SubscriptionRepository):
    """PostgreSQL implementation of the subscription repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list(self, user_id: str) -> List[Subscription]:
        stmt = (
            select(SubscriptionModel)
            .where(SubscriptionModel.user_id == user_id)
            .order_by(SubscriptionModel.next_expected)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def get_by_id(self, user_id: str, subscription_id: UUID) -> Optional[Subscription]:
        stmt = select(SubscriptionModel).where(
            SubscriptionModel.id == str(subscription_id),
            SubscriptionModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def save(self, subscription: Subscription) -> Subscription:
        await self._session.merge(
            SubscriptionModel(
                id=str(subscription.id),
                user_id=subscription.user_id,
                name=subscription.name,
                amount=subscription.amount,
                frequency=subscription.frequency.value,
                next_expected=subscription.next_expected,
                category=subscription.category,
                status=subscription.status.value,
                created_at=subscription.created_at,
                updated_at=subscription.updated_at,
            )
        )
        await self._session.flush()
        return subscription

    async def delete(self, user_id: str, subscription_id: UUID) -> bool:
        stmt = delete(SubscriptionModel).where(
            SubscriptionModel.id == str(subscription_id),
            SubscriptionModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    def _to_entity(self, model: SubscriptionModel) -> Subscription:
        return Subscription(
            id=UUID(model.id),
            user_id=model.user_id,
            name=model.name,
            amount=model.amount,
            frequency=SubscriptionFrequency(model.frequency),
            next_expected=model.next_expected,
            category=model.category,
            status=SubscriptionStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class PostgresRuleRepository(RuleRepository):
    """PostgreSQL implementation of the categorization rule repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list(self, user_id: str) -> List[CategorizationRule]:
        """Retrieve a user's rules, newest first."""
        stmt = (
            select(CategorizationRuleModel)
            .where(CategorizationRuleModel.user_id == user_id)
            .order_by(CategorizationRuleModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def get_by_id(self, user_id: str, rule_id: UUID) -> Optional[CategorizationRule]:
        stmt = select(CategorizationRuleModel).where(
            CategorizationRuleModel.id == str(rule_id),
            CategorizationRuleModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def save(self, rule: CategorizationRule) -> CategorizationRule:
        await self._session.merge(
            CategorizationRuleModel(
                id=str(rule.id),
                user_id=rule.user_id,
                pattern=rule.pattern,
                match_field=rule.match_field.value,
                category=rule.category,
                case_sensitive=rule.case_sensitive,
                enabled=rule.enabled,
                created_at=rule.created_at,
                updated_at=rule.updated_at,
            )
        )
        await self._session.flush()
        return rule

    async def delete(self, user_id: str, rule_id: UUID) -> bool:
        stmt = delete(CategorizationRuleModel).where(
            CategorizationRuleModel.id == str(rule_id),
            CategorizationRuleModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    def _to_entity(self, model: CategorizationRuleModel) -> CategorizationRule:
        return CategorizationRule(
            id=UUID(model.id),
            user_id=model.user_id,
            pattern=model.pattern,
            match_field=MatchField(model.match_field),
            category=model.category,
            case_sensitive=model.case_sensitive,
            enabled=model.enabled,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
