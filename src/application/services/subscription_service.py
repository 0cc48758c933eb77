"""Subscription and categorization rule services."""

from dataclasses import replace
from typing import List
from uuid import UUID

import structlog

from src.application.dto import (
    CreateSubscriptionRequest,
    RuleRequest,
    UpdateSubscriptionRequest,
)
from src.domain.entities import CategorizationRule, MatchField, Subscription, utcnow
from src.domain.exceptions import (
    InvalidRuleRequestException,
    InvalidSubscriptionRequestException,
    RuleNotFoundException,
    SubscriptionNotFoundException,
)
from src.domain.interfaces import RuleRepository, SubscriptionRepository

logger = structlog.get_logger(__name__)


class SubscriptionService:
    """Application service for tracked subscriptions."""

    def __init__(self, subscription_repository: SubscriptionRepository):
        self._sub_repo = subscription_repository

    async def list_subscriptions(self, user_id: str) -> dict:
        """
        List subscriptions with monthly and yearly cost totals.

        Totals count active subscriptions only.
        """
        subscriptions = await self._sub_repo.list(user_id)
        monthly_total = sum(s.monthly_equivalent for s in subscriptions if s.is_active)

        return {
            "subscriptions": [s.to_dict() for s in subscriptions],
            "active_count": sum(1 for s in subscriptions if s.is_active),
            "monthly_total": round(monthly_total, 2),
            "yearly_total": round(monthly_total * 12, 2),
        }

    async def create_subscription(self, request: CreateSubscriptionRequest) -> Subscription:
        errors = request.validate()
        if errors:
            raise InvalidSubscriptionRequestException("; ".join(errors))

        subscription = Subscription(
            user_id=request.user_id,
            name=request.name.strip(),
            amount=request.amount,
            frequency=request.frequency,
            next_expected=request.next_expected,
            category=request.category,
        )
        await self._sub_repo.save(subscription)

        logger.info(
            "subscription_created",
            user_id=request.user_id,
            subscription_id=str(subscription.id),
        )
        return subscription

    async def update_subscription(
        self,
        user_id: str,
        subscription_id: UUID,
        request: UpdateSubscriptionRequest,
    ) -> Subscription:
        """
        Apply a partial update.

        Raises:
            InvalidSubscriptionRequestException: If validation fails
            SubscriptionNotFoundException: If the subscription does not exist
        """
        errors = request.validate()
        if errors:
            raise InvalidSubscriptionRequestException("; ".join(errors))

        subscription = await self._sub_repo.get_by_id(user_id, subscription_id)
        if subscription is None:
            raise SubscriptionNotFoundException(str(subscription_id))

        changes = {
            key: value
            for key, value in (
                ("name", request.name.strip() if request.name else None),
                ("amount", request.amount),
                ("frequency", request.frequency),
                ("next_expected", request.next_expected),
                ("category", request.category),
                ("status", request.status),
            )
            if value is not None
        }
        updated = replace(subscription, updated_at=utcnow(), **changes)
        await self._sub_repo.save(updated)

        logger.info(
            "subscription_updated",
            user_id=user_id,
            subscription_id=str(subscription_id),
            fields=sorted(changes),
        )
        return updated

    async def delete_subscription(self, user_id: str, subscription_id: UUID) -> None:
        deleted = await self._sub_repo.delete(user_id, subscription_id)
        if not deleted:
            raise SubscriptionNotFoundException(str(subscription_id))

        logger.info("subscription_deleted", user_id=user_id, subscription_id=str(subscription_id))


class RuleService:
    """Application service for user categorization rules."""

    def __init__(self, rule_repository: RuleRepository):
        self._rule_repo = rule_repository

    async def list_rules(self, user_id: str) -> List[CategorizationRule]:
        return await self._rule_repo.list(user_id)

    async def create_rule(self, user_id: str, request: RuleRequest) -> CategorizationRule:
        errors = request.validate(creating=True)
        if errors:
            raise InvalidRuleRequestException("; ".join(errors))

        rule = CategorizationRule(
            user_id=user_id,
            pattern=request.pattern.strip(),
            category=request.category,
            match_field=request.match_field or MatchField.ANY,
            case_sensitive=bool(request.case_sensitive),
            enabled=True if request.enabled is None else request.enabled,
        )
        await self._rule_repo.save(rule)

        logger.info("rule_created", user_id=user_id, rule_id=str(rule.id), pattern=rule.pattern)
        return rule

    async def update_rule(
        self,
        user_id: str,
        rule_id: UUID,
        request: RuleRequest,
    ) -> CategorizationRule:
        errors = request.validate()
        if errors:
            raise InvalidRuleRequestException("; ".join(errors))

        rule = await self._rule_repo.get_by_id(user_id, rule_id)
        if rule is None:
            raise RuleNotFoundException(str(rule_id))

        changes = {
            key: value
            for key, value in (
                ("pattern", request.pattern.strip() if request.pattern else None),
                ("category", request.category),
                ("match_field", request.match_field),
                ("case_sensitive", request.case_sensitive),
                ("enabled", request.enabled),
            )
            if value is not None
        }
        updated = replace(rule, updated_at=utcnow(), **changes)
        await self._rule_repo.save(updated)

        logger.info("rule_updated", user_id=user_id, rule_id=str(rule_id))
        return updated

    async def delete_rule(self, user_id: str, rule_id: UUID) -> None:
        deleted = await self._rule_repo.delete(user_id, rule_id)
        if not deleted:
            raise RuleNotFoundException(str(rule_id))

        logger.info("rule_deleted", user_id=user_id, rule_id=str(rule_id))
