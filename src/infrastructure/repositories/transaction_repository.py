"""PostgreSQL implementation of TransactionRepository."""

from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import (
    NWIBucket,
    PaymentMethod,
    Transaction,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)
from src.domain.interfaces import TransactionRepository
from src.infrastructure.database.models import TransactionModel


class PostgresTransactionRepository(TransactionRepository):
    """
    PostgreSQL implementation of the Transaction repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, transaction: Transaction) -> Transaction:
        """Insert or update a transaction by id."""
        await self._session.merge(self._to_model(transaction))
        await self._session.flush()
        return transaction

    async def save_many(self, transactions: List[Transaction]) -> List[Transaction]:
        for transaction in transactions:
            await self._session.merge(self._to_model(transaction))
        await self._session.flush()
        return transactions

    async def get_by_id(self, user_id: str, transaction_id: UUID) -> Optional[Transaction]:
        stmt = select(TransactionModel).where(
            TransactionModel.id == str(transaction_id),
            TransactionModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def list(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        txn_type: Optional[TransactionType] = None,
        category: Optional[TransactionCategory] = None,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """Retrieve a user's transactions, ordered by date descending."""
        stmt = select(TransactionModel).where(TransactionModel.user_id == user_id)

        if start is not None:
            stmt = stmt.where(TransactionModel.txn_date >= start)
        if end is not None:
            stmt = stmt.where(TransactionModel.txn_date <= end)
        if txn_type is not None:
            stmt = stmt.where(TransactionModel.type == txn_type.value)
        if category is not None:
            stmt = stmt.where(TransactionModel.category == category.value)

        stmt = stmt.order_by(
            TransactionModel.txn_date.desc(),
            TransactionModel.created_at.desc(),
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def get_by_external_ids(
        self,
        user_id: str,
        external_ids: List[str],
    ) -> Dict[str, Transaction]:
        if not external_ids:
            return {}

        stmt = select(TransactionModel).where(
            TransactionModel.user_id == user_id,
            TransactionModel.external_id.in_(external_ids),
        )
        result = await self._session.execute(stmt)
        return {
            model.external_id: self._to_entity(model)
            for model in result.scalars().all()
        }

    def _to_model(self, transaction: Transaction) -> TransactionModel:
        return TransactionModel(
            id=str(transaction.id),
            user_id=transaction.user_id,
            txn_date=transaction.date,
            amount=transaction.amount,
            type=transaction.type.value,
            category=transaction.category.value,
            description=transaction.description,
            merchant=transaction.merchant,
            payment_method=transaction.payment_method.value,
            account=transaction.account,
            status=transaction.status.value,
            tags=list(transaction.tags),
            notes=transaction.notes,
            recurring=transaction.recurring,
            balance=transaction.balance,
            nwi_override=transaction.nwi_override.value if transaction.nwi_override else None,
            category_override=transaction.category_override,
            external_id=transaction.external_id,
            created_at=transaction.created_at,
        )

    def _to_entity(self, model: TransactionModel) -> Transaction:
        """Convert database model to domain entity."""
        return Transaction(
            id=UUID(model.id),
            user_id=model.user_id,
            date=model.txn_date,
            amount=model.amount,
            type=TransactionType(model.type),
            category=TransactionCategory(model.category),
            description=model.description,
            merchant=model.merchant,
            payment_method=PaymentMethod(model.payment_method),
            account=model.account,
            status=TransactionStatus(model.status),
            tags=list(model.tags or []),
            notes=model.notes,
            recurring=model.recurring,
            balance=model.balance,
            nwi_override=NWIBucket(model.nwi_override) if model.nwi_override else None,
            category_override=model.category_override,
            external_id=model.external_id,
            created_at=model.created_at,
        )
