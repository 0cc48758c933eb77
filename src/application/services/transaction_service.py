"""Transaction service - recording, listing, export and recurring detection."""

import calendar
from datetime import date
from typing import List, Optional, Tuple

import structlog

from src.application.dto import CreateTransactionRequest, TransactionQuery
from src.core.metrics import record_transaction_created
from src.domain.entities import Transaction, TransactionCategory, TransactionType
from src.domain.exceptions import InvalidTransactionRequestException
from src.domain.interfaces import RuleRepository, TransactionRepository
from src.service.finance import detect_recurring_transactions, resolve_category, upcoming_patterns
from src.service.finance.export import export_filename, transactions_to_csv
from src.service.finance.monthly import validate_month
from src.service.finance.recurring import RecurringPattern

logger = structlog.get_logger(__name__)


class TransactionService:
    """
    Application service for transaction use cases.
    """

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        rule_repository: RuleRepository,
    ):
        self._txn_repo = transaction_repository
        self._rule_repo = rule_repository

    async def create_transaction(self, request: CreateTransactionRequest) -> Transaction:
        """
        Record a transaction.

        When no category is given, the user's rules are tried first and
        then the keyword categorizer. An explicit category is kept as a
        user override so later syncs and rules leave it alone.

        Raises:
            InvalidTransactionRequestException: If request validation fails
        """
        errors = request.validate()
        if errors:
            raise InvalidTransactionRequestException("; ".join(errors))

        if request.category is None:
            rules = await self._rule_repo.list(request.user_id)
            category = resolve_category(rules, request.merchant, request.description)
            category_override = False
        else:
            category = request.category
            category_override = True

        transaction = Transaction(
            user_id=request.user_id,
            date=request.date,
            amount=request.amount,
            type=request.type,
            category=category,
            description=request.description,
            merchant=request.merchant,
            payment_method=request.payment_method,
            account=request.account,
            status=request.status,
            tags=list(request.tags),
            notes=request.notes,
            recurring=request.recurring,
            balance=request.balance,
            nwi_override=request.nwi_override,
            category_override=category_override,
        )

        await self._txn_repo.save(transaction)
        record_transaction_created(transaction.type.value)

        logger.info(
            "transaction_created",
            user_id=request.user_id,
            transaction_id=str(transaction.id),
            type=transaction.type.value,
            category=transaction.category.value,
            auto_categorized=not category_override,
        )

        return transaction

    async def list_transactions(self, query: TransactionQuery) -> List[Transaction]:
        """
        List transactions, newest first.

        A `year` alone selects the whole year; `year` and `month` select
        one calendar month.
        """
        errors = query.validate()
        if errors:
            raise InvalidTransactionRequestException("; ".join(errors))

        start: Optional[date] = None
        end: Optional[date] = None
        if query.year is not None:
            validate_month(query.year, query.month or 1)
            if query.month is not None:
                start = date(query.year, query.month, 1)
                end = date(query.year, query.month, calendar.monthrange(query.year, query.month)[1])
            else:
                start = date(query.year, 1, 1)
                end = date(query.year, 12, 31)

        return await self._txn_repo.list(
            query.user_id,
            start=start,
            end=end,
            txn_type=query.type,
            category=query.category,
            limit=query.limit,
        )

    async def get_recurring(
        self,
        user_id: str,
        upcoming_days: Optional[int] = None,
        today: Optional[date] = None,
    ) -> List[RecurringPattern]:
        """
        Detect recurring expense patterns in the user's history.

        Args:
            user_id: The user's identifier
            upcoming_days: When set, only patterns due within this many days
            today: Reference date for the upcoming filter
        """
        transactions = await self._txn_repo.list(user_id)
        patterns = detect_recurring_transactions(transactions)

        if upcoming_days is not None:
            patterns = upcoming_patterns(patterns, today or date.today(), upcoming_days)

        logger.info("recurring_detected", user_id=user_id, count=len(patterns))
        return patterns

    async def export_csv(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        txn_type: Optional[TransactionType] = None,
        category: Optional[TransactionCategory] = None,
    ) -> Tuple[str, str]:
        """
        Export matching transactions as CSV.

        Returns:
            (filename, csv text)

        Raises:
            InvalidTransactionRequestException: If start is after end
        """
        if start and end and start > end:
            raise InvalidTransactionRequestException("from must be on or before to")

        transactions = await self._txn_repo.list(
            user_id,
            start=start,
            end=end,
            txn_type=txn_type,
            category=category,
        )

        logger.info("transactions_exported", user_id=user_id, count=len(transactions))
        return export_filename(start, end), transactions_to_csv(transactions)
