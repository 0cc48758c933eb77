"""HTTP implementation of TransactionFeedClient."""

import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx
import structlog

from src.core.config import settings
from src.core.metrics import (
    record_provider_failure,
    record_provider_success,
    track_provider_latency,
)
from src.domain.entities import (
    PaymentMethod,
    Transaction,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)
from src.domain.exceptions import TransactionFeedException
from src.domain.interfaces import TransactionFeedClient

logger = structlog.get_logger(__name__)

PROVIDER = "transaction_feed"

_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y")


def _parse_date(value: str):
    if "T" in value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def _parse_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _parse_enum(enum_cls, value: Any, default):
    if value is None:
        return default
    text = str(value).strip()
    for member in enum_cls:
        if member.value.lower() == text.lower():
            return member
    return default


class HttpTransactionFeedClient(TransactionFeedClient):
    """
    HTTP client for the upstream transaction feed.

    Expects `GET {base}/transactions?user_id=` to return either a list of
    records or `{"transactions": [...]}`. Each record needs an `id`, a
    `date` and a non-zero `amount`; any other record is skipped.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int = 3,
    ):
        self._base_url = (base_url or settings.transaction_feed_url).rstrip("/")
        self._timeout = timeout or settings.transaction_feed_timeout
        self._max_retries = max_retries

    async def fetch_transactions(self, user_id: str) -> List[Transaction]:
        """
        Fetch the user's transactions from the feed.

        Implements retry logic with exponential backoff. Only the fetch is
        retried; parsing happens once on the payload that came back.
        """
        data = await self._fetch(user_id)
        return self._parse_transactions(user_id, data)

    async def _fetch(self, user_id: str) -> Any:
        url = f"{self._base_url}/transactions"
        params = {"user_id": user_id}

        last_exception = None

        for attempt in range(self._max_retries):
            try:
                with track_provider_latency(PROVIDER):
                    async with httpx.AsyncClient(timeout=self._timeout) as client:
                        response = await client.get(url, params=params)

                        if response.status_code >= 400:
                            record_provider_failure(PROVIDER, "error")
                            raise TransactionFeedException(
                                message=f"Transaction feed error: {response.text}",
                                status_code=response.status_code,
                            )

                        data = response.json()
                        record_provider_success(PROVIDER)
                        return data

            except httpx.TimeoutException:
                record_provider_failure(PROVIDER, "timeout")
                last_exception = TransactionFeedException("Transaction feed timed out")
                logger.warning(
                    "transaction_feed_timeout",
                    user_id=user_id,
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except TransactionFeedException:
                raise
            except Exception as e:
                record_provider_failure(PROVIDER, "error")
                last_exception = TransactionFeedException(
                    message=f"Unexpected error: {str(e)}",
                )
                logger.error(
                    "transaction_feed_error",
                    user_id=user_id,
                    attempt=attempt + 1,
                    error=str(e),
                )

            # Exponential backoff
            if attempt < self._max_retries - 1:
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or TransactionFeedException("Failed to fetch transactions")

    def _parse_transactions(self, user_id: str, data: Any) -> List[Transaction]:
        """Parse raw feed records into Transaction entities."""
        if isinstance(data, list):
            records = data
        elif isinstance(data, dict):
            records = data.get("transactions") or []
        else:
            raise TransactionFeedException(
                f"Unexpected feed payload: {type(data).__name__}"
            )

        transactions = []
        skipped = 0

        for item in records:
            try:
                transaction = self._parse_item(user_id, item)
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning("transaction_feed_record_invalid", error=str(e))
                transaction = None

            if transaction is None:
                skipped += 1
                continue
            transactions.append(transaction)

        if skipped:
            logger.info(
                "transaction_feed_records_skipped",
                user_id=user_id,
                skipped=skipped,
                parsed=len(transactions),
            )
        return transactions

    def _parse_item(self, user_id: str, item: Dict[str, Any]) -> Optional[Transaction]:
        external_id = item.get("id")
        txn_date = _parse_date(str(item.get("date", "")))
        amount = _parse_float(item.get("amount"))

        if not external_id or txn_date is None or not amount:
            return None

        # Signed amounts without a type: negative is an expense
        txn_type = _parse_enum(TransactionType, item.get("type"), None)
        if txn_type is None:
            txn_type = TransactionType.EXPENSE if amount < 0 else TransactionType.INCOME

        return Transaction(
            user_id=user_id,
            external_id=str(external_id),
            date=txn_date,
            amount=abs(amount),
            type=txn_type,
            category=_parse_enum(
                TransactionCategory, item.get("category"), TransactionCategory.UNCATEGORIZED
            ),
            description=item.get("description", "") or "",
            merchant=item.get("merchant", "") or "",
            payment_method=_parse_enum(
                PaymentMethod, item.get("payment_method"), PaymentMethod.OTHER
            ),
            account=item.get("account", "") or "",
            status=_parse_enum(
                TransactionStatus, item.get("status"), TransactionStatus.COMPLETED
            ),
            tags=list(item.get("tags") or []),
            notes=item.get("notes", "") or "",
            balance=_parse_float(item.get("balance")),
        )
