"""Transaction API endpoints."""

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Response

from src.application.dto import CreateTransactionRequest, TransactionQuery
from src.application.services import TransactionService
from src.core.dependencies import get_transaction_service
from src.domain.entities import TransactionCategory, TransactionType
from src.presentation.schemas import (
    ErrorResponseSchema,
    RecurringListSchema,
    TransactionCreateSchema,
    TransactionListSchema,
    TransactionSchema,
)

from .params import DEFAULT_USER_ID, UserIdQuery

transaction_router = APIRouter(
    prefix="/transactions",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
)


@transaction_router.get(
    "",
    response_model=TransactionListSchema,
    summary="List Transactions",
    description="""
    List transactions, newest first.

    `year` alone selects the whole year; `year` and `month` select one month.
    """,
)
async def list_transactions(
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
    year: Annotated[Optional[int], Query(ge=1900, le=2200)] = None,
    month: Annotated[Optional[int], Query(ge=1, le=12)] = None,
    type: Annotated[Optional[TransactionType], Query(description="Only this type")] = None,
    category: Annotated[Optional[TransactionCategory], Query(description="Only this category")] = None,
    limit: Annotated[Optional[int], Query(ge=1, le=5000)] = None,
) -> TransactionListSchema:
    transactions = await transaction_service.list_transactions(
        TransactionQuery(
            user_id=user_id,
            year=year,
            month=month,
            type=type,
            category=category,
            limit=limit,
        )
    )

    return TransactionListSchema(
        transactions=[TransactionSchema(**t.to_dict()) for t in transactions],
        count=len(transactions),
    )


@transaction_router.post(
    "",
    response_model=TransactionSchema,
    status_code=201,
    summary="Create Transaction",
    description="""
    Record a transaction.

    When `category` is omitted it is assigned from the user's
    categorization rules, then from merchant/description keywords.
    """,
)
async def create_transaction(
    request: TransactionCreateSchema,
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> TransactionSchema:
    dto = CreateTransactionRequest(
        user_id=user_id,
        date=request.date,
        amount=request.amount,
        type=request.type,
        description=request.description,
        merchant=request.merchant,
        category=request.category,
        payment_method=request.payment_method,
        account=request.account,
        status=request.status,
        tags=request.tags,
        notes=request.notes,
        recurring=request.recurring,
        balance=request.balance,
        nwi_override=request.nwi_override,
    )

    transaction = await transaction_service.create_transaction(dto)
    return TransactionSchema(**transaction.to_dict())


@transaction_router.get(
    "/recurring",
    response_model=RecurringListSchema,
    summary="Recurring Patterns",
    description="Detected recurring expenses. `upcoming` keeps only those due within that many days.",
)
async def get_recurring(
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
    upcoming: Annotated[Optional[int], Query(ge=1, le=365)] = None,
) -> RecurringListSchema:
    patterns = await transaction_service.get_recurring(user_id, upcoming_days=upcoming)

    monthly_total = sum(p.average_amount for p in patterns if p.frequency == "monthly")
    return RecurringListSchema(
        patterns=[p.to_dict() for p in patterns],
        monthly_total=round(monthly_total, 2),
    )


report_router = APIRouter(
    prefix="/reports",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
)


@report_router.get(
    "/export",
    response_class=Response,
    summary="Export Transactions",
    description="""
    Download transactions as CSV, newest first.

    `from` and `to` are inclusive dates; `type` and `category` filter
    the rows.
    """,
    responses={200: {"content": {"text/csv": {}}, "description": "CSV file"}},
)
async def export_transactions(
    transaction_service: Annotated[TransactionService, Depends(get_transaction_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
    start: Annotated[Optional[date], Query(alias="from")] = None,
    end: Annotated[Optional[date], Query(alias="to")] = None,
    type: Annotated[Optional[TransactionType], Query(description="Only this type")] = None,
    category: Annotated[Optional[TransactionCategory], Query(description="Only this category")] = None,
) -> Response:
    filename, content = await transaction_service.export_csv(
        user_id,
        start=start,
        end=end,
        txn_type=type,
        category=category,
    )

    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
