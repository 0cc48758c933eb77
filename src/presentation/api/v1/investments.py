"""Market data, XIRR and holdings endpoints."""

from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from src.application.dto import AddMutualFundRequest, AddStockRequest, XIRRRequest
from src.application.services import InvestmentService
from src.core.dependencies import get_investment_service
from src.domain.exceptions import InvalidInvestmentRequestException
from src.presentation.schemas import (
    ErrorResponseSchema,
    HoldingsSchema,
    MutualFundHoldingCreateSchema,
    MutualFundHoldingSchema,
    StockHoldingCreateSchema,
    StockHoldingSchema,
    XIRRRequestSchema,
    XIRRResponseSchema,
)
from src.service.finance import CashFlow

from .params import DEFAULT_USER_ID, UserIdQuery

investment_router = APIRouter(
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        502: {"model": ErrorResponseSchema, "description": "Market data provider error"},
        503: {"model": ErrorResponseSchema, "description": "Market data provider timed out"},
    },
)

MAX_BATCH = 50


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@investment_router.get(
    "/mutual-funds/nav",
    response_model=Dict[str, Any],
    summary="Mutual Fund NAVs",
    description="""
    One of:
    - `schemes`: comma-separated scheme codes; latest NAV for each, failed schemes omitted
    - `search`: scheme name search
    - `history`: one scheme code; metadata and trailing 1/3/5-year returns
    """,
    responses={
        404: {"model": ErrorResponseSchema, "description": "Scheme not found"},
    },
)
async def get_mutual_fund_nav(
    investment_service: Annotated[InvestmentService, Depends(get_investment_service)],
    schemes: Annotated[Optional[str], Query(description="e.g. 120503,119551")] = None,
    search: Annotated[Optional[str], Query(min_length=2, max_length=100)] = None,
    history: Annotated[Optional[int], Query(gt=0)] = None,
) -> Dict[str, Any]:
    if history is not None:
        return await investment_service.get_scheme_history(history)

    if search is not None:
        return {"results": await investment_service.search_schemes(search)}

    if schemes is None:
        raise InvalidInvestmentRequestException("One of schemes, search or history is required")

    try:
        codes = [int(code) for code in _split_csv(schemes)]
    except ValueError:
        raise InvalidInvestmentRequestException("schemes must be comma-separated integers") from None
    if not codes or len(codes) > MAX_BATCH:
        raise InvalidInvestmentRequestException(f"Provide between 1 and {MAX_BATCH} scheme codes")

    navs = await investment_service.get_navs(codes)
    return {"navs": navs, "requested": len(codes), "found": len(navs)}


@investment_router.get(
    "/stocks/quotes",
    response_model=Dict[str, Any],
    summary="Stock Quotes",
    description="Latest quotes for comma-separated symbols. Symbols no provider could price are omitted.",
)
async def get_stock_quotes(
    investment_service: Annotated[InvestmentService, Depends(get_investment_service)],
    symbols: Annotated[str, Query(min_length=1, description="e.g. INFY,TCS")],
    exchange: Annotated[str, Query(description="NSE, BSE or a foreign exchange")] = "NSE",
) -> Dict[str, Any]:
    requested = [s.upper() for s in _split_csv(symbols)]
    if not requested or len(requested) > MAX_BATCH:
        raise InvalidInvestmentRequestException(f"Provide between 1 and {MAX_BATCH} symbols")

    quotes = await investment_service.get_quotes(requested, exchange.upper())
    return {"quotes": quotes, "requested": len(requested), "found": len(quotes)}


@investment_router.post(
    "/investments/xirr",
    response_model=XIRRResponseSchema,
    summary="Calculate XIRR",
    description="""
    Annualized return of dated cash flows.

    With `current_value`, the flows are treated as investments and the
    current value is added as the final inflow.
    """,
)
async def calculate_xirr(
    request: XIRRRequestSchema,
    investment_service: Annotated[InvestmentService, Depends(get_investment_service)],
) -> XIRRResponseSchema:
    result = investment_service.calculate_xirr(
        XIRRRequest(
            cash_flows=[CashFlow(date=cf.date, amount=cf.amount) for cf in request.cash_flows],
            current_value=request.current_value,
            current_date=request.current_date,
        )
    )
    return XIRRResponseSchema(**result)


@investment_router.post(
    "/investments/stocks",
    response_model=StockHoldingSchema,
    status_code=201,
    summary="Add Stock Holding",
)
async def add_stock(
    request: StockHoldingCreateSchema,
    investment_service: Annotated[InvestmentService, Depends(get_investment_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> StockHoldingSchema:
    holding = await investment_service.add_stock(
        AddStockRequest(
            user_id=user_id,
            symbol=request.symbol,
            shares=request.shares,
            average_cost=request.average_cost,
            exchange=request.exchange,
        )
    )
    return StockHoldingSchema(**holding.to_dict())


@investment_router.post(
    "/investments/mutual-funds",
    response_model=MutualFundHoldingSchema,
    status_code=201,
    summary="Add Mutual Fund Holding",
    description="The scheme code is resolved from the name when omitted.",
)
async def add_mutual_fund(
    request: MutualFundHoldingCreateSchema,
    investment_service: Annotated[InvestmentService, Depends(get_investment_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> MutualFundHoldingSchema:
    holding = await investment_service.add_mutual_fund(
        AddMutualFundRequest(
            user_id=user_id,
            scheme_name=request.scheme_name,
            units=request.units,
            invested_value=request.invested_value,
            scheme_code=request.scheme_code,
        )
    )
    return MutualFundHoldingSchema(**holding.to_dict())


@investment_router.get(
    "/investments/holdings",
    response_model=HoldingsSchema,
    summary="Holdings",
    description="Stock and fund holdings with current value, returns and portfolio totals.",
)
async def get_holdings(
    investment_service: Annotated[InvestmentService, Depends(get_investment_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> HoldingsSchema:
    return HoldingsSchema(**await investment_service.get_holdings(user_id))
