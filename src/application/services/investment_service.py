"""Investment service - NAVs, quotes, XIRR and holdings."""

from datetime import date
from typing import Dict, List, Optional

import structlog

from src.application.dto import AddMutualFundRequest, AddStockRequest, XIRRRequest
from src.domain.entities import MutualFundHolding, StockHolding, utcnow
from src.domain.exceptions import DomainException, InvalidInvestmentRequestException
from src.domain.interfaces import HoldingRepository, MutualFundClient, StockQuoteClient
from src.service.finance import (
    calculate_investment_xirr,
    calculate_trailing_returns,
    calculate_xirr,
    lookup_common_scheme_code,
    pick_scheme_code,
)

logger = structlog.get_logger(__name__)


class InvestmentService:
    """
    Application service for market data and portfolio holdings.
    """

    def __init__(
        self,
        holding_repository: HoldingRepository,
        mutual_fund_client: MutualFundClient,
        stock_client: StockQuoteClient,
    ):
        self._holding_repo = holding_repository
        self._mf_client = mutual_fund_client
        self._stock_client = stock_client

    # === Market data ===

    async def get_navs(self, scheme_codes: List[int]) -> dict:
        """Latest NAVs for several schemes; failed schemes are left out."""
        navs = await self._mf_client.get_latest_navs(scheme_codes)
        return {str(code): nav.to_dict() for code, nav in navs.items()}

    async def search_schemes(self, query: str) -> List[dict]:
        results = await self._mf_client.search(query)
        return [r.to_dict() for r in results]

    async def get_scheme_history(self, scheme_code: int) -> dict:
        """Scheme metadata, latest NAV and trailing 1/3/5-year returns."""
        history = await self._mf_client.get_history(scheme_code)
        latest = history.points[0]

        return {
            "scheme_code": history.scheme_code,
            "scheme_name": history.scheme_name,
            "meta": history.meta,
            "latest_nav": latest.nav,
            "latest_date": latest.date.isoformat(),
            "data_points": len(history.points),
            "trailing_returns": [r.to_dict() for r in calculate_trailing_returns(history.points)],
        }

    async def get_quotes(self, symbols: List[str], exchange: str = "NSE") -> dict:
        quotes = await self._stock_client.get_quotes(symbols, exchange)
        return {symbol: quote.to_dict() for symbol, quote in quotes.items()}

    # === Returns ===

    def calculate_xirr(self, request: XIRRRequest, today: Optional[date] = None) -> dict:
        """
        XIRR of raw cash flows, or of investments valued today when a
        current value is given.

        Raises:
            InvalidInvestmentRequestException: If request validation fails
        """
        errors = request.validate()
        if errors:
            raise InvalidInvestmentRequestException("; ".join(errors))

        if request.current_value is not None:
            xirr = calculate_investment_xirr(
                request.cash_flows,
                request.current_value,
                request.current_date or today or date.today(),
            )
        else:
            rate = calculate_xirr(request.cash_flows)
            xirr = round(rate * 100, 2) if rate is not None else None

        return {"xirr": xirr, "cash_flow_count": len(request.cash_flows)}

    # === Holdings ===

    async def add_stock(self, request: AddStockRequest) -> StockHolding:
        errors = request.validate()
        if errors:
            raise InvalidInvestmentRequestException("; ".join(errors))

        holding = StockHolding(
            user_id=request.user_id,
            symbol=request.symbol.strip().upper(),
            exchange=request.exchange.upper(),
            shares=request.shares,
            average_cost=request.average_cost,
        )
        await self._holding_repo.save_stocks([holding])

        logger.info("stock_holding_added", user_id=request.user_id, symbol=holding.symbol)
        return holding

    async def add_mutual_fund(self, request: AddMutualFundRequest) -> MutualFundHolding:
        """
        Add a fund holding, resolving its scheme code when not given.

        The code is taken from the well-known schemes table, then from the
        provider search. A failed lookup leaves the code empty so the
        holding is still recorded.
        """
        errors = request.validate()
        if errors:
            raise InvalidInvestmentRequestException("; ".join(errors))

        scheme_code = request.scheme_code or await self.find_scheme_code(request.scheme_name)

        holding = MutualFundHolding(
            user_id=request.user_id,
            scheme_name=request.scheme_name.strip(),
            scheme_code=scheme_code,
            units=request.units,
            invested_value=request.invested_value,
        )
        await self._holding_repo.save_funds([holding])

        logger.info(
            "fund_holding_added",
            user_id=request.user_id,
            scheme_name=holding.scheme_name,
            scheme_code=scheme_code,
        )
        return holding

    async def find_scheme_code(self, scheme_name: str) -> Optional[int]:
        code = lookup_common_scheme_code(scheme_name)
        if code is not None:
            return code

        try:
            results = await self._mf_client.search(scheme_name)
        except DomainException as e:
            logger.warning("scheme_search_failed", scheme_name=scheme_name, error=e.message)
            return None

        return pick_scheme_code(scheme_name, results)

    async def get_holdings(self, user_id: str) -> dict:
        stocks = await self._holding_repo.list_stocks(user_id)
        funds = await self._holding_repo.list_funds(user_id)

        stock_invested = sum(s.invested_value for s in stocks)
        stock_value = sum(s.current_value for s in stocks)
        fund_invested = sum(f.invested_value for f in funds)
        fund_value = sum(
            f.current_value if f.current_value is not None else f.invested_value for f in funds
        )

        invested = stock_invested + fund_invested
        value = stock_value + fund_value
        returns = value - invested

        return {
            "stocks": [s.to_dict() for s in stocks],
            "mutual_funds": [f.to_dict() for f in funds],
            "totals": {
                "invested_value": round(invested, 2),
                "current_value": round(value, 2),
                "total_returns": round(returns, 2),
                "returns_percentage": round(returns / invested * 100, 2) if invested > 0 else 0.0,
            },
        }

    async def refresh_prices(self, user_id: str) -> Dict[str, int]:
        """
        Reprice every holding from the providers.

        Holdings whose price cannot be fetched keep their last value.

        Returns:
            Counts of updated and failed stocks and funds
        """
        stocks = await self._holding_repo.list_stocks(user_id)
        funds = await self._holding_repo.list_funds(user_id)

        updated_stocks = []
        by_exchange: Dict[str, List[StockHolding]] = {}
        for stock in stocks:
            by_exchange.setdefault(stock.exchange, []).append(stock)

        for exchange, holdings in by_exchange.items():
            quotes = await self._stock_client.get_quotes([h.symbol for h in holdings], exchange)
            for holding in holdings:
                quote = quotes.get(holding.symbol)
                if quote is None:
                    continue
                holding.current_price = quote.price
                holding.day_change = quote.change
                holding.day_change_percentage = quote.change_percent
                holding.updated_at = utcnow()
                updated_stocks.append(holding)

        codes = [f.scheme_code for f in funds if f.scheme_code is not None]
        navs = await self._mf_client.get_latest_navs(codes) if codes else {}
        updated_funds = []
        for fund in funds:
            nav = navs.get(fund.scheme_code) if fund.scheme_code is not None else None
            if nav is None:
                continue
            fund.apply_nav(nav.nav)
            updated_funds.append(fund)

        if updated_stocks:
            await self._holding_repo.save_stocks(updated_stocks)
        if updated_funds:
            await self._holding_repo.save_funds(updated_funds)

        result = {
            "stocks_updated": len(updated_stocks),
            "stocks_failed": len(stocks) - len(updated_stocks),
            "funds_updated": len(updated_funds),
            "funds_failed": len(funds) - len(updated_funds),
        }
        logger.info("prices_refreshed", user_id=user_id, **result)
        return result
