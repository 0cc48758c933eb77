"""PostgreSQL implementation of HoldingRepository."""

from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import MutualFundHolding, StockHolding
from src.domain.interfaces import HoldingRepository
from src.infrastructure.database.models import MutualFundHoldingModel, StockHoldingModel


class PostgresHoldingRepository(HoldingRepository):
    """PostgreSQL implementation of the stock and mutual fund holding repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_stocks(self, user_id: str) -> List[StockHolding]:
        stmt = (
            select(StockHoldingModel)
            .where(StockHoldingModel.user_id == user_id)
            .order_by(StockHoldingModel.symbol)
        )
        result = await self._session.execute(stmt)
        return [
            StockHolding(
                id=UUID(model.id),
                user_id=model.user_id,
                symbol=model.symbol,
                exchange=model.exchange,
                shares=model.shares,
                average_cost=model.average_cost,
                current_price=model.current_price,
                day_change=model.day_change,
                day_change_percentage=model.day_change_percentage,
                updated_at=model.updated_at,
            )
            for model in result.scalars().all()
        ]

    async def list_funds(self, user_id: str) -> List[MutualFundHolding]:
        stmt = (
            select(MutualFundHoldingModel)
            .where(MutualFundHoldingModel.user_id == user_id)
            .order_by(MutualFundHoldingModel.scheme_name)
        )
        result = await self._session.execute(stmt)
        return [
            MutualFundHolding(
                id=UUID(model.id),
                user_id=model.user_id,
                scheme_name=model.scheme_name,
                scheme_code=model.scheme_code,
                units=model.units,
                invested_value=model.invested_value,
                current_nav=model.current_nav,
                current_value=model.current_value,
                updated_at=model.updated_at,
            )
            for model in result.scalars().all()
        ]

    async def save_stocks(self, holdings: List[StockHolding]) -> List[StockHolding]:
        for holding in holdings:
            await self._session.merge(
                StockHoldingModel(
                    id=str(holding.id),
                    user_id=holding.user_id,
                    symbol=holding.symbol,
                    exchange=holding.exchange,
                    shares=holding.shares,
                    average_cost=holding.average_cost,
                    current_price=holding.current_price,
                    day_change=holding.day_change,
                    day_change_percentage=holding.day_change_percentage,
                    updated_at=holding.updated_at,
                )
            )
        await self._session.flush()
        return holdings

    async def save_funds(self, holdings: List[MutualFundHolding]) -> List[MutualFundHolding]:
        for holding in holdings:
            await self._session.merge(
                MutualFundHoldingModel(
                    id=str(holding.id),
                    user_id=holding.user_id,
                    scheme_name=holding.scheme_name,
                    scheme_code=holding.scheme_code,
                    units=holding.units,
                    invested_value=holding.invested_value,
                    current_nav=holding.current_nav,
                    current_value=holding.current_value,
                    updated_at=holding.updated_at,
                )
            )
        await self._session.flush()
        return holdings
