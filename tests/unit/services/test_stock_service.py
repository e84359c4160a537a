"""Tests for StockService against an in-memory SQLite database (real aiosqlite)."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import stockpulse.models  # noqa: F401
from stockpulse.database import Base
from stockpulse.exceptions import NotFound
from stockpulse.models.saved_stock import UserStock
from stockpulse.schemas.stock import ScoredStock
from stockpulse.services.stock_service import StockService, make_stock_id


@pytest_asyncio.fixture()
async def session():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    maker = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    async with maker() as db:
        yield db
    await engine.dispose()


@pytest.fixture()
def service(session) -> StockService:
    return StockService(session)


def _scored(symbol: str = "AAPL", signal: str = "buy", price: float = 186.52) -> ScoredStock:
    return ScoredStock(
        symbol=symbol,
        name=f"{symbol} Inc.",
        price=price,
        percent_change=1.25,
        signal=signal,
        technical_score=8,
        sentiment_score=6,
        news_score=7,
        last_updated=datetime(2025, 1, 15, 15, 30, tzinfo=timezone.utc),
    )


class TestAddStock:
    @pytest.mark.asyncio()
    async def test_add_uses_composite_id(self, service) -> None:
        record = await service.add_stock(1, _scored())
        assert record.id == "1_AAPL"
        assert record.user_id == 1
        assert record.signal == "buy"
        assert record.technical_score == 8

    @pytest.mark.asyncio()
    async def test_add_writes_index_row(self, service, session) -> None:
        await service.add_stock(1, _scored())
        result = await session.execute(select(UserStock))
        rows = result.scalars().all()
        assert [(r.user_id, r.stock_id, r.symbol) for r in rows] == [(1, "1_AAPL", "AAPL")]

    @pytest.mark.asyncio()
    async def test_re_adding_overwrites(self, service, session) -> None:
        await service.add_stock(1, _scored(price=100))
        record = await service.add_stock(1, _scored(price=120, signal="sell"))
        assert record.price == 120
        assert record.signal == "sell"
        assert len(await service.list_stocks(1)) == 1
        result = await session.execute(select(UserStock))
        assert len(result.scalars().all()) == 1

    @pytest.mark.asyncio()
    async def test_user_id_required(self, service) -> None:
        with pytest.raises(ValueError, match="User ID is required"):
            await service.add_stock(0, _scored())


class TestListStocks:
    @pytest.mark.asyncio()
    async def test_lists_only_own_stocks(self, service) -> None:
        await service.add_stock(1, _scored("AAPL"))
        await service.add_stock(1, _scored("MSFT"))
        await service.add_stock(2, _scored("TSLA"))
        assert sorted(s.symbol for s in await service.list_stocks(1)) == ["AAPL", "MSFT"]
        assert [s.symbol for s in await service.list_stocks(2)] == ["TSLA"]
        assert await service.list_stocks(3) == []

    @pytest.mark.asyncio()
    async def test_filter_by_signal(self, service) -> None:
        await service.add_stock(1, _scored("AAPL", signal="buy"))
        await service.add_stock(1, _scored("INTC", signal="sell"))
        await service.add_stock(1, _scored("KO", signal="neutral"))
        assert [s.symbol for s in await service.list_stocks(1, "sell")] == ["INTC"]


class TestUpdateStock:
    @pytest.mark.asyncio()
    async def test_partial_update(self, service) -> None:
        await service.add_stock(1, _scored())
        record = await service.update_stock(1, "1_AAPL", {"price": 190.0, "news_score": 9, "bogus": 1})
        assert record.price == 190.0
        assert record.news_score == 9
        assert record.technical_score == 8

    @pytest.mark.asyncio()
    async def test_symbol_change_updates_index(self, service, session) -> None:
        await service.add_stock(1, _scored("BRK.A"))
        record = await service.update_stock(1, "1_BRK.A", {"symbol": "brk.b"})
        assert record.symbol == "BRK.B"
        result = await session.execute(select(UserStock.symbol).where(UserStock.stock_id == "1_BRK.A"))
        assert result.scalar_one() == "BRK.B"

    @pytest.mark.asyncio()
    async def test_unknown_stock(self, service) -> None:
        with pytest.raises(NotFound):
            await service.update_stock(1, "1_NOPE", {"price": 1.0})

    @pytest.mark.asyncio()
    async def test_other_users_stock_is_not_found(self, service) -> None:
        await service.add_stock(2, _scored())
        with pytest.raises(NotFound):
            await service.update_stock(1, "2_AAPL", {"price": 1.0})


class TestDeleteStock:
    @pytest.mark.asyncio()
    async def test_delete_removes_stock_and_index(self, service, session) -> None:
        await service.add_stock(1, _scored())
        await service.delete_stock(1, "1_AAPL")
        assert await service.list_stocks(1) == []
        result = await session.execute(select(UserStock))
        assert result.scalars().all() == []

    @pytest.mark.asyncio()
    async def test_delete_unknown(self, service) -> None:
        with pytest.raises(NotFound):
            await service.delete_stock(1, "1_AAPL")


def test_make_stock_id_upper_cases() -> None:
    assert make_stock_id(7, "brk.b") == "7_BRK.B"
