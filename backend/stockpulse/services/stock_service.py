"""
Saved-stock storage for the dashboard.

Each stock row is keyed by "<user_id>_<symbol>"; a per-user index table
(user_stocks) maps those ids back to symbols and drives listing.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from stockpulse.exceptions import NotFound
from stockpulse.models.saved_stock import SavedStock, UserStock
from stockpulse.schemas.stock import ScoredStock

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "symbol",
    "name",
    "price",
    "percent_change",
    "signal",
    "technical_score",
    "sentiment_score",
    "news_score",
    "last_updated",
)


def make_stock_id(user_id: int, symbol: str) -> str:
    return f"{user_id}_{symbol.upper()}"


def _require_user(user_id) -> None:
    if not user_id:
        raise ValueError("User ID is required")


class StockService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add_stock(self, user_id: int, stock: ScoredStock) -> SavedStock:
        """Save a scored stock, overwriting any earlier save of the same symbol."""
        _require_user(user_id)
        stock_id = make_stock_id(user_id, stock.symbol)

        record = await self.db.get(SavedStock, stock_id)
        if record is None:
            record = SavedStock(id=stock_id, user_id=user_id)
            self.db.add(record)
        record.symbol = stock.symbol.upper()
        record.name = stock.name
        record.price = stock.price
        record.percent_change = stock.percent_change
        record.signal = stock.signal
        record.technical_score = stock.technical_score
        record.sentiment_score = stock.sentiment_score
        record.news_score = stock.news_score
        record.last_updated = stock.last_updated

        index = await self._get_index(user_id, stock_id)
        if index is None:
            self.db.add(UserStock(user_id=user_id, stock_id=stock_id, symbol=record.symbol))
        else:
            index.symbol = record.symbol
            index.updated_at = datetime.now(timezone.utc)

        await self.db.commit()
        await self.db.refresh(record)
        logger.info(f"Saved {record.symbol} for user {user_id}")
        return record

    async def list_stocks(self, user_id: int, signal: str | None = None) -> list[SavedStock]:
        _require_user(user_id)
        query = (
            select(SavedStock)
            .join(UserStock, UserStock.stock_id == SavedStock.id)
            .where(UserStock.user_id == user_id)
            .order_by(UserStock.created_at, SavedStock.symbol)
        )
        if signal:
            query = query.where(SavedStock.signal == signal)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_stock(self, user_id: int, stock_id: str) -> SavedStock:
        _require_user(user_id)
        record = await self.db.get(SavedStock, stock_id)
        if record is None or record.user_id != user_id:
            raise NotFound(f"Stock '{stock_id}' not found")
        return record

    async def update_stock(self, user_id: int, stock_id: str, updates: dict) -> SavedStock:
        """Apply a partial update. Unknown keys are ignored."""
        record = await self.get_stock(user_id, stock_id)
        for field in UPDATABLE_FIELDS:
            if field in updates and updates[field] is not None:
                setattr(record, field, updates[field])

        if updates.get("symbol"):
            record.symbol = updates["symbol"].upper()
            index = await self._get_index(user_id, stock_id)
            if index is not None:
                index.symbol = record.symbol
                index.updated_at = datetime.now(timezone.utc)

        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def delete_stock(self, user_id: int, stock_id: str) -> None:
        record = await self.get_stock(user_id, stock_id)
        await self.db.execute(
            delete(UserStock).where(UserStock.user_id == user_id, UserStock.stock_id == stock_id)
        )
        await self.db.delete(record)
        await self.db.commit()
        logger.info(f"Deleted {stock_id} for user {user_id}")

    async def _get_index(self, user_id: int, stock_id: str) -> UserStock | None:
        result = await self.db.execute(
            select(UserStock).where(UserStock.user_id == user_id, UserStock.stock_id == stock_id)
        )
        return result.scalar_one_or_none()
