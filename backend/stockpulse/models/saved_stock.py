from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from stockpulse.database import Base


class SavedStock(Base):
    """A scored stock pinned to a user's dashboard.

    The id is "<user_id>_<symbol>", so saving the same symbol twice
    overwrites the earlier row.
    """

    __tablename__ = "saved_stocks"
    __table_args__ = (
        Index("idx_saved_stocks_user", "user_id"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    symbol: Mapped[str] = mapped_column(String(10), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Float, default=0)
    percent_change: Mapped[float] = mapped_column(Float, default=0)
    signal: Mapped[str] = mapped_column(String(10), nullable=False)  # buy, sell, neutral
    technical_score: Mapped[int] = mapped_column(Integer, nullable=False)
    sentiment_score: Mapped[int] = mapped_column(Integer, nullable=False)
    news_score: Mapped[int] = mapped_column(Integer, nullable=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class UserStock(Base):
    """Per-user index mapping stored stock ids back to symbols."""

    __tablename__ = "user_stocks"
    __table_args__ = (
        Index("idx_user_stocks_user_stock", "user_id", "stock_id", unique=True),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    stock_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("saved_stocks.id", ondelete="CASCADE"), nullable=False
    )
    symbol: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
