from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from stockpulse.schemas.stock import Signal


class SavedStockRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    symbol: str
    name: str
    price: float
    percent_change: float
    signal: Signal
    technical_score: int
    sentiment_score: int
    news_score: int
    last_updated: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AddStockRequest(BaseModel):
    symbol: str


class UpdateStockRequest(BaseModel):
    # Only the fields that are set get written
    symbol: str | None = None
    name: str | None = None
    price: float | None = None
    percent_change: float | None = None
    signal: Signal | None = None
    technical_score: int | None = Field(None, ge=1, le=10)
    sentiment_score: int | None = Field(None, ge=1, le=10)
    news_score: int | None = Field(None, ge=1, le=10)
