from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

Signal = Literal["buy", "sell", "neutral"]

# Bar sizes the Yahoo chart API accepts
Interval = Literal["1m", "2m", "5m", "15m", "30m", "60m", "90m", "1h", "1d", "5d", "1wk", "1mo", "3mo"]


def _num(info: dict, key: str) -> float:
    # Missing or null upstream fields fall back to 0
    value = info.get(key)
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class Quote(BaseModel):
    """Point-in-time market snapshot for one symbol."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    name: str = ""
    price: float = 0
    percent_change: float = 0
    fifty_day_average: float = 0
    two_hundred_day_average: float = 0
    volume: float = 0
    average_volume: float = 0  # 3-month average daily volume

    @classmethod
    def from_yahoo(cls, symbol: str, info: dict) -> "Quote":
        """Build a Quote from a Yahoo/yfinance quote or info mapping."""
        name = info.get("longName") or info.get("shortName") or symbol.upper()
        return cls(
            symbol=symbol,
            name=name,
            price=_num(info, "regularMarketPrice") or _num(info, "currentPrice"),
            percent_change=_num(info, "regularMarketChangePercent"),
            fifty_day_average=_num(info, "fiftyDayAverage"),
            two_hundred_day_average=_num(info, "twoHundredDayAverage"),
            volume=_num(info, "regularMarketVolume"),
            average_volume=_num(info, "averageDailyVolume3Month"),
        )


class ScoredStock(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    name: str
    price: float
    percent_change: float
    signal: Signal
    technical_score: int  # 1-10
    sentiment_score: int  # 1-10
    news_score: int  # 1-10
    last_updated: datetime


class OHLCVBar(BaseModel):
    time: str  # ISO date
    open: float
    high: float
    low: float
    close: float
    volume: int


class ChartData(BaseModel):
    ticker: str
    start: str  # first bar date
    end: str  # last bar date
    interval: Interval
    bars: list[OHLCVBar]
