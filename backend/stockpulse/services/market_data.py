import logging
from datetime import datetime, timedelta, timezone

from stockpulse.analysis.quote_scorer import is_valid_symbol
from stockpulse.config import get_settings
from stockpulse.exceptions import InvalidSymbol, NotFound
from stockpulse.schemas.stock import OHLCVBar, Quote
from stockpulse.services.yahoo_direct import fetch_chart
from stockpulse.services.yfinance_service import YFinanceService

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _check_symbol(symbol: str) -> None:
    if not is_valid_symbol(symbol):
        raise InvalidSymbol(f"Invalid stock symbol format: '{symbol}'", symbol=symbol)


class MarketDataService:
    """Quote and history lookups. Symbols are validated before any I/O."""

    def __init__(self, yf: YFinanceService | None = None):
        self.yf = yf or YFinanceService()
        self.settings = get_settings()

    async def fetch_info(self, symbol: str) -> dict:
        _check_symbol(symbol)
        info = await self.yf.get_info(symbol.upper())
        if not info:
            raise NotFound(f"Stock data not found for '{symbol.upper()}'", symbol=symbol)
        return info

    async def fetch_quote(self, symbol: str) -> Quote:
        info = await self.fetch_info(symbol)
        quote = Quote.from_yahoo(symbol.upper(), info)
        logger.info(f"Fetched quote for {quote.symbol}: price={quote.price} change={quote.percent_change:.2f}%")
        return quote

    async def fetch_history(
        self,
        symbol: str,
        range_start: datetime | None = None,
        range_end: datetime | None = None,
        interval: str = "1d",
    ) -> list[OHLCVBar]:
        _check_symbol(symbol)
        range_end = _as_utc(range_end) or datetime.now(timezone.utc)
        range_start = _as_utc(range_start) or range_end - timedelta(days=self.settings.history_days)
        if range_start >= range_end:
            raise ValueError("range_start must be before range_end")

        bars = await fetch_chart(symbol.upper(), range_start, range_end, interval)
        if not bars:
            raise NotFound(f"Historical data not found for '{symbol.upper()}'", symbol=symbol)
        return [OHLCVBar(**bar) for bar in bars]
