"""Shared fixtures for the StockPulse test suite."""
import os

# Must be set before stockpulse.config is first imported
os.environ.setdefault("STOCKPULSE_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("STOCKPULSE_MARKET_DATA_MIN_INTERVAL", "0")

from datetime import datetime, timezone

import pytest

from stockpulse.schemas.analysis import Category
from stockpulse.schemas.stock import Quote


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2025, 1, 15, 15, 30, tzinfo=timezone.utc)


@pytest.fixture()
def make_quote():
    """Factory for quotes; every field not given is 0 like an empty upstream record."""

    def _make(**overrides) -> Quote:
        fields = {"symbol": "AAPL", "name": "Apple Inc."}
        fields.update(overrides)
        return Quote(**fields)

    return _make


@pytest.fixture()
def bullish_quote(make_quote) -> Quote:
    return make_quote(
        price=110.0,
        percent_change=6.0,
        fifty_day_average=100.0,
        two_hundred_day_average=90.0,
        volume=1_200_000,
        average_volume=1_000_000,
    )


@pytest.fixture()
def all_threes() -> dict[Category, int]:
    return {category: 3 for category in Category}


@pytest.fixture()
def sample_info() -> dict:
    """A realistic yfinance info dict for AAPL."""
    return {
        "symbol": "AAPL",
        "shortName": "Apple Inc.",
        "longName": "Apple Inc.",
        "regularMarketPrice": 186.52,
        "regularMarketChangePercent": 1.25,
        "fiftyDayAverage": 180.10,
        "twoHundredDayAverage": 175.40,
        "regularMarketVolume": 52_340_000,
        "averageDailyVolume3Month": 48_000_000,
        "revenueGrowth": 0.061,
        "earningsGrowth": 0.108,
        "grossMargins": 0.456,
        "operatingMargins": 0.301,
        "profitMargins": 0.253,
        "debtToEquity": 145.0,
        "currentRatio": 0.99,
        "forwardPE": 28.4,
        "trailingPE": 30.1,
        "priceToBook": 47.2,
        "52WeekChange": 0.18,
        "trailingAnnualDividendYield": 0.0051,
        "payoutRatio": 0.155,
        "heldPercentInstitutions": 0.61,
    }
