from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from stockpulse.analysis.fundamentals_provider import InfoFundamentalsProvider, build_bundle
from stockpulse.analysis.quote_scorer import score_quote
from stockpulse.analysis.recommender import recommend
from stockpulse.api.dependencies import get_current_user, get_market_data
from stockpulse.api.validation import validate_ticker
from stockpulse.models.user import User
from stockpulse.schemas.analysis import Recommendation
from stockpulse.schemas.stock import ChartData, Interval, ScoredStock
from stockpulse.services.market_data import MarketDataService

router = APIRouter(prefix="/api/stock", tags=["stock"])


@router.get("/{ticker}/score", response_model=ScoredStock)
async def get_stock_score(
    ticker: str,
    market_data: MarketDataService = Depends(get_market_data),
    current_user: User = Depends(get_current_user)
):
    ticker = validate_ticker(ticker)
    quote = await market_data.fetch_quote(ticker)
    return score_quote(quote)


@router.get("/{ticker}/history", response_model=ChartData)
async def get_history(
    ticker: str,
    start: datetime | None = None,
    end: datetime | None = None,
    interval: Interval = "1d",
    market_data: MarketDataService = Depends(get_market_data),
    current_user: User = Depends(get_current_user)
):
    ticker = validate_ticker(ticker)
    try:
        bars = await market_data.fetch_history(ticker, start, end, interval)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ChartData(
        ticker=ticker,
        start=bars[0].time,
        end=bars[-1].time,
        interval=interval,
        bars=bars,
    )


@router.get("/{ticker}/fundamentals", response_model=Recommendation)
async def get_fundamentals(
    ticker: str,
    market_data: MarketDataService = Depends(get_market_data),
    current_user: User = Depends(get_current_user)
):
    ticker = validate_ticker(ticker)
    info = await market_data.fetch_info(ticker)
    bundle = build_bundle(InfoFundamentalsProvider(info))
    return recommend(bundle)
