from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from stockpulse.analysis.quote_scorer import score_quote
from stockpulse.api.dependencies import get_current_user, get_market_data
from stockpulse.api.validation import validate_ticker
from stockpulse.database import get_db
from stockpulse.models.user import User
from stockpulse.schemas.saved_stock import AddStockRequest, SavedStockRecord, UpdateStockRequest
from stockpulse.schemas.stock import Signal
from stockpulse.services.market_data import MarketDataService
from stockpulse.services.stock_service import StockService

router = APIRouter(prefix="/api/stocks", tags=["stocks"])


@router.get("", response_model=list[SavedStockRecord])
async def list_stocks(
    signal: Signal | None = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the current user's saved stocks, optionally only one signal column."""
    return await StockService(db).list_stocks(current_user.id, signal)


@router.post("", response_model=SavedStockRecord, status_code=201)
async def add_stock(
    body: AddStockRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    market_data: MarketDataService = Depends(get_market_data),
):
    """Score a symbol from a fresh quote and pin it to the dashboard."""
    ticker = validate_ticker(body.symbol)
    quote = await market_data.fetch_quote(ticker)
    scored = score_quote(quote)
    return await StockService(db).add_stock(current_user.id, scored)


@router.patch("/{stock_id}", response_model=SavedStockRecord)
async def update_stock(
    stock_id: str,
    body: UpdateStockRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    if "symbol" in updates:
        updates["symbol"] = validate_ticker(updates["symbol"])
    return await StockService(db).update_stock(current_user.id, stock_id, updates)


@router.post("/{stock_id}/refresh", response_model=SavedStockRecord)
async def refresh_stock(
    stock_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    market_data: MarketDataService = Depends(get_market_data),
):
    """Re-score a saved stock from a fresh quote."""
    service = StockService(db)
    record = await service.get_stock(current_user.id, stock_id)
    scored = score_quote(await market_data.fetch_quote(record.symbol))
    return await service.update_stock(current_user.id, stock_id, scored.model_dump())


@router.delete("/{stock_id}", status_code=204)
async def delete_stock(
    stock_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await StockService(db).delete_stock(current_user.id, stock_id)
    return Response(status_code=204)
