"""
Direct Yahoo Finance client for the v8 chart API.
The chart endpoint works without auth/crumb and takes an explicit
period1/period2 window in epoch seconds.
"""
import logging
from datetime import datetime, timezone

import httpx

from stockpulse.config import get_settings
from stockpulse.exceptions import FetchFailed, NotFound

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Accept": "application/json",
}

OHLCV_FIELDS = ("open", "high", "low", "close", "volume")


async def fetch_chart(ticker: str, start: datetime, end: datetime, interval: str = "1d") -> list[dict]:
    """
    Fetch OHLCV bars between start and end from the Yahoo v8 chart API.

    Raises:
        NotFound: Yahoo has no chart data for the ticker.
        FetchFailed: Transport error, unexpected status or unparseable body.
    """
    settings = get_settings()
    url = f"{settings.yahoo_base_url}/v8/finance/chart/{ticker}"
    params = {
        "period1": int(start.timestamp()),
        "period2": int(end.timestamp()),
        "interval": interval,
        "includePrePost": "false",
    }
    try:
        async with httpx.AsyncClient(headers=HEADERS, follow_redirects=True, timeout=settings.http_timeout) as client:
            resp = await client.get(url, params=params)
    except httpx.HTTPError as e:
        logger.error(f"Yahoo chart fetch error for {ticker}: {e}")
        raise FetchFailed(f"Failed to fetch historical data for '{ticker}'", symbol=ticker) from e

    if resp.status_code == 404:
        raise NotFound(f"Historical data not found for '{ticker}'", symbol=ticker)
    if resp.status_code != 200:
        logger.warning(f"Yahoo chart API returned {resp.status_code} for {ticker}")
        raise FetchFailed(f"Failed to fetch historical data for '{ticker}'", symbol=ticker)

    try:
        data = resp.json()
    except ValueError as e:
        logger.error(f"Yahoo chart response for {ticker} is not JSON: {e}")
        raise FetchFailed(f"Failed to fetch historical data for '{ticker}'", symbol=ticker) from e

    try:
        chart = data.get("chart") or {}
        error = chart.get("error")
        results = chart.get("result") or []
        bars = parse_chart_bars(results[0]) if results and not error else None
    except (AttributeError, TypeError, KeyError, IndexError, ValueError) as e:
        logger.error(f"Malformed Yahoo chart response for {ticker}: {e}")
        raise FetchFailed(f"Failed to fetch historical data for '{ticker}'", symbol=ticker) from e

    if error:
        logger.warning(f"Yahoo chart error for {ticker}: {error}")
    if bars is None:
        raise NotFound(f"Historical data not found for '{ticker}'", symbol=ticker)
    return bars


def parse_chart_bars(result: dict) -> list[dict]:
    """Turn a chart result into bars, dropping any bar with a missing OHLCV field."""
    timestamps = result.get("timestamp") or []
    quotes = ((result.get("indicators") or {}).get("quote") or [{}])[0]
    columns = {field: quotes.get(field) or [] for field in OHLCV_FIELDS}

    bars = []
    for i, ts in enumerate(timestamps):
        values = {}
        for field in OHLCV_FIELDS:
            column = columns[field]
            values[field] = column[i] if i < len(column) else None
        if any(v is None for v in values.values()):
            continue
        dt = datetime.fromtimestamp(ts, tz=timezone.utc)
        bars.append({
            "time": dt.date().isoformat(),
            "open": round(values["open"], 2),
            "high": round(values["high"], 2),
            "low": round(values["low"], 2),
            "close": round(values["close"], 2),
            "volume": int(values["volume"]),
        })
    return bars
