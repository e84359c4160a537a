import logging
import time
from concurrent.futures import ThreadPoolExecutor
from functools import partial

import yfinance as yf

from stockpulse.config import get_settings
from stockpulse.exceptions import FetchFailed

logger = logging.getLogger(__name__)

# Thread pool for running yfinance (synchronous) calls
_executor = ThreadPoolExecutor(max_workers=2)

# Simple rate limiting: track last call time
_last_call_time = 0.0


def _rate_limit():
    global _last_call_time
    min_interval = get_settings().market_data_min_interval
    now = time.monotonic()
    elapsed = now - _last_call_time
    if elapsed < min_interval:
        time.sleep(min_interval - elapsed)
    _last_call_time = time.monotonic()


def _is_rate_limited(exc: Exception) -> bool:
    err_str = str(exc).lower()
    return "429" in err_str or "too many requests" in err_str or "expecting value" in err_str


def _retry(func, max_retries: int | None = None, base_delay: float = 2.0):
    """Retry wrapper with exponential backoff for rate-limit errors only."""
    if max_retries is None:
        max_retries = get_settings().market_data_max_retries
    attempts = max_retries + 1
    for attempt in range(attempts):
        try:
            _rate_limit()
            return func()
        except Exception as e:
            if not _is_rate_limited(e) or attempt == attempts - 1:
                raise
            delay = base_delay * (2 ** attempt)
            logger.warning(f"Rate limited (attempt {attempt + 1}/{attempts}), waiting {delay}s...")
            time.sleep(delay)


async def _run_sync(func, *args, **kwargs):
    import asyncio
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_executor, partial(func, *args, **kwargs))


def _get_ticker_info(ticker_str: str) -> dict:
    """Return the yfinance info dict, or {} when Yahoo knows nothing about the ticker."""
    try:
        ticker = yf.Ticker(ticker_str)

        def fetch():
            info = ticker.info
            if not info or not (info.get("shortName") or info.get("longName")):
                return {}
            return info

        return _retry(fetch) or {}
    except Exception as e:
        err_str = str(e).lower()
        if "404" in err_str or "not found" in err_str:
            logger.info(f"yfinance has no info for {ticker_str}")
            return {}
        logger.error(f"yfinance info error for {ticker_str}: {e}")
        raise FetchFailed(f"Failed to fetch stock data for '{ticker_str}'", symbol=ticker_str) from e


class YFinanceService:
    async def get_info(self, ticker: str) -> dict:
        return await _run_sync(_get_ticker_info, ticker)
