"""API request validation utilities."""
from stockpulse.analysis.quote_scorer import is_valid_symbol
from stockpulse.exceptions import InvalidSymbol


def validate_ticker(ticker: str) -> str:
    """Validate and normalize ticker symbol.

    Args:
        ticker: Raw ticker string from request

    Returns:
        Validated and normalized ticker (uppercase, stripped)

    Raises:
        InvalidSymbol: If ticker is invalid
    """
    if not ticker or not ticker.strip():
        raise InvalidSymbol("Ticker cannot be empty")

    ticker = ticker.strip()

    # Valid tickers: 1-10 letters, dots, dashes
    # Examples: AAPL, BRK.B, BF-B
    if not is_valid_symbol(ticker):
        raise InvalidSymbol(
            f"Invalid ticker format: '{ticker}'. Use 1-10 letters, dots or dashes.",
            symbol=ticker,
        )

    return ticker.upper()
