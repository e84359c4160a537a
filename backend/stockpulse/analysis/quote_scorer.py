"""
Quote scorer - turns one quote snapshot into three 1-10 sub-scores and a
buy/sell/neutral signal.

signal:     tri-state vote over momentum, price vs 50-day MA and volume
technical:  trend and volume confirmation
sentiment:  size of the day's move and unusual volume
news:       distance above the 50-day MA and size of the move

Every function here is pure: same quote in, same result out.
"""
import re
from datetime import datetime, timezone

from stockpulse.analysis.grading import clamp
from stockpulse.exceptions import InvalidSymbol
from stockpulse.schemas.stock import Quote, ScoredStock

SYMBOL_PATTERN = re.compile(r"^[A-Za-z.\-]{1,10}$")

MIN_SCORE = 1
MAX_SCORE = 10
BASE_SCORE = 5


def is_valid_symbol(symbol) -> bool:
    """True for 1-10 characters drawn from ASCII letters, '.' and '-'."""
    if not isinstance(symbol, str):
        return False
    return SYMBOL_PATTERN.fullmatch(symbol) is not None


def calculate_signal(quote: Quote) -> str:
    vote = 0

    # Momentum
    if quote.percent_change > 2:
        vote += 1
    if quote.percent_change < -2:
        vote -= 1

    # Price vs 50-day average
    if quote.price > quote.fifty_day_average:
        vote += 1
    if quote.price < quote.fifty_day_average:
        vote -= 1

    # Volume vs 3-month average
    if quote.volume > quote.average_volume * 1.5:
        vote += 1
    if quote.volume < quote.average_volume * 0.5:
        vote -= 1

    if vote >= 2:
        return "buy"
    if vote <= -2:
        return "sell"
    return "neutral"


def technical_score(quote: Quote) -> int:
    score = BASE_SCORE
    if quote.price > quote.fifty_day_average:
        score += 1
    if quote.price > quote.two_hundred_day_average:
        score += 1
    if quote.volume > quote.average_volume:
        score += 1
    if quote.percent_change > 0:
        score += 1
    if quote.percent_change > 5:
        score += 1
    return int(clamp(score, MIN_SCORE, MAX_SCORE))


def sentiment_score(quote: Quote) -> int:
    # Thresholds stack: a +7% day earns both the +2 and the +1
    score = BASE_SCORE
    change = quote.percent_change
    if change > 5:
        score += 2
    if change > 2:
        score += 1
    if change < -2:
        score -= 1
    if change < -5:
        score -= 2

    if quote.volume > quote.average_volume * 2:
        score += 1
    if quote.volume > quote.average_volume * 3:
        score += 1
    return int(clamp(score, MIN_SCORE, MAX_SCORE))


def news_score(quote: Quote) -> int:
    score = BASE_SCORE
    if quote.price > quote.fifty_day_average:
        score += 1
    if quote.price > quote.fifty_day_average * 1.05:
        score += 1

    change = quote.percent_change
    if change > 3:
        score += 1
    if change > 5:
        score += 1
    if change < -3:
        score -= 1
    if change < -5:
        score -= 1
    return int(clamp(score, MIN_SCORE, MAX_SCORE))


def score_quote(quote: Quote, now: datetime | None = None) -> ScoredStock:
    """Score a quote.

    Args:
        quote: The market snapshot to score.
        now: Timestamp stamped on the result; defaults to the current UTC time.

    Raises:
        InvalidSymbol: If quote.symbol is not a well-formed ticker.
    """
    if not is_valid_symbol(quote.symbol):
        raise InvalidSymbol(f"Invalid stock symbol format: '{quote.symbol}'", symbol=quote.symbol)

    return ScoredStock(
        symbol=quote.symbol.upper(),
        name=quote.name or quote.symbol.upper(),
        price=quote.price,
        percent_change=quote.percent_change,
        signal=calculate_signal(quote),
        technical_score=technical_score(quote),
        sentiment_score=sentiment_score(quote),
        news_score=news_score(quote),
        last_updated=now or datetime.now(timezone.utc),
    )
