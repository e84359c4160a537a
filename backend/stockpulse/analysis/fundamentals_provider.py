"""
Fundamentals providers - supply the seven category sub-scores (1-5) that the
recommender aggregates.

InfoFundamentalsProvider scores each category from a Yahoo/yfinance `info`
mapping. Each metric is interpolated onto 0-100 over a breakpoint table, the
metrics that have data are averaged, and the average is mapped onto 1-5:

    0-20 -> 1, 20-40 -> 2, 40-60 -> 3, 60-80 -> 4, 80-100 -> 5

A category with no usable metric scores a neutral 3.
"""
from typing import Protocol

from stockpulse.analysis.grading import clamp, interpolate
from stockpulse.analysis.recommender import validate_bundle
from stockpulse.schemas.analysis import Category, FundamentalsBundle

NEUTRAL_CATEGORY_SCORE = 3


class FundamentalsProvider(Protocol):
    def supply_category_score(self, category: Category) -> tuple[int, list[str]]:
        ...


def build_bundle(provider: FundamentalsProvider) -> FundamentalsBundle:
    """Ask the provider for every category, in order, and validate the result."""
    scores = {}
    details = {}
    for category in Category:
        score, lines = provider.supply_category_score(category)
        scores[category] = score
        details[category] = list(lines)
    return validate_bundle(scores, details)


def _to_category_score(score_0_100: float) -> int:
    return int(clamp(score_0_100 // 20 + 1, 1, 5))


def _pct(value: float) -> str:
    return f"{value * 100:.1f}%"


# Breakpoints: (metric value, 0-100 score). Ratios are fractions (0.15 = 15%).
REVENUE_GROWTH_BP = [(-0.20, 0), (0.0, 30), (0.05, 50), (0.15, 75), (0.30, 100)]
EARNINGS_GROWTH_BP = [(-0.30, 0), (0.0, 30), (0.10, 55), (0.25, 80), (0.50, 100)]
GROSS_MARGIN_BP = [(0.0, 0), (0.20, 30), (0.40, 60), (0.60, 85), (0.80, 100)]
OPERATING_MARGIN_BP = [(-0.10, 0), (0.0, 20), (0.10, 50), (0.20, 75), (0.35, 100)]
NET_MARGIN_BP = [(-0.10, 0), (0.0, 20), (0.08, 50), (0.15, 75), (0.25, 100)]
# yfinance reports debtToEquity as a percentage (150 = 1.5x)
DEBT_TO_EQUITY_BP = [(0, 100), (50, 80), (100, 60), (200, 30), (400, 0)]
CURRENT_RATIO_BP = [(0.5, 0), (1.0, 40), (1.5, 70), (2.0, 90), (3.0, 100)]
PE_BP = [(5, 100), (12, 85), (20, 60), (30, 35), (50, 10), (80, 0)]
PRICE_TO_BOOK_BP = [(0.5, 100), (1.5, 80), (3.0, 55), (6.0, 25), (12.0, 0)]
MA_DISTANCE_BP = [(-0.20, 0), (-0.05, 30), (0.0, 50), (0.05, 70), (0.20, 100)]
YEAR_CHANGE_BP = [(-0.40, 0), (-0.10, 30), (0.0, 50), (0.20, 75), (0.50, 100)]
DIVIDEND_YIELD_BP = [(0.0, 0), (0.01, 40), (0.025, 70), (0.04, 90), (0.06, 100)]
INSTITUTIONAL_BP = [(0.0, 0), (0.20, 30), (0.45, 60), (0.70, 90), (0.85, 100)]


class InfoFundamentalsProvider:
    """Derive category scores from a yfinance `Ticker.info` dict."""

    def __init__(self, info: dict):
        self.info = info or {}

    def supply_category_score(self, category: Category) -> tuple[int, list[str]]:
        scorer = {
            Category.GROWTH: self._growth,
            Category.PROFITABILITY: self._profitability,
            Category.FINANCIAL_HEALTH: self._financial_health,
            Category.VALUATION: self._valuation,
            Category.MOMENTUM: self._momentum,
            Category.DIVIDEND: self._dividend,
            Category.INSTITUTIONAL_OWNERSHIP: self._institutional_ownership,
        }[category]
        return scorer()

    def _get(self, key: str) -> float | None:
        value = self.info.get(key)
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    def _combine(self, metrics: list[tuple[float | None, str]], label: str) -> tuple[int, list[str]]:
        available = [(s, line) for s, line in metrics if s is not None]
        if not available:
            return NEUTRAL_CATEGORY_SCORE, [f"{label} data not available"]
        average = sum(s for s, _ in available) / len(available)
        return _to_category_score(average), [line for _, line in available]

    # ── Categories ──────────────────────────────────────────────────

    def _growth(self) -> tuple[int, list[str]]:
        revenue = self._get("revenueGrowth")
        earnings = self._get("earningsGrowth")
        return self._combine([
            (interpolate(revenue, REVENUE_GROWTH_BP), f"Revenue growth: {_pct(revenue)}" if revenue is not None else ""),
            (interpolate(earnings, EARNINGS_GROWTH_BP), f"Earnings growth: {_pct(earnings)}" if earnings is not None else ""),
        ], "Growth")

    def _profitability(self) -> tuple[int, list[str]]:
        gross = self._get("grossMargins")
        operating = self._get("operatingMargins")
        net = self._get("profitMargins")
        return self._combine([
            (interpolate(gross, GROSS_MARGIN_BP), f"Gross margin: {_pct(gross)}" if gross is not None else ""),
            (interpolate(operating, OPERATING_MARGIN_BP), f"Operating margin: {_pct(operating)}" if operating is not None else ""),
            (interpolate(net, NET_MARGIN_BP), f"Net margin: {_pct(net)}" if net is not None else ""),
        ], "Profitability")

    def _financial_health(self) -> tuple[int, list[str]]:
        de = self._get("debtToEquity")
        current = self._get("currentRatio")
        return self._combine([
            (interpolate(de, DEBT_TO_EQUITY_BP), f"Debt/Equity: {de / 100:.2f}x" if de is not None else ""),
            (interpolate(current, CURRENT_RATIO_BP), f"Current ratio: {current:.2f}" if current is not None else ""),
        ], "Financial health")

    def _valuation(self) -> tuple[int, list[str]]:
        pe = self._get("forwardPE")
        pe_label = "Forward P/E"
        if pe is None:
            pe = self._get("trailingPE")
            pe_label = "Trailing P/E"
        # Negative earnings make P/E meaningless
        pe_score = interpolate(pe, PE_BP) if pe is not None and pe > 0 else None
        pb = self._get("priceToBook")
        pb_score = interpolate(pb, PRICE_TO_BOOK_BP) if pb is not None and pb > 0 else None
        return self._combine([
            (pe_score, f"{pe_label}: {pe:.1f}" if pe_score is not None else ""),
            (pb_score, f"Price/Book: {pb:.2f}" if pb_score is not None else ""),
        ], "Valuation")

    def _momentum(self) -> tuple[int, list[str]]:
        price = self._get("regularMarketPrice") or self._get("currentPrice")
        ma50 = self._get("fiftyDayAverage")
        ma200 = self._get("twoHundredDayAverage")
        year_change = self._get("52WeekChange")

        metrics = []
        if price and ma50:
            distance = price / ma50 - 1
            metrics.append((interpolate(distance, MA_DISTANCE_BP), f"Price vs 50-day average: {distance * 100:+.1f}%"))
        if price and ma200:
            distance = price / ma200 - 1
            metrics.append((interpolate(distance, MA_DISTANCE_BP), f"Price vs 200-day average: {distance * 100:+.1f}%"))
        if year_change is not None:
            metrics.append((interpolate(year_change, YEAR_CHANGE_BP), f"52-week change: {year_change * 100:+.1f}%"))
        return self._combine(metrics, "Momentum")

    def _dividend(self) -> tuple[int, list[str]]:
        # dividendYield switched units between yfinance releases; these two are always fractions
        dividend_yield = self._get("trailingAnnualDividendYield")
        if dividend_yield is None:
            rate = self._get("dividendRate")
            price = self._get("regularMarketPrice") or self._get("currentPrice")
            if rate is not None and price:
                dividend_yield = rate / price
        if not dividend_yield:
            return 1, ["No dividend paid"]
        score = interpolate(dividend_yield, DIVIDEND_YIELD_BP)
        if score is None:
            return NEUTRAL_CATEGORY_SCORE, ["Dividend data not available"]
        lines = [f"Dividend yield: {_pct(dividend_yield)}"]
        payout = self._get("payoutRatio")
        if payout is not None:
            lines.append(f"Payout ratio: {_pct(payout)}")
        return _to_category_score(score), lines

    def _institutional_ownership(self) -> tuple[int, list[str]]:
        held = self._get("heldPercentInstitutions")
        return self._combine([
            (interpolate(held, INSTITUTIONAL_BP), f"Held by institutions: {_pct(held)}" if held is not None else ""),
        ], "Institutional ownership")
