from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class Category(str, Enum):
    GROWTH = "growth"
    PROFITABILITY = "profitability"
    FINANCIAL_HEALTH = "financial_health"
    VALUATION = "valuation"
    MOMENTUM = "momentum"
    DIVIDEND = "dividend"
    INSTITUTIONAL_OWNERSHIP = "institutional_ownership"


RecommendationLabel = Literal["STRONG BUY", "BUY", "NEUTRAL", "HOLD"]


class FundamentalsBundle(BaseModel):
    """Seven category sub-scores (1-5) with their detail lines.

    Build through recommender.validate_bundle or
    fundamentals_provider.build_bundle; both enforce the closed category set.
    """

    model_config = ConfigDict(frozen=True)

    scores: dict[Category, int]
    details: dict[Category, list[str]] = {}


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    scores: dict[Category, int]
    details: dict[Category, list[str]]
    total_score: int
    max_score: int
    score_percentage: float
    recommendation: RecommendationLabel
    recommendation_text: str


class RecommendRequest(BaseModel):
    # Raw JSON body, category names in snake_case or camelCase. Scores are
    # passed through raw; validate_bundle does the type checks.
    scores: dict[str, Any]
    details: dict[str, list[str]] = {}
