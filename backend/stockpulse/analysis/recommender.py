"""
Fundamentals recommender - aggregates seven 1-5 category sub-scores.

total       = sum of the seven sub-scores (7-35)
percentage  = total * 100 / 35 (20-100)

The label comes from the grading ladder: >=80 STRONG BUY, >=60 BUY,
>=40 NEUTRAL, otherwise HOLD.
"""
from collections.abc import Mapping

from stockpulse.analysis.grading import RECOMMENDATION_TEXT, percentage_to_recommendation
from stockpulse.exceptions import InvalidBundle
from stockpulse.schemas.analysis import Category, FundamentalsBundle, Recommendation

MIN_CATEGORY_SCORE = 1
MAX_CATEGORY_SCORE = 5
MAX_SCORE = MAX_CATEGORY_SCORE * len(Category)

# camelCase spellings used by browser clients
_ALIASES = {
    "financialHealth": Category.FINANCIAL_HEALTH,
    "institutionalOwnership": Category.INSTITUTIONAL_OWNERSHIP,
}


def _to_category(key) -> Category:
    if isinstance(key, Category):
        return key
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return Category(key)
    except ValueError:
        raise InvalidBundle(f"Unknown fundamentals category: '{key}'")


def validate_bundle(scores: Mapping, details: Mapping | None = None) -> FundamentalsBundle:
    """Check a raw scores/details mapping and return a FundamentalsBundle.

    Raises:
        InvalidBundle: On unknown, duplicate or missing categories, or a
            sub-score that is not an integer in [1, 5].
    """
    parsed: dict[Category, int] = {}
    for key, value in scores.items():
        category = _to_category(key)
        if category in parsed:
            raise InvalidBundle(f"Duplicate fundamentals category: '{category.value}'")
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidBundle(f"Score for '{category.value}' must be an integer, got {value!r}")
        if not MIN_CATEGORY_SCORE <= value <= MAX_CATEGORY_SCORE:
            raise InvalidBundle(
                f"Score for '{category.value}' must be between "
                f"{MIN_CATEGORY_SCORE} and {MAX_CATEGORY_SCORE}, got {value}"
            )
        parsed[category] = value

    missing = [c.value for c in Category if c not in parsed]
    if missing:
        raise InvalidBundle(f"Missing fundamentals categories: {', '.join(missing)}")

    parsed_details: dict[Category, list[str]] = {c: [] for c in Category}
    for key, lines in (details or {}).items():
        category = _to_category(key)
        parsed_details[category] = [str(line) for line in lines]

    return FundamentalsBundle(
        scores={c: parsed[c] for c in Category},
        details=parsed_details,
    )


def recommend(bundle: FundamentalsBundle) -> Recommendation:
    # Re-validate so hand-built bundles get the same guarantees
    bundle = validate_bundle(bundle.scores, bundle.details)

    total = sum(bundle.scores.values())
    percentage = total * 100 / MAX_SCORE
    label = percentage_to_recommendation(percentage)

    return Recommendation(
        scores=bundle.scores,
        details=bundle.details,
        total_score=total,
        max_score=MAX_SCORE,
        score_percentage=percentage,
        recommendation=label,
        recommendation_text=RECOMMENDATION_TEXT[label],
    )
