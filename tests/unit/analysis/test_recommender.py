"""Tests for the fundamentals recommender and bundle validation."""

from __future__ import annotations

import pytest

from stockpulse.analysis.recommender import MAX_SCORE, recommend, validate_bundle
from stockpulse.exceptions import InvalidBundle
from stockpulse.schemas.analysis import Category, FundamentalsBundle


def _bundle_with_total(total: int) -> FundamentalsBundle:
    """Spread `total` over the seven categories, each within 1-5."""
    scores = {}
    remaining = total
    categories = list(Category)
    for i, category in enumerate(categories):
        left = len(categories) - i - 1
        score = min(5, remaining - left)
        scores[category] = score
        remaining -= score
    return validate_bundle(scores)


class TestRecommend:
    def test_max_score_is_thirty_five(self) -> None:
        assert MAX_SCORE == 35

    def test_eighty_percent_is_strong_buy(self) -> None:
        result = recommend(_bundle_with_total(28))
        assert result.total_score == 28
        assert result.max_score == 35
        assert result.score_percentage == 80.0
        assert result.recommendation == "STRONG BUY"
        assert result.recommendation_text == "The stock looks very attractive on all key metrics."

    def test_just_below_eighty_is_buy(self) -> None:
        result = recommend(_bundle_with_total(27))
        assert result.score_percentage == pytest.approx(77.142857, rel=1e-6)
        assert result.recommendation == "BUY"
        assert result.recommendation_text == "The stock looks generally good but has some weaker points."

    def test_sixty_percent_is_buy(self) -> None:
        assert recommend(_bundle_with_total(21)).recommendation == "BUY"

    def test_just_below_sixty_is_neutral(self) -> None:
        result = recommend(_bundle_with_total(20))
        assert result.recommendation == "NEUTRAL"
        assert result.recommendation_text == "The stock has both strengths and weaknesses. More research needed."

    def test_forty_percent_is_neutral(self) -> None:
        assert recommend(_bundle_with_total(14)).recommendation == "NEUTRAL"

    def test_below_forty_is_hold(self) -> None:
        result = recommend(_bundle_with_total(13))
        assert result.recommendation == "HOLD"
        assert result.recommendation_text == "The stock has several red flags. Look for better alternatives."

    def test_extremes(self) -> None:
        low = recommend(_bundle_with_total(7))
        high = recommend(_bundle_with_total(35))
        assert low.score_percentage == 20.0
        assert low.recommendation == "HOLD"
        assert high.score_percentage == 100.0
        assert high.recommendation == "STRONG BUY"

    def test_details_are_carried_through(self, all_threes) -> None:
        bundle = validate_bundle(all_threes, {"growth": ["Revenue growth: 6.1%"]})
        result = recommend(bundle)
        assert result.details[Category.GROWTH] == ["Revenue growth: 6.1%"]
        assert result.details[Category.DIVIDEND] == []

    def test_hand_built_bundle_is_revalidated(self, all_threes) -> None:
        all_threes[Category.VALUATION] = 6
        with pytest.raises(InvalidBundle):
            recommend(FundamentalsBundle(scores=all_threes))


class TestValidateBundle:
    def test_accepts_camel_case_names(self) -> None:
        raw = {
            "growth": 4,
            "profitability": 4,
            "financialHealth": 3,
            "valuation": 2,
            "momentum": 5,
            "dividend": 1,
            "institutionalOwnership": 4,
        }
        bundle = validate_bundle(raw)
        assert bundle.scores[Category.FINANCIAL_HEALTH] == 3
        assert bundle.scores[Category.INSTITUTIONAL_OWNERSHIP] == 4

    def test_keys_come_back_in_category_order(self, all_threes) -> None:
        shuffled = dict(reversed(list(all_threes.items())))
        assert list(validate_bundle(shuffled).scores) == list(Category)

    def test_missing_category(self, all_threes) -> None:
        del all_threes[Category.MOMENTUM]
        with pytest.raises(InvalidBundle, match="momentum"):
            validate_bundle(all_threes)

    def test_unknown_category(self, all_threes) -> None:
        raw = {c.value: s for c, s in all_threes.items()}
        raw["sentiment"] = 3
        with pytest.raises(InvalidBundle, match="sentiment"):
            validate_bundle(raw)

    def test_duplicate_category_via_alias(self, all_threes) -> None:
        raw = {c.value: s for c, s in all_threes.items()}
        raw["financialHealth"] = 3
        with pytest.raises(InvalidBundle, match="Duplicate"):
            validate_bundle(raw)

    @pytest.mark.parametrize("bad", [0, 6, -1])
    def test_score_out_of_range(self, all_threes, bad: int) -> None:
        all_threes[Category.GROWTH] = bad
        with pytest.raises(InvalidBundle):
            validate_bundle(all_threes)

    @pytest.mark.parametrize("bad", [3.5, "3", True, None])
    def test_score_must_be_integer(self, all_threes, bad) -> None:
        all_threes[Category.GROWTH] = bad
        with pytest.raises(InvalidBundle, match="integer"):
            validate_bundle(all_threes)

    def test_unknown_detail_category(self, all_threes) -> None:
        with pytest.raises(InvalidBundle):
            validate_bundle(all_threes, {"news": ["x"]})
