"""Shared grading helpers: clamping and the recommendation threshold ladder."""

RECOMMENDATION_TEXT = {
    "STRONG BUY": "The stock looks very attractive on all key metrics.",
    "BUY": "The stock looks generally good but has some weaker points.",
    "NEUTRAL": "The stock has both strengths and weaknesses. More research needed.",
    "HOLD": "The stock has several red flags. Look for better alternatives.",
}


def percentage_to_recommendation(percentage: float) -> str:
    """Map a 0-100 fundamentals percentage onto a recommendation label.

    Thresholds are inclusive: exactly 80 is a STRONG BUY.
    """
    if percentage >= 80:
        return "STRONG BUY"
    elif percentage >= 60:
        return "BUY"
    elif percentage >= 40:
        return "NEUTRAL"
    else:
        return "HOLD"


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def interpolate(value: float, breakpoints: list[tuple[float, float]]) -> float | None:
    """Linear interpolation between breakpoints [(input_value, score), ...].

    Returns None for a missing or non-finite value so callers can skip it.
    """
    import math

    if value is None or not isinstance(value, (int, float)) or math.isnan(value) or math.isinf(value):
        return None

    if value <= breakpoints[0][0]:
        return float(breakpoints[0][1])
    if value >= breakpoints[-1][0]:
        return float(breakpoints[-1][1])
    for i in range(len(breakpoints) - 1):
        v1, s1 = breakpoints[i]
        v2, s2 = breakpoints[i + 1]
        if v1 <= value <= v2:
            if v2 - v1 == 0:
                return float(s1)
            t = (value - v1) / (v2 - v1)
            return round(s1 + t * (s2 - s1), 1)
    return None
