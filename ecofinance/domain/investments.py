"""Investor risk profiling from the risk-assessment survey"""

from decimal import Decimal
from typing import Iterable

RISK_LEVELS = ("low", "medium", "high")
TIMEFRAMES = ("short_term", "medium_term", "long_term")
INVESTMENT_TYPES = ("green_bond", "eco_stock", "sustainable_fund")

TOLERANCE_WEIGHT = Decimal("0.5")
ENVIRONMENTAL_WEIGHT = Decimal("0.2")

HIGH_RISK_THRESHOLD = 7  # only with a long_term horizon
MEDIUM_RISK_THRESHOLD = 5


def risk_score(risk_tolerance: int, environmental_priority: int) -> Decimal:
    """Weighted survey score: tolerance * 0.5 + environmental priority * 0.2"""
    return risk_tolerance * TOLERANCE_WEIGHT + environmental_priority * ENVIRONMENTAL_WEIGHT


def recommend_risk_level(risk_tolerance: int, environmental_priority: int, investment_timeframe: str) -> str:
    """
    Map survey answers (1-10 scales) to a portfolio risk level.

    - high: score >= 7 and a long_term horizon
    - medium: score >= 5, or a medium_term horizon
    - low: anything else

    A high score with a short_term horizon is capped at medium.
    """
    score = risk_score(risk_tolerance, environmental_priority)

    if score >= HIGH_RISK_THRESHOLD and investment_timeframe == "long_term":
        return "high"
    if score >= MEDIUM_RISK_THRESHOLD or investment_timeframe == "medium_term":
        return "medium"
    return "low"


def portfolio_value(current_values: Iterable[Decimal]) -> Decimal:
    """Sum of the current value of every position"""
    return sum(current_values, Decimal("0"))
