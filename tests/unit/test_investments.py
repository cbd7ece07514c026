"""Unit tests for investor risk profiling"""

import pytest
from decimal import Decimal
from ecofinance.domain.investments import portfolio_value, recommend_risk_level, risk_score


def test_risk_score_weights():
    assert risk_score(10, 10) == Decimal("7.0")
    assert risk_score(6, 9) == Decimal("4.8")
    assert risk_score(1, 1) == Decimal("0.7")


@pytest.mark.parametrize(
    "tolerance,priority,timeframe,expected",
    [
        (10, 10, "long_term", "high"),  # 7.0, boundary
        (10, 9, "long_term", "medium"),  # 6.8
        (10, 10, "short_term", "medium"),  # high score needs a long horizon
        (10, 10, "medium_term", "medium"),
        (6, 10, "short_term", "medium"),  # 5.0, boundary
        (6, 9, "short_term", "low"),  # 4.8
        (6, 9, "long_term", "low"),
        (1, 1, "medium_term", "medium"),  # horizon alone lifts to medium
        (1, 1, "long_term", "low"),
    ],
)
def test_recommend_risk_level(tolerance, priority, timeframe, expected):
    assert recommend_risk_level(tolerance, priority, timeframe) == expected


def test_scores_just_below_high_stay_medium():
    """9 * 0.5 + 8 * 0.2 = 6.1 and 8 * 0.5 + 10 * 0.2 = 6.0"""
    assert recommend_risk_level(9, 8, "long_term") == "medium"
    assert recommend_risk_level(8, 10, "long_term") == "medium"


def test_portfolio_value():
    assert portfolio_value([Decimal("50.00"), Decimal("1000.25")]) == Decimal("1050.25")
    assert portfolio_value([]) == Decimal("0")
