"""Monthly cashback reward sizing from the latest sustainability score"""

from decimal import Decimal
from typing import Tuple

# (minimum overall score, multiplier), checked top-down
CASHBACK_TIERS: Tuple[Tuple[int, Decimal], ...] = (
    (80, Decimal("3.0")),
    (60, Decimal("2.0")),
    (40, Decimal("1.5")),
)
DEFAULT_MULTIPLIER = Decimal("1.0")


def cashback_multiplier(overall_score: int) -> Decimal:
    """
    Map an overall eco-score to a cashback multiplier.

    Tiers:
    - 80-100: 3.0x (excellent)
    - 60-79:  2.0x (good)
    - 40-59:  1.5x (average)
    - below:  1.0x
    """
    for minimum, multiplier in CASHBACK_TIERS:
        if overall_score >= minimum:
            return multiplier
    return DEFAULT_MULTIPLIER


def calculate_cashback_amount(overall_score: int, base_amount: Decimal = Decimal("25")) -> Decimal:
    """Cashback for one month: base amount scaled by the score tier"""
    return (base_amount * cashback_multiplier(overall_score)).quantize(Decimal("0.01"))
