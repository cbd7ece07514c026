"""Eco-scoring engine - per-transaction scores and batch sustainability metrics"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, List, Sequence, Tuple

from ecofinance.domain.exceptions import EmptyBatchError, InvalidAmountError, InvalidDateError
from ecofinance.domain.models import (
    CategoryBreakdown,
    ProcessedBatch,
    RawRow,
    ScoredTransaction,
    SustainabilitySummary,
)
from ecofinance.utils.date_utils import parse_calendar_date

# Ordered (substring, score) pairs; the first match wins, so order matters
MERCHANT_RATINGS: Tuple[Tuple[str, int], ...] = (
    ("whole foods", 85),
    ("trader joe's", 80),
    ("farmers market", 95),
    ("amazon", 60),
    ("walmart", 55),
    ("target", 65),
    ("h&m", 45),
    ("zara", 40),
    ("patagonia", 90),
    ("uber", 60),
    ("lyft", 62),
    ("public transit", 90),
    ("starbucks", 65),
    ("local coffee", 85),
    ("mcdonald's", 40),
    ("chipotle", 70),
)

CATEGORY_RATINGS: Tuple[Tuple[str, int], ...] = (
    ("groceries", 75),
    ("shopping", 50),
    ("transportation", 60),
    ("dining", 65),
    ("utilities", 70),
    ("entertainment", 65),
    ("housing", 55),
    ("health", 80),
    ("education", 85),
    ("travel", 45),
    ("other", 60),
)

DEFAULT_ECO_SCORE = 60

NO_ALTERNATIVES_THRESHOLD = 80
CATEGORIES_WITH_ALTERNATIVES = ("shopping", "transportation", "dining", "groceries")
MERCHANTS_WITH_ALTERNATIVES = ("h&m", "zara", "uber", "lyft", "starbucks", "walmart", "mcdonald's")

SUSTAINABLE_THRESHOLD = 70
CARBON_FACTOR = Decimal("0.05")  # kg CO2 per currency unit per missing eco-point
WATER_FACTOR = Decimal("0.001")  # kL per currency unit per missing eco-point

_AMOUNT_PATTERN = re.compile(r"^([+-]?)\$?(\d+(?:\.\d*)?|\.\d+)$")
MAX_AMOUNT_DIGITS = 15  # integer digits accepted in one amount


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _round_int(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _round_places(value: Decimal, places: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def calculate_eco_score(merchant: str, category: str) -> int:
    """
    Score a transaction 0-100 from its merchant and category text.

    Merchant table first, then category table, then DEFAULT_ECO_SCORE.
    Keys are matched as case-insensitive substrings.
    """
    merchant_lower = merchant.lower()
    for key, rating in MERCHANT_RATINGS:
        if key in merchant_lower:
            return rating

    category_lower = category.lower()
    for key, rating in CATEGORY_RATINGS:
        if key in category_lower:
            return rating

    return DEFAULT_ECO_SCORE


def has_alternatives(merchant: str, category: str, eco_score: int) -> bool:
    """Whether greener alternatives are worth suggesting for this purchase"""
    if eco_score >= NO_ALTERNATIVES_THRESHOLD:
        return False

    category_lower = category.lower()
    if any(cat in category_lower for cat in CATEGORIES_WITH_ALTERNATIVES):
        return True

    merchant_lower = merchant.lower()
    return any(m in merchant_lower for m in MERCHANTS_WITH_ALTERNATIVES)


def parse_amount(raw_amount: str) -> Decimal:
    """
    Parse an amount like "$1,234.50" or "-$12.00" into a Decimal.

    Only plain decimal digits are accepted once "," is removed: no exponents,
    digit-group underscores or whitespace after the "$".

    Raises:
        InvalidAmountError: Not a plain decimal number, or more than
            MAX_AMOUNT_DIGITS integer digits
    """
    match = _AMOUNT_PATTERN.match(raw_amount.strip().replace(",", ""))
    if not match:
        raise InvalidAmountError(raw_amount)

    sign, digits = match.groups()
    amount = Decimal(sign + digits)
    if amount.adjusted() >= MAX_AMOUNT_DIGITS:
        raise InvalidAmountError(raw_amount)
    return amount


@dataclass
class _CategoryTotals:
    amount: Decimal = Decimal("0")
    eco_score: int = 0
    count: int = 0


def _validate_rows(rows: Sequence[RawRow]) -> List[Tuple[RawRow, date, Decimal]]:
    """Parse dates and amounts for the whole batch before anything is scored"""
    parsed = []
    for row in rows:
        amount = parse_amount(row.amount)
        txn_date = parse_calendar_date(row.date)
        if txn_date is None:
            raise InvalidDateError(row.date)
        parsed.append((row, txn_date, amount))
    return parsed


def process_transactions(
    rows: Sequence[RawRow],
    owner_id: int,
    clock: Callable[[], datetime] = _utcnow,
) -> ProcessedBatch:
    """
    Score a batch of rows and fold them into summary metrics.

    Per transaction:
    - carbon = (100 - eco_score) * 0.05 * amount
    - water  = (100 - eco_score) * 0.001 * amount
    - sustainable when eco_score >= 70

    All rounding is half-up. The batch either fully succeeds or raises
    before any output is built.

    Raises:
        EmptyBatchError: No rows to aggregate
        InvalidAmountError: A row's amount is not numeric
        InvalidDateError: A row's date is not a recognised date
    """
    if not rows:
        raise EmptyBatchError("Cannot score an empty batch of transactions")

    parsed = _validate_rows(rows)

    transactions: List[ScoredTransaction] = []
    by_category: Dict[str, _CategoryTotals] = {}
    total_eco_score = 0
    total_carbon = Decimal("0")
    total_water = Decimal("0")
    sustainable_count = 0

    for row, txn_date, amount in parsed:
        eco_score = calculate_eco_score(row.merchant, row.category)

        transactions.append(
            ScoredTransaction(
                date=txn_date,
                merchant=row.merchant,
                category=row.category,
                amount=amount,
                eco_score=eco_score,
                has_alternatives=has_alternatives(row.merchant, row.category, eco_score),
                owner_id=owner_id,
            )
        )

        total_eco_score += eco_score
        total_carbon += (100 - eco_score) * CARBON_FACTOR * amount
        total_water += (100 - eco_score) * WATER_FACTOR * amount
        if eco_score >= SUSTAINABLE_THRESHOLD:
            sustainable_count += 1

        totals = by_category.setdefault(row.category.lower(), _CategoryTotals())
        totals.amount += amount
        totals.eco_score += eco_score
        totals.count += 1

    count = Decimal(len(transactions))

    summary = SustainabilitySummary(
        owner_id=owner_id,
        overall_score=_round_int(total_eco_score / count),
        carbon_footprint=_round_places(total_carbon, 1),
        sustainable_purchases=_round_int(sustainable_count / count * 100),
        water_usage=_round_places(total_water, 1),
        date=clock(),
    )

    breakdowns = [
        CategoryBreakdown(
            owner_id=owner_id,
            category=category,
            amount=_round_places(totals.amount, 2),
            eco_score=_round_int(Decimal(totals.eco_score) / totals.count),
        )
        for category, totals in by_category.items()
    ]

    return ProcessedBatch(transactions=transactions, summary=summary, breakdowns=breakdowns)
