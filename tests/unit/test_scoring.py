"""Unit tests for eco-scoring and batch aggregation"""

import dataclasses
import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from ecofinance.domain.models import RawRow
from ecofinance.domain.scoring import (
    CATEGORY_RATINGS,
    MERCHANT_RATINGS,
    calculate_eco_score,
    has_alternatives,
    parse_amount,
    process_transactions,
)
from ecofinance.domain.exceptions import EmptyBatchError, InvalidAmountError, InvalidDateError


def _row(merchant: str, category: str, amount: str = "10.00", txn_date: str = "2024-01-15") -> RawRow:
    return RawRow(date=txn_date, merchant=merchant, category=category, amount=amount)


def test_calculate_eco_score_merchant_match():
    """Merchant substring wins before category fallback"""
    assert calculate_eco_score("Amazon Prime", "shopping") == 60
    assert calculate_eco_score("Whole Foods Market", "Groceries") == 85
    assert calculate_eco_score("PATAGONIA Outlet", "travel") == 90


def test_calculate_eco_score_category_fallback():
    """No merchant match falls back to the category table"""
    assert calculate_eco_score("Joe's Diner", "dining") == 65
    assert calculate_eco_score("City Power", "Utilities") == 70
    assert calculate_eco_score("Clinic", "Health & Wellness") == 80


def test_calculate_eco_score_default():
    assert calculate_eco_score("Unknown Shop", "unknown") == 60


def test_calculate_eco_score_first_match_wins():
    """Overlapping keys resolve by table order"""
    # "target" is listed before "uber"
    assert calculate_eco_score("Target Uber Eats", "dining") == 65
    # "shopping" is listed before "travel"
    assert calculate_eco_score("Airport Kiosk", "travel shopping") == 50


def test_rating_tables_keep_order():
    assert MERCHANT_RATINGS[0] == ("whole foods", 85)
    assert MERCHANT_RATINGS[-1] == ("chipotle", 70)
    assert [key for key, _ in CATEGORY_RATINGS][:3] == ["groceries", "shopping", "transportation"]
    assert all(0 <= score <= 100 for _, score in MERCHANT_RATINGS + CATEGORY_RATINGS)


def test_has_alternatives_high_score_short_circuits():
    assert has_alternatives("Whole Foods", "groceries", 85) is False
    assert has_alternatives("Zara", "shopping", 80) is False


def test_has_alternatives_category_match():
    assert has_alternatives("Local Cafe", "dining", 65) is True
    assert has_alternatives("Bus Co", "Public Transportation", 60) is True


def test_has_alternatives_merchant_match():
    assert has_alternatives("Starbucks #42", "coffee", 65) is True
    assert has_alternatives("McDonald's", "fast food", 40) is True


def test_has_alternatives_no_match():
    assert has_alternatives("City Power", "utilities", 70) is False


def test_parse_amount_formats():
    assert parse_amount("$1,234.50") == Decimal("1234.50")
    assert parse_amount(" 42 ") == Decimal("42")
    assert parse_amount("-$12.00") == Decimal("-12.00")
    assert parse_amount("-5.25") == Decimal("-5.25")


@pytest.mark.parametrize(
    "raw", ["12abc", "$", "abc", "NaN", "Infinity", "1.2.3", "1_000", "1e30", "$ 12", "--5"]
)
def test_parse_amount_rejects_non_numeric(raw):
    with pytest.raises(InvalidAmountError) as exc_info:
        parse_amount(raw)
    assert exc_info.value.raw_amount == raw


@pytest.mark.parametrize("raw", ["1000000000000000", "1000000000000000000000000000", "-$9,999,999,999,999,999"])
def test_parse_amount_rejects_out_of_range(raw):
    with pytest.raises(InvalidAmountError):
        parse_amount(raw)


def test_parse_amount_accepts_largest_magnitude():
    assert parse_amount("999,999,999,999,999.99") == Decimal("999999999999999.99")


def test_process_transactions_huge_amount_is_invalid(fixed_clock):
    """Oversized amounts fail validation instead of overflowing the aggregates"""
    rows = [_row("Patagonia", "shopping", "100"), _row("Zara", "shopping", "1000000000000000000000000000")]

    with pytest.raises(InvalidAmountError):
        process_transactions(rows, owner_id=1, clock=fixed_clock)


def test_process_transactions_largest_amount_aggregates(fixed_clock):
    batch = process_transactions([_row("Zara", "shopping", "999999999999999.99")], owner_id=1, clock=fixed_clock)

    # 60 missing eco-points * 0.05 * amount = 2999999999999999.97
    assert batch.summary.carbon_footprint == Decimal("3000000000000000.0")
    assert batch.breakdowns[0].amount == Decimal("999999999999999.99")


def test_process_transactions_mixed_batch(sample_rows, fixed_clock):
    """Scores, summary metrics and breakdowns for a mixed batch"""
    batch = process_transactions(sample_rows, owner_id=7, clock=fixed_clock)

    assert [t.eco_score for t in batch.transactions] == [85, 40, 60, 65, 75]
    assert [t.has_alternatives for t in batch.transactions] == [False, True, True, True, True]
    assert batch.transactions[0].date == date(2024, 3, 1)
    assert batch.transactions[0].amount == Decimal("120.50")
    assert batch.transactions[0].category == "Groceries"  # stored as given
    assert all(t.owner_id == 7 for t in batch.transactions)

    summary = batch.summary
    # (85 + 40 + 60 + 65 + 75) / 5 = 65
    assert summary.overall_score == 65
    # 90.375 + 240 + 50 + 70 + 19.0625 = 469.4375
    assert summary.carbon_footprint == Decimal("469.4")
    # 1.8075 + 4.8 + 1.0 + 1.4 + 0.38125 = 9.38875
    assert summary.water_usage == Decimal("9.4")
    assert summary.sustainable_purchases == 40
    assert summary.date == datetime(2024, 3, 31, 12, 0, tzinfo=timezone.utc)

    breakdowns = {b.category: b for b in batch.breakdowns}
    assert list(breakdowns) == ["groceries", "shopping", "transportation", "dining"]
    assert breakdowns["groceries"].amount == Decimal("135.75")
    assert breakdowns["groceries"].eco_score == 80
    assert breakdowns["shopping"].eco_score == 40


def test_process_transactions_rounds_half_up(fixed_clock):
    rows = [_row("Starbucks", "dining"), _row("Chipotle", "dining")]
    batch = process_transactions(rows, owner_id=1, clock=fixed_clock)

    # (65 + 70) / 2 = 67.5
    assert batch.summary.overall_score == 68
    assert batch.breakdowns[0].eco_score == 68


def test_process_transactions_sustainable_percentage_rounding(fixed_clock):
    rows = [_row("Chipotle", "dining"), _row("Patagonia", "shopping"), _row("Zara", "shopping")]
    batch = process_transactions(rows, owner_id=1, clock=fixed_clock)

    # 2 of 3 = 66.67%
    assert batch.summary.sustainable_purchases == 67


def test_process_transactions_all_at_threshold_are_sustainable(fixed_clock):
    rows = [_row("Chipotle", "dining", amount) for amount in ("10", "20", "30")]
    batch = process_transactions(rows, owner_id=1, clock=fixed_clock)

    assert all(t.eco_score == 70 for t in batch.transactions)
    assert batch.summary.sustainable_purchases == 100


def test_process_transactions_empty_batch():
    with pytest.raises(EmptyBatchError):
        process_transactions([], owner_id=1)


def test_process_transactions_bad_amount_aborts_batch():
    """A failure late in the batch raises before any output exists"""
    rows = [_row("Zara", "shopping"), _row("Uber", "transportation"), _row("Lyft", "transportation", "ten")]

    with pytest.raises(InvalidAmountError) as exc_info:
        process_transactions(rows, owner_id=1)

    assert exc_info.value.raw_amount == "ten"
    assert "ten" in str(exc_info.value)


def test_process_transactions_bad_date():
    with pytest.raises(InvalidDateError):
        process_transactions([_row("Zara", "shopping", txn_date="not-a-date")], owner_id=1)


def test_process_transactions_negative_amounts_pass_through(fixed_clock):
    rows = [_row("Zara", "shopping", "-$50.00"), _row("Zara", "shopping", "$150.00")]
    batch = process_transactions(rows, owner_id=1, clock=fixed_clock)

    assert batch.transactions[0].amount == Decimal("-50.00")
    assert batch.breakdowns[0].amount == Decimal("100.00")
    # 60 * 0.05 * 100
    assert batch.summary.carbon_footprint == Decimal("300.0")


def test_breakdown_amounts_match_transaction_total(sample_rows, fixed_clock):
    batch = process_transactions(sample_rows, owner_id=3, clock=fixed_clock)

    breakdown_total = sum(b.amount for b in batch.breakdowns)
    transaction_total = sum(t.amount for t in batch.transactions)

    assert abs(breakdown_total - transaction_total) <= Decimal("0.01")


def test_breakdowns_group_case_insensitively(fixed_clock):
    rows = [_row("Store A", "Groceries", "10"), _row("Store B", "GROCERIES", "5.50")]
    batch = process_transactions(rows, owner_id=1, clock=fixed_clock)

    assert len(batch.breakdowns) == 1
    assert batch.breakdowns[0].category == "groceries"
    assert batch.breakdowns[0].amount == Decimal("15.50")
    assert [t.category for t in batch.transactions] == ["Groceries", "GROCERIES"]


def test_process_transactions_is_repeatable(sample_rows):
    """Same input yields summaries that differ only by date"""
    first = process_transactions(sample_rows, 9, clock=lambda: datetime(2024, 1, 1, tzinfo=timezone.utc))
    second = process_transactions(sample_rows, 9, clock=lambda: datetime(2024, 2, 1, tzinfo=timezone.utc))

    assert first.summary.date != second.summary.date
    assert dataclasses.replace(first.summary, date=second.summary.date) == second.summary
    assert first.transactions == second.transactions
    assert first.breakdowns == second.breakdowns
