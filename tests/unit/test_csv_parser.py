"""Unit tests for CSV upload parsing"""

import pytest
from ecofinance.domain.csv_parser import parse_csv
from ecofinance.domain.exceptions import CSVParseError, ParseError
from ecofinance.domain.models import RawRow


def test_parse_csv_basic():
    rows = parse_csv("date,merchant,category,amount\n2024-01-15,Whole Foods,groceries,$52.10")

    assert rows == [RawRow(date="2024-01-15", merchant="Whole Foods", category="groceries", amount="$52.10")]


def test_parse_csv_trailing_blank_line():
    """Trailing newline does not create a row or an error"""
    rows = parse_csv("date,merchant,category,amount\n2024-01-15,Zara,shopping,40\n")
    assert len(rows) == 1


def test_parse_csv_crlf_and_header_case():
    """Header names are trimmed and lower-cased, CRLF endings accepted"""
    content = " Date , MERCHANT,Category ,Amount\r\n2024-01-15 , Uber , transportation , 18.20 \r\n"
    rows = parse_csv(content)

    assert rows[0].merchant == "Uber"
    assert rows[0].amount == "18.20"


def test_parse_csv_any_column_order():
    rows = parse_csv("amount,category,date,merchant\n9.99,dining,2024-02-01,Chipotle")
    assert rows[0] == RawRow(date="2024-02-01", merchant="Chipotle", category="dining", amount="9.99")


def test_parse_csv_extra_columns_ignored():
    rows = parse_csv("id,date,merchant,category,amount,notes\n1,2024-02-01,Lyft,transportation,12,late\n")
    assert rows[0].merchant == "Lyft"
    assert rows[0].amount == "12"


def test_parse_csv_preserves_order_and_skips_blank_lines():
    content = (
        "date,merchant,category,amount\n"
        "2024-01-01,A,other,1\n"
        "\n"
        "   \n"
        "2024-01-02,B,other,2\n"
    )
    rows = parse_csv(content)
    assert [r.merchant for r in rows] == ["A", "B"]


@pytest.mark.parametrize("content", ["", "date,merchant,category,amount", "date,merchant,category,amount\n\n  \n"])
def test_parse_csv_no_data_lines(content):
    with pytest.raises(CSVParseError) as exc_info:
        parse_csv(content)
    assert exc_info.value.line_number is None
    assert "empty" in exc_info.value.message


def test_parse_csv_missing_amount_header():
    with pytest.raises(ParseError) as exc_info:
        parse_csv("date,merchant,category\n2024-01-01,A,other")
    assert "amount" in str(exc_info.value)


def test_parse_csv_lists_every_missing_header():
    with pytest.raises(CSVParseError) as exc_info:
        parse_csv("date,description\n2024-01-01,Coffee")
    assert exc_info.value.message == "Missing required headers: merchant, category, amount"


def test_parse_csv_insufficient_columns_reports_original_line():
    """Line numbers count skipped blank lines"""
    content = (
        "date,merchant,category,amount\n"
        "2024-01-01,A,other,1\n"
        "\n"
        "2024-01-03,B,other\n"
    )
    with pytest.raises(CSVParseError) as exc_info:
        parse_csv(content)

    assert exc_info.value.line_number == 4
    assert exc_info.value.message == "Row 4 has insufficient columns"


def test_parse_csv_short_row_when_required_column_is_last():
    with pytest.raises(CSVParseError) as exc_info:
        parse_csv("id,date,merchant,category,amount\n1,2024-01-01,A,other\n")
    assert exc_info.value.line_number == 2


def test_parse_csv_empty_field_fails_validation():
    with pytest.raises(CSVParseError) as exc_info:
        parse_csv("date,merchant,category,amount\n2024-01-01,,other,5\n")

    assert exc_info.value.line_number == 2
    assert exc_info.value.message.startswith("Row 2 has invalid data")
    assert "merchant" in exc_info.value.message


def test_parse_csv_does_not_unquote_fields():
    """Quoted commas are split like any other comma"""
    rows = parse_csv('date,merchant,category,amount\n2024-01-01,"Smith, Co",other,5\n')
    assert rows[0].merchant == '"Smith'
    assert rows[0].category == 'Co"'
