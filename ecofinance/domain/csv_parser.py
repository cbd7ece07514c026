"""CSV upload parsing into validated raw rows"""

import re
from typing import List

from pydantic import ValidationError

from ecofinance.domain.exceptions import CSVParseError
from ecofinance.domain.models import RawRow

REQUIRED_HEADERS = ("date", "merchant", "category", "amount")


def _describe_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )


def parse_csv(csv_content: str) -> List[RawRow]:
    """
    Parse uploaded CSV text into RawRow records.

    Rules:
    - First line is the header; names are trimmed and lower-cased and must
      include date, merchant, category and amount in any order
    - Blank lines are skipped; reported line numbers are 1-based positions
      in the original text
    - Fields are split on a bare comma. Quoted fields with embedded commas
      are not supported.

    Raises:
        CSVParseError: Empty input, missing headers, short rows or empty fields
    """
    lines = re.split(r"\r?\n", csv_content)

    if not any(line.strip() for line in lines[1:]):
        raise CSVParseError("CSV file is empty or contains only headers")

    headers = [h.strip().lower() for h in lines[0].split(",")]

    missing = [h for h in REQUIRED_HEADERS if h not in headers]
    if missing:
        raise CSVParseError(f"Missing required headers: {', '.join(missing)}")

    indices = {name: headers.index(name) for name in REQUIRED_HEADERS}
    min_columns = max(len(REQUIRED_HEADERS), max(indices.values()) + 1)

    rows: List[RawRow] = []
    for offset, line in enumerate(lines[1:]):
        line_number = offset + 2
        if not line.strip():
            continue

        values = [v.strip() for v in line.split(",")]
        if len(values) < min_columns:
            raise CSVParseError(f"Row {line_number} has insufficient columns", line_number)

        try:
            rows.append(RawRow(**{name: values[idx] for name, idx in indices.items()}))
        except ValidationError as e:
            raise CSVParseError(
                f"Row {line_number} has invalid data: {_describe_validation_error(e)}",
                line_number,
            ) from e

    return rows
