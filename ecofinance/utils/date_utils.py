"""Date manipulation utilities"""

from datetime import date, datetime, timedelta
from typing import Optional, Tuple

# Tried in order after ISO-8601; US month-first before day-first.
DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%y",
    "%Y/%m/%d",
    "%d-%b-%Y",
    "%b %d, %Y",
    "%B %d, %Y",
)


def parse_calendar_date(value: str) -> Optional[date]:
    """Parse a transaction date string, returning None when unrecognised"""
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def trailing_window(end: date, days: int) -> Tuple[date, date]:
    """Return (start, end) covering the `days` days up to and including `end`"""
    return end - timedelta(days=days), end
