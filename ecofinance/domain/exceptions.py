"""Domain-specific exceptions"""

from typing import Optional


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class CSVParseError(DomainException):
    """Uploaded CSV is structurally malformed (header or row shape)"""

    def __init__(self, message: str, line_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number


ParseError = CSVParseError


class InvalidAmountError(DomainException):
    """Amount field is not numeric after stripping currency formatting"""

    def __init__(self, raw_amount: str):
        super().__init__(f"Invalid amount format: {raw_amount}")
        self.raw_amount = raw_amount


class InvalidDateError(DomainException):
    """Date field could not be read as a calendar date"""

    def __init__(self, raw_date: str):
        super().__init__(f"Invalid date format: {raw_date}")
        self.raw_date = raw_date


class EmptyBatchError(DomainException):
    """Aggregation attempted over zero rows"""

    pass


class BankAPIError(DomainException):
    """Banking aggregator returned an error or is unavailable"""

    pass

