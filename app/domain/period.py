"""
Period codec: "MM-YYYY" text <-> calendar point.

A calendar point is a ``date`` pinned to the first day of its month, so two
periods parsed from the same text always compare equal.
"""
import re
from datetime import date

PERIOD_FORMAT = "MM-YYYY"
MIN_YEAR = 1900
MAX_YEAR = 2999

_PERIOD_RE = re.compile(r"([0-9]{2})-([0-9]{4})")


class InvalidPeriodFormat(ValueError):
    def __init__(self, text, field: str | None = None):
        self.text = text
        self.field = field
        message = f"invalid date format {text!r}, expected {PERIOD_FORMAT}"
        if field:
            message = f"{field}: {message}"
        super().__init__(message)


def parse_period(text: str, field: str | None = None) -> date:
    """
    Parse "MM-YYYY" into the first day of that month.

    Raises:
        InvalidPeriodFormat: text is not exactly two-digit month, hyphen,
            four-digit year, or the month/year is out of range

    Example:
        >>> parse_period("07-2025")
        datetime.date(2025, 7, 1)
    """
    if not isinstance(text, str):
        raise InvalidPeriodFormat(text, field)
    match = _PERIOD_RE.fullmatch(text)
    if not match:
        raise InvalidPeriodFormat(text, field)

    month, year = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidPeriodFormat(text, field)
    return date(year, month, 1)


def format_period(point: date) -> str:
    """Inverse of parse_period: date -> "MM-YYYY"."""
    return f"{point.month:02d}-{point.year:04d}"
