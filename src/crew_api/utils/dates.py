"""Date helpers shared by the roster, certification and trash logic.

Records coming from the console may carry French-formatted dates
(``DD/MM/YYYY``) as well as ISO dates, so everything entering the domain
goes through :func:`parse_date`.
"""

import calendar
from datetime import date, datetime

FRENCH_DATE_FORMAT = "%d/%m/%Y"


def parse_date(value: object) -> date | None:
    """Parse a date from a ``date``, ``datetime``, ISO string or ``DD/MM/YYYY`` string.

    Args:
        value: Raw value

    Returns:
        Parsed date, or None for empty values

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")

    text = value.strip()
    if not text:
        return None

    if "/" in text:
        return datetime.strptime(text, FRENCH_DATE_FORMAT).date()

    # ISO date, or the date part of an ISO timestamp
    return date.fromisoformat(text[:10])


def format_french(value: date) -> str:
    """Format a date as ``DD/MM/YYYY``."""
    return value.strftime(FRENCH_DATE_FORMAT)


def add_months(value: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month.

    Args:
        value: Start date
        months: Number of months to add (may be negative)

    Returns:
        Shifted date
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
