"""Date parsing utilities for brokerage exports."""

import re
from datetime import date, datetime

_TRADE_DATE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_DESKTOP_DATE = re.compile(r"^([A-Za-z]{3})-(\d{1,2})-(\d{4})$")


def parse_trade_date(date_str: str) -> date:
    """Parse a strict MM/DD/YYYY date string into a date object.

    Args:
        date_str: Date string as exported, e.g. "02/15/2026"

    Returns:
        Date object

    Raises:
        ValueError: If the string is empty, not MM/DD/YYYY, or not a real
            calendar date
    """
    match = _TRADE_DATE.match(date_str.strip())
    if match is None:
        raise ValueError(f"'{date_str}' is not in MM/DD/YYYY format")

    month, day, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValueError(f"'{date_str}' is not a real calendar date: {e}")


def normalize_desktop_date(date_str: str) -> str:
    """Convert a desktop-export date such as "Dec-31-2025" to "12/31/2025".

    Strings that are not in the desktop form are returned unchanged.
    """
    match = _DESKTOP_DATE.match(date_str.strip())
    if match is None:
        return date_str
    month_abbr, day, year = match.groups()
    try:
        month = datetime.strptime(month_abbr.title(), "%b").month
    except ValueError:
        return date_str
    return f"{month:02d}/{int(day):02d}/{year}"


def format_trade_date(value: date) -> str:
    """Render a date in the MM/DD/YYYY export form."""
    return value.strftime("%m/%d/%Y")
