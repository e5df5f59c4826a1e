"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_iso_date(date_str: str) -> date:
    """Parse a strict YYYY-MM-DD date.

    Raises:
        ValueError: If the string is not a calendar date in that form
    """
    if not isinstance(date_str, str):
        raise ValueError(f"Expected a date string, got {type(date_str).__name__}")
    if not ISO_DATE.fullmatch(date_str):
        raise ValueError(f"Invalid date '{date_str}', expected YYYY-MM-DD")
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date '{date_str}', expected YYYY-MM-DD") from None


def parse_date(date_str: str) -> date:
    """Parse a loosely formatted date string into a date object.

    Accepts "today", "yesterday" and anything dateutil understands
    ("2025-01-31", "31 Jan 2025", "January 31, 2025").

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)

    try:
        return date_parser.parse(date_str, dayfirst=False).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_statement_period(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a statement period.

    Args:
        period: One of this-month, last-month, this-year, last-year
        today: Reference date, defaults to today

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        return today.replace(day=1), today
    if period == "last-month":
        start = (today - relativedelta(months=1)).replace(day=1)
        return start, today.replace(day=1) - timedelta(days=1)
    if period == "this-year":
        return today.replace(month=1, day=1), today
    if period == "last-year":
        start = today.replace(month=1, day=1) - relativedelta(years=1)
        return start, today.replace(month=1, day=1) - timedelta(days=1)

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: this-month, last-month, this-year, last-year"
    )
