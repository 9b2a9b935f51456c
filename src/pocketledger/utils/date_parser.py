"""Date parsing and month arithmetic utilities."""

from datetime import date, datetime, time, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", "15/01/2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", "last friday"

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    simple = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in simple:
        return simple[date_str]

    prefix, _, period = date_str.partition(" ")
    if prefix in ("last", "this", "next") and period:
        shift = {"last": -1, "this": 0, "next": 1}[prefix]
        if period == "month":
            return start_of_month(today + relativedelta(months=shift))
        if period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=shift)
        if period == "week":
            monday = today - timedelta(days=today.weekday())
            return monday + timedelta(weeks=shift)
        if prefix == "last" and period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7 or 7
            return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def start_of_month(value: date) -> date:
    """First day of the month of value; keeps the type (date or datetime).

    Datetimes are truncated to midnight.
    """
    if isinstance(value, datetime):
        return datetime.combine(value.date().replace(day=1), time.min, tzinfo=value.tzinfo)
    return value.replace(day=1)


def first_day_next_month(value: date) -> date:
    """First day of the month after value's month (midnight for datetimes)."""
    return start_of_month(value) + relativedelta(months=1)


def end_of_month(value: date) -> date:
    """Last day of value's month.

    For datetimes this is the last representable instant of that day, so
    that ``x <= end_of_month(x)`` holds for every moment in the month.
    """
    if isinstance(value, datetime):
        return first_day_next_month(value) - timedelta(microseconds=1)
    return first_day_next_month(value) - timedelta(days=1)
