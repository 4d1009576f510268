"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def _period_start(unit: str, offset: int, today: date) -> Optional[date]:
    """First day of the week/month/year `offset` periods away from today."""
    if unit == "week":
        return today - timedelta(days=today.weekday()) + timedelta(weeks=offset)
    if unit == "month":
        return today.replace(day=1) + relativedelta(months=offset)
    if unit == "year":
        return today.replace(month=1, day=1) + relativedelta(years=offset)
    return None


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports ISO and free-form dates ("2024-01-15", "January 15, 2024") and
    relative dates ("today", "yesterday", "last month", "this year",
    "next week"). Relative periods resolve to their first day.

    Args:
        date_str: Date string
        today: Reference date for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    named = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in named:
        return named[text]

    prefix, _, unit = text.partition(" ")
    offsets = {"last": -1, "this": 0, "next": 1}
    if prefix in offsets and unit:
        start = _period_start(unit, offsets[prefix], today)
        if start is not None:
            return start

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get inclusive start and end dates for a named period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    week, month or year.

    Raises:
        ValueError: If period string is not recognized
    """
    name = period.strip().lower()
    today = today or date.today()

    if name not in PERIODS:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
        )

    which, unit = name.split("-")
    if which == "this":
        return _period_start(unit, 0, today), today

    start = _period_start(unit, -1, today)
    end = _period_start(unit, 0, today) - timedelta(days=1)
    return start, end
