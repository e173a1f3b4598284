"""Free-form date parsing for search filters."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-week", "this-month", "this-year", "last-week", "last-month", "last-year")


def _start_of(period: str, today: date) -> date:
    unit = period.split("-", 1)[1]
    if unit == "week":
        start = today - timedelta(days=today.weekday())
    elif unit == "month":
        start = today.replace(day=1)
    else:
        start = today.replace(month=1, day=1)

    if period.startswith("last-"):
        step = {"week": relativedelta(weeks=1), "month": relativedelta(months=1)}.get(
            unit, relativedelta(years=1)
        )
        start -= step
    return start


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string given on the command line.

    Accepts absolute dates ("2024-01-15", "January 15, 2024") and relative
    words: "today", "yesterday", "tomorrow", "this week|month|year" and
    "last week|month|year" (the first day of that period).

    Raises:
        ValueError: If date string cannot be parsed
    """
    today = today or date.today()
    text = date_str.strip().lower()

    relative = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative:
        return relative[text]

    period = text.replace(" ", "-")
    if period in PERIODS:
        return _start_of(period, today)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    "this-*" periods end today; "last-*" periods end the day before the current
    period starts.

    Raises:
        ValueError: If period string is not recognized
    """
    today = today or date.today()
    period = period.strip().lower()
    if period not in PERIODS:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")

    start = _start_of(period, today)
    if period.startswith("this-"):
        return start, today
    return start, _start_of(period.replace("last-", "this-"), today) - timedelta(days=1)
