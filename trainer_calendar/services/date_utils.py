"""Local-calendar date helpers.

All functions work on ``datetime.date`` values. ``YYYY-MM-DD`` strings are
the only form used for equality and lookup.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from trainer_calendar.core.config import get_settings

WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
SHORT_WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def local_today() -> date:
    return datetime.now(ZoneInfo(get_settings().timezone)).date()


def format_date(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``; a trailing ``T...`` time part is ignored.

    Raises ValueError for anything else.
    """
    day_part = value.split("T", 1)[0].strip()
    return datetime.strptime(day_part, "%Y-%m-%d").date()


def is_same_day(a: date, b: date) -> bool:
    return format_date(a) == format_date(b)


def is_today(d: date, today: date | None = None) -> bool:
    return is_same_day(d, today or local_today())


def days_in_month(year: int, month: int) -> list[date]:
    # Last day is the day before the first of the following month.
    first_of_next = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    last_day = first_of_next - timedelta(days=1)
    return [date(year, month, day) for day in range(1, last_day.day + 1)]


def calendar_grid(year: int, month: int) -> list[date]:
    """Dates shown by the month view: the target month's days only."""
    return days_in_month(year, month)


def _daterange(start: date, end: date):
    cur = start
    while cur <= end:
        yield cur
        cur = cur + timedelta(days=1)


def date_range(start: date, end: date) -> list[date]:
    """Every date from start to end inclusive; empty when start > end."""
    return list(_daterange(start, end))


def get_day_of_week(d: date) -> int:
    """0 = Sunday .. 6 = Saturday."""
    return d.isoweekday() % 7


def is_date_in_future(d: date, today: date | None = None) -> bool:
    return d > (today or local_today())


def is_date_editable(d: date, today: date | None = None) -> bool:
    return d >= (today or local_today())


def is_slot_editable(d: date, is_blocked: bool, today: date | None = None) -> bool:
    if is_blocked:
        return False
    return is_date_editable(d, today)


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]
