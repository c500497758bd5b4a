from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable, Sequence

from trainer_calendar.core.logging_config import get_logger
from trainer_calendar.schemas.availability import Availability
from trainer_calendar.schemas.booking import Booking
from trainer_calendar.schemas.calendar import DAY_STATUSES, CalendarDay, FilterCounts
from trainer_calendar.services.date_utils import date_range, format_date, get_day_of_week, is_today, parse_date
from trainer_calendar.services.day_status import ordering_key, resolve_day_status

logger = get_logger(__name__)


def _booking_span(booking: Booking) -> tuple[date, date] | None:
    if not booking.requested_date:
        return None
    try:
        start = parse_date(booking.requested_date)
        end = parse_date(booking.end_date) if booking.end_date else start
    except ValueError:
        logger.debug("Skipping booking %s with malformed dates", booking.id)
        return None
    return start, end


def get_bookings_for_date(bookings: Iterable[Booking], d: date) -> list[Booking]:
    matched = []
    for booking in bookings:
        span = _booking_span(booking)
        if span is None:
            continue
        start, end = span
        if start <= d <= end:
            matched.append(booking)
    return matched


def get_availability_for_date(availabilities: Iterable[Availability], d: date) -> Availability | None:
    # Duplicate records for a date: the first one wins.
    date_string = format_date(d)
    for availability in availabilities:
        try:
            if format_date(parse_date(availability.date)) == date_string:
                return availability
        except ValueError:
            logger.debug("Skipping availability %s with malformed date %r", availability.id, availability.date)
    return None


def is_date_blocked(d: date, blocked_weekdays: Iterable[int]) -> bool:
    return get_day_of_week(d) in set(blocked_weekdays)


def build_calendar_days(
    dates: Sequence[date],
    bookings: Sequence[Booking],
    availabilities: Sequence[Availability],
    blocked_weekdays: Iterable[int],
    month: int,
    *,
    today: date | None = None,
) -> list[CalendarDay]:
    """One CalendarDay per input date, in input order."""
    blocked = set(blocked_weekdays)
    days: list[CalendarDay] = []
    for d in dates:
        day_bookings = sorted(get_bookings_for_date(bookings, d), key=ordering_key)
        availability = get_availability_for_date(availabilities, d)
        blocked_day = get_day_of_week(d) in blocked
        days.append(
            CalendarDay(
                date=d,
                date_string=format_date(d),
                is_current_month=d.month == month,
                is_today=is_today(d, today),
                status=resolve_day_status(day_bookings, availability, blocked_day),
                bookings=day_bookings,
                availability=availability,
                is_blocked=blocked_day,
            )
        )
    return days


def expand_blocked_weekdays(start: date, end: date, blocked_weekdays: Iterable[int]) -> list[str]:
    blocked = set(blocked_weekdays)
    if not blocked:
        return []
    return [format_date(d) for d in date_range(start, end) if get_day_of_week(d) in blocked]


def compute_filter_counts(days: Sequence[CalendarDay]) -> FilterCounts:
    by_status = Counter(day.status for day in days)
    return FilterCounts(all=len(days), **{status: by_status.get(status, 0) for status in DAY_STATUSES})


def apply_filter(days: Sequence[CalendarDay], calendar_filter: str) -> list[CalendarDay]:
    """Mark the days a status filter hides; ``all`` hides nothing."""
    if calendar_filter == "all":
        return list(days)
    return [day.model_copy(update={"is_filtered": day.status != calendar_filter}) for day in days]
