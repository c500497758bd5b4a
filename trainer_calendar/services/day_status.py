from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Sequence

from trainer_calendar.schemas.availability import Availability
from trainer_calendar.schemas.booking import APPROVED, BOOKED, CONFIRMED, PENDING, TENTATIVE, Booking
from trainer_calendar.schemas.calendar import DayStatus

BOOKED_STATUSES = {BOOKED, CONFIRMED}
TENTATIVE_STATUSES = {APPROVED, TENTATIVE}
AVAILABILITY_STATUSES = {"not_available", "available", "booked", "tentative"}

_LAST = datetime.max.replace(tzinfo=timezone.utc)


def _lower(status: str | None) -> str:
    return status.lower() if status else ""


def resolve_day_status(
    bookings: Sequence[Booking],
    availability: Availability | None,
    is_blocked: bool,
) -> DayStatus:
    """Collapse one day's bookings, availability and block rule into a status.

    Rules are checked in order and the first match wins:

    1. a recurring blocked weekday is ``blocked``, even with confirmed bookings;
    2. any booked/confirmed booking makes the day ``booked``;
    3. any approved/tentative booking makes it ``tentative``;
    4. an availability record with a known status decides;
    5. otherwise the day is ``not_available``.

    Pending bookings are ignored here; they only show up in
    :func:`pending_bookings`.
    """
    if is_blocked:
        return "blocked"

    statuses = [_lower(b.status) for b in bookings]
    if any(s in BOOKED_STATUSES for s in statuses):
        return "booked"
    if any(s in TENTATIVE_STATUSES for s in statuses):
        return "tentative"

    if availability is not None:
        availability_status = _lower(availability.status)
        if availability_status in AVAILABILITY_STATUSES:
            return availability_status  # type: ignore[return-value]

    return "not_available"


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def ordering_key(booking: Booking) -> datetime:
    """processed_at, falling back to created_at; unparseable sorts last."""
    return _parse_timestamp(booking.processed_at) or _parse_timestamp(booking.created_at) or _LAST


def pending_bookings(bookings: Iterable[Booking]) -> list[Booking]:
    """Bookings awaiting approval, oldest request first."""
    pending = [b for b in bookings if _lower(b.status) == PENDING]
    return sorted(pending, key=ordering_key)
