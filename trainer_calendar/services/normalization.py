"""Map the backend's upstream shapes onto Booking and Availability.

Trainer booking requests and admin-created events both end up on the
calendar as bookings. Each upstream kind has its own mapper; the backend is
inconsistent about snake_case and camelCase, so every field is looked up
under both spellings.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Iterable, Mapping

from trainer_calendar.schemas.availability import Availability
from trainer_calendar.schemas.booking import CONFIRMED, Booking
from trainer_calendar.services.date_utils import format_date, parse_date


def _pick(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value not in (None, ""):
            return value
    return None


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _day_string(value: Any) -> str | None:
    """YYYY-MM-DD for dates, datetimes and ISO strings; other strings pass through."""
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return format_date(value.date())
    if isinstance(value, date):
        return format_date(value)
    text = str(value)
    return text.split("T", 1)[0]


def _str_or_none(value: Any) -> str | None:
    return None if value is None else str(value)


def _timestamp(value: Any) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    return _str_or_none(value)


def booking_from_request(raw: Mapping[str, Any]) -> Booking:
    course = _mapping(raw.get("courses") or raw.get("course"))
    return Booking(
        id=str(raw.get("id")),
        status=str(raw.get("status") or "").lower(),
        requested_date=_day_string(_pick(raw, "requested_date", "requestedDate")),
        end_date=_day_string(_pick(raw, "end_date", "endDate")),
        processed_at=_timestamp(_pick(raw, "processed_at", "processedAt", "created_at", "createdAt")) or _now_iso(),
        created_at=_timestamp(_pick(raw, "created_at", "createdAt")),
        source="booking_request",
        course_id=_str_or_none(_pick(raw, "course_id", "courseId")),
        trainer_id=_str_or_none(_pick(raw, "trainer_id", "trainerId")),
        title=_pick(course, "title"),
        request_type=_pick(raw, "request_type", "requestType"),
        client_name=_pick(raw, "client_name", "clientName"),
        location=_pick(raw, "location"),
        city=_pick(raw, "city"),
        state=_pick(raw, "state"),
    )


def _event_request_type(course_type: Any) -> str:
    if isinstance(course_type, (list, tuple)):
        return "public" if "PUBLIC" in course_type else "inhouse"
    return "public" if course_type == "PUBLIC" else "inhouse"


def booking_from_event(raw: Mapping[str, Any]) -> Booking:
    """Admin events are fixed-date courses and always count as confirmed."""
    course = _mapping(raw.get("course"))
    created = _timestamp(_pick(raw, "createdAt", "created_at")) or _now_iso()
    return Booking(
        id=str(raw.get("id")),
        status=CONFIRMED,
        requested_date=_day_string(_pick(raw, "eventDate", "event_date")),
        end_date=_day_string(_pick(raw, "endDate", "end_date")),
        processed_at=created,
        created_at=created,
        source="event",
        course_id=_str_or_none(_pick(raw, "courseId", "course_id") or _pick(course, "id")),
        trainer_id=_str_or_none(_pick(raw, "trainerId", "trainer_id")),
        title=_pick(raw, "title") or _pick(course, "title") or "Event",
        request_type=_event_request_type(_pick(raw, "courseType") or _pick(course, "courseType")),
        location=_pick(raw, "venue") or _pick(course, "venue"),
        city=_pick(raw, "city"),
        state=_pick(raw, "state"),
    )


def availability_from_record(raw: Mapping[str, Any]) -> Availability:
    return Availability(
        id=_str_or_none(raw.get("id")),
        trainer_id=str(_pick(raw, "trainerId", "trainer_id") or ""),
        date=_day_string(_pick(raw, "date", "dateString")) or "",
        status=str(raw.get("status") or "AVAILABLE").lower(),
        start_time=_pick(raw, "startTime", "start_time"),
        end_time=_pick(raw, "endTime", "end_time"),
        created_at=_timestamp(_pick(raw, "createdAt", "created_at")),
    )


def _in_range(value: str | None, start: date, end: date) -> bool:
    if not value:
        return False
    try:
        return start <= parse_date(value) <= end
    except ValueError:
        return False


def _overlaps(first: str | None, last: str | None, start: date, end: date) -> bool:
    if not first or not last:
        return False
    try:
        return parse_date(first) <= end and parse_date(last) >= start
    except ValueError:
        return False


def filter_bookings_in_range(bookings: Iterable[Booking], start: date, end: date) -> list[Booking]:
    """Booking requests by start date; events when their span overlaps the range."""
    kept = []
    for booking in bookings:
        if _in_range(booking.requested_date, start, end):
            kept.append(booking)
        elif booking.source == "event" and _overlaps(booking.requested_date, booking.end_date, start, end):
            kept.append(booking)
    return kept
