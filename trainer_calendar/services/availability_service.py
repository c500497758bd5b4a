from __future__ import annotations

from datetime import date
from typing import Iterable

from fastapi import HTTPException

from trainer_calendar.core.logging_config import get_logger
from trainer_calendar.schemas.booking import CANCELLED
from trainer_calendar.services.api_client import ApiClient
from trainer_calendar.services.date_utils import date_range, format_date, is_date_editable

logger = get_logger(__name__)

EDITABLE_STATUSES = {"available": "AVAILABLE", "not_available": "NOT_AVAILABLE"}


def _backend_status(status: str) -> str:
    try:
        return EDITABLE_STATUSES[status]
    except KeyError:
        raise HTTPException(status_code=400, detail="Status must be available or not_available")


async def set_date_availability(client: ApiClient, trainer_id: str, day: date, status: str, *, today: date | None = None) -> None:
    backend_status = _backend_status(status)
    if not is_date_editable(day, today):
        raise HTTPException(status_code=400, detail="Cannot edit past dates")

    await client.create_availability(trainer_id, [{"date": format_date(day), "status": backend_status}])
    logger.info("Set %s to %s for trainer %s", format_date(day), status, trainer_id)


async def bulk_update_availability(client: ApiClient, trainer_id: str, start: date, end: date, status: str) -> int:
    """Write one availability record per date between start and end inclusive."""
    backend_status = _backend_status(status)
    if start > end:
        raise HTTPException(status_code=400, detail="Start date must be before end date")

    payload = [{"date": format_date(d), "status": backend_status} for d in date_range(start, end)]
    await client.create_availability(trainer_id, payload)
    logger.info("Set %d dates (%s..%s) to %s for trainer %s", len(payload), start, end, status, trainer_id)
    return len(payload)


async def save_blocked_days(client: ApiClient, trainer_id: str, days: Iterable[int]) -> list[int]:
    cleaned = sorted(set(days))
    if any(d < 0 or d > 6 for d in cleaned):
        raise HTTPException(status_code=400, detail="Weekdays must be between 0 (Sunday) and 6 (Saturday)")

    await client.save_trainer_blocked_days(trainer_id, cleaned)
    logger.info("Blocked weekdays for trainer %s are now %s", trainer_id, cleaned)
    return cleaned


async def cancel_booking(client: ApiClient, booking_id: str) -> dict:
    booking = await client.update_booking_status(booking_id, CANCELLED.upper())
    logger.info("Cancelled booking %s", booking_id)
    return booking
