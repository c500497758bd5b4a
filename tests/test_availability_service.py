from __future__ import annotations

import json
from datetime import date

import pytest
from fastapi import HTTPException

from trainer_calendar.services.availability_service import (
    bulk_update_availability,
    cancel_booking,
    save_blocked_days,
    set_date_availability,
)

from tests.conftest import TRAINER_ID

AVAILABILITY_PATH = f"/availability/trainer/{TRAINER_ID}"


@pytest.mark.asyncio
async def test_set_date_availability(api_client, backend):
    backend.add("POST", AVAILABILITY_PATH, {"availability": []})

    await set_date_availability(api_client, TRAINER_ID, date(2026, 3, 10), "not_available", today=date(2026, 3, 10))

    assert json.loads(backend.requests[0].content) == [{"date": "2026-03-10", "status": "NOT_AVAILABLE"}]


@pytest.mark.asyncio
async def test_set_date_availability_rejects_past_dates(api_client, backend):
    with pytest.raises(HTTPException) as exc_info:
        await set_date_availability(api_client, TRAINER_ID, date(2026, 3, 9), "available", today=date(2026, 3, 10))

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Cannot edit past dates"
    assert backend.requests == []


@pytest.mark.asyncio
async def test_only_available_and_not_available_are_editable(api_client, backend):
    with pytest.raises(HTTPException):
        await set_date_availability(api_client, TRAINER_ID, date(2026, 3, 10), "booked", today=date(2026, 3, 10))
    assert backend.requests == []


@pytest.mark.asyncio
async def test_bulk_update_writes_one_entry_per_day(api_client, backend):
    backend.add("POST", AVAILABILITY_PATH, {"availability": []})

    updated = await bulk_update_availability(api_client, TRAINER_ID, date(2026, 3, 30), date(2026, 4, 1), "available")

    assert updated == 3
    assert json.loads(backend.requests[0].content) == [
        {"date": "2026-03-30", "status": "AVAILABLE"},
        {"date": "2026-03-31", "status": "AVAILABLE"},
        {"date": "2026-04-01", "status": "AVAILABLE"},
    ]


@pytest.mark.asyncio
async def test_bulk_update_rejects_reversed_range(api_client, backend):
    with pytest.raises(HTTPException) as exc_info:
        await bulk_update_availability(api_client, TRAINER_ID, date(2026, 4, 2), date(2026, 4, 1), "available")

    assert exc_info.value.detail == "Start date must be before end date"
    assert backend.requests == []


@pytest.mark.asyncio
async def test_save_blocked_days_dedupes_and_sorts(api_client, backend):
    backend.add("PUT", f"{AVAILABILITY_PATH}/blocked-days", {"blockedDays": [0, 6]})

    assert await save_blocked_days(api_client, TRAINER_ID, [6, 0, 6]) == [0, 6]
    assert json.loads(backend.requests[0].content) == {"days": [0, 6]}


@pytest.mark.asyncio
@pytest.mark.parametrize("days", [[7], [-1, 2]])
async def test_save_blocked_days_validates_range(api_client, backend, days):
    with pytest.raises(HTTPException):
        await save_blocked_days(api_client, TRAINER_ID, days)
    assert backend.requests == []


@pytest.mark.asyncio
async def test_cancel_booking(api_client, backend):
    backend.add("PUT", "/bookings/b1/status", {"bookingRequest": {"id": "b1", "status": "CANCELLED"}})

    assert await cancel_booking(api_client, "b1") == {"id": "b1", "status": "CANCELLED"}
    assert json.loads(backend.requests[0].content) == {"status": "CANCELLED"}
