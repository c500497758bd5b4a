from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends

from trainer_calendar.core.deps import get_api_client
from trainer_calendar.schemas.availability import BlockedDaysUpdate, BulkAvailabilityUpdate, DateAvailabilityUpdate
from trainer_calendar.services.api_client import ApiClient
from trainer_calendar.services.availability_service import (
    bulk_update_availability,
    save_blocked_days,
    set_date_availability,
)

router = APIRouter()


@router.put("/{trainer_id}/availability/{day}")
async def update_date_availability(
    trainer_id: str,
    day: date,
    payload: DateAvailabilityUpdate,
    client: ApiClient = Depends(get_api_client),
):
    await set_date_availability(client, trainer_id, day, payload.status)
    return {"ok": True, "date": day.isoformat(), "status": payload.status}


@router.post("/{trainer_id}/availability/bulk")
async def update_availability_bulk(
    trainer_id: str,
    payload: BulkAvailabilityUpdate,
    client: ApiClient = Depends(get_api_client),
):
    updated = await bulk_update_availability(client, trainer_id, payload.start_date, payload.end_date, payload.status)
    return {"ok": True, "updated": updated}


@router.put("/{trainer_id}/blocked-days")
async def update_blocked_days(
    trainer_id: str,
    payload: BlockedDaysUpdate,
    client: ApiClient = Depends(get_api_client),
):
    days = await save_blocked_days(client, trainer_id, payload.days)
    return {"ok": True, "blocked_days": days}
