from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from trainer_calendar.core.deps import get_api_client
from trainer_calendar.core.exceptions import BackendError
from trainer_calendar.schemas.booking import Booking
from trainer_calendar.schemas.calendar import CalendarFilter, CalendarMonthOut
from trainer_calendar.services.api_client import ApiClient
from trainer_calendar.services.calendar_data import CalendarDataLoader

router = APIRouter()


async def _load_month(client: ApiClient, trainer_id: str, year: int, month: int) -> CalendarDataLoader:
    loader = CalendarDataLoader(client)
    await loader.load_month(trainer_id, year, month)
    if isinstance(loader.last_exception, BackendError):
        # main.py maps these to 401, the backend's own 4xx, or 502
        raise loader.last_exception
    if loader.error:
        raise HTTPException(status_code=502, detail=loader.error)
    return loader


@router.get("/{trainer_id}/calendar", response_model=CalendarMonthOut)
async def get_calendar(
    trainer_id: str,
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    filter_: CalendarFilter = Query(default="all", alias="filter"),
    client: ApiClient = Depends(get_api_client),
):
    loader = await _load_month(client, trainer_id, year, month)
    return loader.build_month(year, month, filter_)


@router.get("/{trainer_id}/bookings/pending", response_model=list[Booking])
async def list_pending_bookings(
    trainer_id: str,
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    client: ApiClient = Depends(get_api_client),
):
    loader = await _load_month(client, trainer_id, year, month)
    return loader.build_month(year, month).pending_bookings
