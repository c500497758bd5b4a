from __future__ import annotations

from fastapi import APIRouter, Depends

from trainer_calendar.core.deps import get_api_client
from trainer_calendar.services.api_client import ApiClient
from trainer_calendar.services.availability_service import cancel_booking

router = APIRouter()


@router.post("/{booking_id}/cancel")
async def cancel(booking_id: str, client: ApiClient = Depends(get_api_client)):
    await cancel_booking(client, booking_id)
    return {"ok": True, "booking_id": booking_id}
