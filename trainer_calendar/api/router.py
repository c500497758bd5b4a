from __future__ import annotations

from fastapi import APIRouter

from trainer_calendar.api.routes import availability, bookings, calendar

api_router = APIRouter()

api_router.include_router(calendar.router, prefix="/trainers", tags=["calendar"])
api_router.include_router(availability.router, prefix="/trainers", tags=["availability"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
