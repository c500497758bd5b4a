from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field


class Availability(BaseModel):
    id: str | None = None
    trainer_id: str
    date: str  # YYYY-MM-DD
    status: str  # available|not_available|tentative|booked
    start_time: str | None = None
    end_time: str | None = None
    created_at: str | None = None


EditableStatus = Literal["available", "not_available"]


class DateAvailabilityUpdate(BaseModel):
    status: EditableStatus


class BulkAvailabilityUpdate(BaseModel):
    start_date: date
    end_date: date
    status: EditableStatus


class BlockedDaysUpdate(BaseModel):
    days: list[int] = Field(default_factory=list)  # 0..6 checked by save_blocked_days
