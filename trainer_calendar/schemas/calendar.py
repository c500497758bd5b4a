from __future__ import annotations

import datetime
from typing import Literal

from pydantic import BaseModel

from trainer_calendar.schemas.availability import Availability
from trainer_calendar.schemas.booking import Booking

DayStatus = Literal["available", "not_available", "blocked", "tentative", "booked"]
CalendarFilter = Literal["all", "booked", "blocked", "available", "not_available", "tentative"]

DAY_STATUSES: tuple[str, ...] = ("booked", "blocked", "available", "not_available", "tentative")


class CalendarDay(BaseModel):
    date: datetime.date
    date_string: str
    is_current_month: bool
    is_today: bool
    status: DayStatus
    bookings: list[Booking]
    availability: Availability | None = None
    is_blocked: bool
    is_filtered: bool = False


class FilterCounts(BaseModel):
    all: int = 0
    booked: int = 0
    blocked: int = 0
    available: int = 0
    not_available: int = 0
    tentative: int = 0


class CalendarMonthOut(BaseModel):
    trainer_id: str
    year: int
    month: int
    month_name: str
    days: list[CalendarDay]
    counts: FilterCounts
    blocked_dates: list[str]
    pending_bookings: list[Booking]
