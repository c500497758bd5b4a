from __future__ import annotations

import asyncio
from datetime import date
from typing import Awaitable, TypeVar

from trainer_calendar.core.exceptions import AuthenticationError, BackendError
from trainer_calendar.core.logging_config import get_logger
from trainer_calendar.schemas.availability import Availability
from trainer_calendar.schemas.booking import Booking
from trainer_calendar.schemas.calendar import CalendarMonthOut
from trainer_calendar.services.api_client import ApiClient
from trainer_calendar.services.calendar_grid import (
    apply_filter,
    build_calendar_days,
    compute_filter_counts,
    expand_blocked_weekdays,
)
from trainer_calendar.services.date_utils import calendar_grid, days_in_month, month_name
from trainer_calendar.services.day_status import pending_bookings
from trainer_calendar.services.normalization import (
    availability_from_record,
    booking_from_event,
    booking_from_request,
    filter_bookings_in_range,
)

logger = get_logger(__name__)

T = TypeVar("T")

ACTIVE_EVENT_STATUS = "ACTIVE"
DEFAULT_ERROR = "Failed to load calendar data"


class CalendarDataLoader:
    """Bookings, availability and blocked weekdays for one trainer and range.

    A load fetches everything concurrently and swaps the data in only when
    every fetch succeeded. If any fetch fails, ``error`` is set and the
    previous data stays as it was. Loads carry a sequence number so a
    slower, older load can never overwrite the result of a newer one.
    """

    def __init__(self, client: ApiClient):
        self.client = client
        self.trainer_id: str = ""
        self.start: date | None = None
        self.end: date | None = None

        self.bookings: list[Booking] = []
        self.availabilities: list[Availability] = []
        self.blocked_weekdays: list[int] = []
        self.loading = False
        self.error: str | None = None
        self.last_exception: Exception | None = None

        self._sequence = 0

    async def load(self, trainer_id: str, start: date, end: date) -> bool:
        """Fetch everything for ``trainer_id`` between start and end inclusive.

        Returns True when this load's result was applied.
        """
        self.trainer_id, self.start, self.end = trainer_id, start, end
        self._sequence += 1
        sequence = self._sequence

        if not trainer_id:
            self.loading = False
            return False

        self.loading = True
        self.error = None
        self.last_exception = None

        results = await asyncio.gather(
            self.client.get_booking_requests(),
            self.client.get_events(trainer_id=trainer_id, status=ACTIVE_EVENT_STATUS),
            self.client.get_trainer_availability(trainer_id, start, end),
            self.client.get_trainer_blocked_days(trainer_id),
            return_exceptions=True,
        )

        if sequence != self._sequence:
            logger.info("Discarding stale calendar load for %s (%s..%s)", trainer_id, start, end)
            return False

        self.loading = False
        for r in results:
            # cancellation and interpreter exits are not fetch failures
            if isinstance(r, BaseException) and not isinstance(r, Exception):
                raise r
        failures = [r for r in results if isinstance(r, Exception)]
        if failures:
            # an expired session outranks whatever else failed alongside it
            failure = next((f for f in failures if isinstance(f, AuthenticationError)), failures[0])
            logger.error("Calendar load for %s failed: %s", trainer_id, failure)
            self.error = self._error_message(failure)
            self.last_exception = failure
            return False

        raw_requests, raw_events, raw_availability, blocked_days = results
        requests = filter_bookings_in_range([booking_from_request(r) for r in raw_requests], start, end)
        events = filter_bookings_in_range([booking_from_event(e) for e in raw_events], start, end)

        self.bookings = requests + events
        self.availabilities = [availability_from_record(a) for a in raw_availability]
        self.blocked_weekdays = sorted(set(blocked_days))
        logger.debug(
            "Loaded %d bookings, %d availability records, blocked=%s for %s",
            len(self.bookings),
            len(self.availabilities),
            self.blocked_weekdays,
            trainer_id,
        )
        return True

    async def load_month(self, trainer_id: str, year: int, month: int) -> bool:
        dates = days_in_month(year, month)
        return await self.load(trainer_id, dates[0], dates[-1])

    async def refetch(self) -> bool:
        """Re-issue every fetch for the last requested range."""
        if self.start is None or self.end is None:
            return False
        return await self.load(self.trainer_id, self.start, self.end)

    async def run_mutation(self, mutation: Awaitable[T]) -> T:
        """Await a write, then reload from the backend."""
        result = await mutation
        await self.refetch()
        return result

    @staticmethod
    def _error_message(error: Exception) -> str:
        if isinstance(error, BackendError):
            return error.message
        return str(error) or DEFAULT_ERROR

    @property
    def blocked_dates(self) -> list[str]:
        if self.start is None or self.end is None:
            return []
        return expand_blocked_weekdays(self.start, self.end, self.blocked_weekdays)

    def build_month(self, year: int, month: int, calendar_filter: str = "all", *, today: date | None = None) -> CalendarMonthOut:
        days = build_calendar_days(
            calendar_grid(year, month),
            self.bookings,
            self.availabilities,
            self.blocked_weekdays,
            month,
            today=today,
        )
        return CalendarMonthOut(
            trainer_id=self.trainer_id,
            year=year,
            month=month,
            month_name=month_name(month),
            days=apply_filter(days, calendar_filter),
            counts=compute_filter_counts(days),
            blocked_dates=self.blocked_dates,
            pending_bookings=pending_bookings(self.bookings),
        )
