from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from trainer_calendar.core.events import EventBus
from trainer_calendar.schemas.availability import Availability
from trainer_calendar.schemas.booking import Booking
from trainer_calendar.services.api_client import ApiClient, AuthSession

BASE_URL = "http://backend.test/api"
TRAINER_ID = "trainer-1"


class FakeBackend:
    """Routes ``(method, path)`` to canned JSON and records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, payload: Any = None, status_code: int = 200) -> None:
        self.routes[(method, "/api" + path)] = lambda request: httpx.Response(status_code, json=payload)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, "/api" + path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": "Not found"})
        return handler(request)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == "/api" + path]


def seed_calendar(
    backend: FakeBackend,
    *,
    bookings: list[dict] | None = None,
    events: list[dict] | None = None,
    availability: list[dict] | None = None,
    blocked_days: list[int] | None = None,
    trainer_id: str = TRAINER_ID,
) -> None:
    backend.add("GET", "/bookings", {"bookingRequests": bookings or []})
    backend.add("GET", "/events", {"events": events or []})
    backend.add("GET", f"/availability/trainer/{trainer_id}", {"availability": availability or []})
    backend.add("GET", f"/availability/trainer/{trainer_id}/blocked-days", {"blockedDays": blocked_days or []})


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def api_client(backend: FakeBackend, events: EventBus) -> ApiClient:
    return ApiClient(BASE_URL, AuthSession("token-123"), events, transport=httpx.MockTransport(backend))


def make_booking(booking_id: str = "b1", status: str = "confirmed", requested_date: str | None = "2026-03-10", **kwargs: Any) -> Booking:
    kwargs.setdefault("processed_at", "2026-02-01T09:00:00Z")
    return Booking(id=booking_id, status=status, requested_date=requested_date, **kwargs)


def make_availability(date: str, status: str = "available", **kwargs: Any) -> Availability:
    return Availability(trainer_id=TRAINER_ID, date=date, status=status, **kwargs)
