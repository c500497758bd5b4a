from __future__ import annotations

from datetime import date
from typing import Any, Optional

import httpx

from trainer_calendar.core.events import EventBus, LoggedOut, NotificationRead
from trainer_calendar.core.exceptions import AuthenticationError, BackendError
from trainer_calendar.core.logging_config import get_logger
from trainer_calendar.services.date_utils import format_date

logger = get_logger(__name__)


class AuthSession:
    """Bearer token holder shared by whoever needs to know the auth state."""

    def __init__(self, token: Optional[str] = None):
        self._token = token or None

    @property
    def token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: Optional[str]) -> None:
        self._token = token or None

    def clear(self) -> None:
        self._token = None

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None


class ApiClient:
    """Async client for the training platform's REST backend.

    Each request opens its own ``httpx.AsyncClient``. Pass ``transport`` to
    route requests somewhere other than the network (tests use
    ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        auth: AuthSession,
        events: EventBus | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.auth = auth
        self.events = events or EventBus()
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.auth.token:
            headers["Authorization"] = f"Bearer {self.auth.token}"
        return headers

    def _session_expired(self, reason: str) -> None:
        self.auth.clear()
        self.events.publish(LoggedOut(reason=reason))

    async def request(self, method: str, endpoint: str, *, params: dict[str, Any] | None = None, json: Any = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.request(method, url, params=params, json=json, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, endpoint, e)
            raise BackendError(f"Request failed: {e}") from e

        if r.status_code == 401:
            self._session_expired("unauthorized")
            raise AuthenticationError(self._error_message(r))
        if r.is_error:
            message = self._error_message(r)
            logger.error("%s %s returned %s: %s", method, endpoint, r.status_code, message)
            raise BackendError(message, status_code=r.status_code)

        if "application/json" in r.headers.get("content-type", ""):
            return r.json()
        return {}

    @staticmethod
    def _error_message(r: httpx.Response) -> str:
        try:
            data = r.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return f"Request failed: {r.reason_phrase}"

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, data: Any = None) -> Any:
        return await self.request("POST", endpoint, json=data)

    async def put(self, endpoint: str, data: Any = None) -> Any:
        return await self.request("PUT", endpoint, json=data)

    async def delete(self, endpoint: str) -> Any:
        return await self.request("DELETE", endpoint)

    def logout(self) -> None:
        self._session_expired("logout")

    # Bookings
    async def get_booking_requests(self) -> list[dict[str, Any]]:
        data = await self.get("/bookings")
        return data.get("bookingRequests") or []

    async def update_booking_status(self, booking_id: str, status: str) -> dict[str, Any]:
        data = await self.put(f"/bookings/{booking_id}/status", {"status": status})
        return data.get("bookingRequest") or {}

    # Events (fixed date courses)
    async def get_events(self, trainer_id: str | None = None, status: str | None = None) -> list[dict[str, Any]]:
        data = await self.get("/events", {"trainerId": trainer_id, "status": status})
        return data.get("events") or []

    # Availability
    async def get_trainer_availability(self, trainer_id: str, start: date | None = None, end: date | None = None) -> list[dict[str, Any]]:
        params = {
            "startDate": format_date(start) if start else None,
            "endDate": format_date(end) if end else None,
        }
        data = await self.get(f"/availability/trainer/{trainer_id}", params)
        if isinstance(data, list):
            return data
        return data.get("availability") or []

    async def create_availability(self, trainer_id: str, entries: list[dict[str, Any]]) -> Any:
        data = await self.post(f"/availability/trainer/{trainer_id}", entries)
        return data.get("availability")

    async def get_trainer_blocked_days(self, trainer_id: str) -> list[int]:
        data = await self.get(f"/availability/trainer/{trainer_id}/blocked-days")
        return [int(d) for d in data.get("blockedDays") or []]

    async def save_trainer_blocked_days(self, trainer_id: str, days: list[int]) -> list[int]:
        data = await self.put(f"/availability/trainer/{trainer_id}/blocked-days", {"days": days})
        return [int(d) for d in data.get("blockedDays") or []]

    # Notifications
    async def mark_notification_read(self, notification_id: str) -> dict[str, Any]:
        data = await self.put(f"/notifications/{notification_id}/read")
        self.events.publish(NotificationRead(notification_id=notification_id))
        return data.get("notification") or {}
