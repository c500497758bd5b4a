from __future__ import annotations

from pydantic import BaseModel

# Statuses as the backend and admin events use them, lower-cased.
PENDING = "pending"
APPROVED = "approved"
TENTATIVE = "tentative"
CONFIRMED = "confirmed"
BOOKED = "booked"
DENIED = "denied"
CANCELLED = "cancelled"


class Booking(BaseModel):
    """A booking request or an admin event, normalised to one shape."""

    id: str
    status: str = ""
    requested_date: str | None = None  # YYYY-MM-DD
    end_date: str | None = None  # inclusive
    processed_at: str | None = None
    created_at: str | None = None

    source: str = "booking_request"  # booking_request|event
    course_id: str | None = None
    trainer_id: str | None = None
    title: str | None = None
    request_type: str | None = None  # public|inhouse
    client_name: str | None = None
    location: str | None = None
    city: str | None = None
    state: str | None = None
