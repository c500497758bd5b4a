from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from trainer_calendar.core.config import Settings, get_settings
from trainer_calendar.core.events import EventBus
from trainer_calendar.services.api_client import ApiClient, AuthSession

# Tokens are issued by the REST backend; this service only forwards them.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


@lru_cache
def get_event_bus() -> EventBus:
    return EventBus()


def get_api_client(
    token: str = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
    events: EventBus = Depends(get_event_bus),
) -> ApiClient:
    return ApiClient(
        settings.backend_api_url,
        AuthSession(token),
        events,
        timeout=settings.backend_timeout_seconds,
    )
