"""Typed application events.

Components publish and subscribe by event class instead of by string name,
so a subscriber only ever receives the event type it asked for.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from trainer_calendar.core.logging_config import get_logger

logger = get_logger(__name__)

E = TypeVar("E")


@dataclass(frozen=True)
class LoggedOut:
    reason: str = "logout"


@dataclass(frozen=True)
class NotificationRead:
    notification_id: str


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> Callable[[], None]:
        """Register ``handler`` for ``event_type``; returns an unsubscribe callable."""
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def publish(self, event: object) -> None:
        for handler in list(self._handlers.get(type(event), [])):
            try:
                handler(event)
            except Exception:
                logger.exception("Event handler %r failed for %r", handler, event)

    def handler_count(self, event_type: type) -> int:
        return len(self._handlers.get(event_type, []))
