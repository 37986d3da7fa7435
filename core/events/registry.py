"""
GymTastic Event Bus — Subscriber Registry
===========================================
Who hears about committed checkouts.

Subscribers are outside the commerce core: a reminder service listening
to `checkout.membership.activated.v1` schedules plan-expiry notices,
nothing in the core depends on them. Each subscription carries a
subscriber name used in dispatch logs.

Rules:
- Event types are versioned: `<source>.<entity>.<action>.v<N>`
- When built with `known_event_types`, only those may be subscribed to
- A handler subscribes at most once per event type
- In-memory, thread-safe
"""

import logging
import re
from threading import Lock
from typing import Callable, Iterable, Optional

from core.events.errors import (
    DuplicateSubscriberError,
    EventBusError,
    MalformedEventTypeError,
    UnknownEventTypeError,
)

logger = logging.getLogger("gymtastic.events")

EVENT_TYPE_PATTERN = re.compile(r"^[a-z_]+\.[a-z_]+\.[a-z_]+\.v[1-9][0-9]*$")


def validate_event_type(event_type) -> str:
    if not isinstance(event_type, str) or not EVENT_TYPE_PATTERN.match(event_type):
        raise MalformedEventTypeError(event_type)
    return event_type


class SubscriberRegistry:
    """
    Maps event_type to an ordered list of (handler, subscriber) pairs.
    Handlers run in subscription order.
    """

    def __init__(self, known_event_types: Optional[Iterable[str]] = None):
        self._known = (
            tuple(validate_event_type(t) for t in known_event_types)
            if known_event_types is not None else None
        )
        self._subscribers: dict[str, list[tuple[Callable, str]]] = {}
        self._lock = Lock()

    def register_subscriber(
        self,
        event_type: str,
        handler: Callable,
        subscriber: str,
    ) -> None:
        """
        Raises:
            MalformedEventTypeError:  event type is not versioned dotted form
            UnknownEventTypeError:    registry does not carry this event type
            DuplicateSubscriberError: handler already subscribed
        """
        validate_event_type(event_type)
        if self._known is not None and event_type not in self._known:
            raise UnknownEventTypeError(event_type, self._known)
        if not callable(handler):
            raise EventBusError(f"Handler must be callable, got {type(handler)}.")
        if not subscriber:
            raise EventBusError("subscriber name is required.")

        with self._lock:
            entries = self._subscribers.setdefault(event_type, [])
            if any(existing is handler for existing, _ in entries):
                raise DuplicateSubscriberError(event_type, subscriber)
            entries.append((handler, subscriber))

        logger.info(f"{subscriber} subscribed to {event_type}")

    def unregister_subscriber(self, event_type: str, handler: Callable) -> bool:
        """False when the handler was not subscribed."""
        with self._lock:
            entries = self._subscribers.get(event_type, [])
            for index, (existing, subscriber) in enumerate(entries):
                if existing is handler:
                    del entries[index]
                    logger.info(f"{subscriber} unsubscribed from {event_type}")
                    return True
        return False

    def get_subscribers(self, event_type: str) -> list[tuple[Callable, str]]:
        with self._lock:
            return list(self._subscribers.get(event_type, []))

    def has_subscribers(self, event_type: str) -> bool:
        with self._lock:
            return bool(self._subscribers.get(event_type))

    def subscriber_count(self, event_type: str) -> int:
        with self._lock:
            return len(self._subscribers.get(event_type, []))
