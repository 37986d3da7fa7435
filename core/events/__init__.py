"""
GymTastic Event Bus — Public API
==================================
Committed changes are announced; subscribers schedule side work.
"""

from core.events.dispatcher import dispatch
from core.events.errors import (
    DuplicateSubscriberError,
    EventBusError,
    MalformedEventTypeError,
    UnknownEventTypeError,
)
from core.events.models import DomainEvent
from core.events.registry import SubscriberRegistry, validate_event_type

__all__ = [
    "dispatch",
    "DomainEvent",
    "SubscriberRegistry",
    "validate_event_type",
    "EventBusError",
    "MalformedEventTypeError",
    "UnknownEventTypeError",
    "DuplicateSubscriberError",
]
