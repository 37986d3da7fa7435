"""
GymTastic Event Bus — Errors
==============================
Raised at subscription time only, so a reminder scheduler wired to a
misspelled event type fails on startup instead of silently never
firing. Dispatch itself never raises; see core.events.dispatcher.
"""


class EventBusError(Exception):
    pass


class MalformedEventTypeError(EventBusError, ValueError):
    """Event type is not `<source>.<entity>.<action>.v<N>`."""

    def __init__(self, event_type):
        self.event_type = event_type
        super().__init__(
            f"Malformed event type {event_type!r}; "
            f"expected '<source>.<entity>.<action>.v<N>'."
        )


class UnknownEventTypeError(EventBusError, LookupError):
    """Registry only accepts the event types it was built for."""

    def __init__(self, event_type: str, known: tuple):
        self.event_type = event_type
        self.known = known
        super().__init__(
            f"Nothing emits {event_type!r}; known types: {', '.join(known)}."
        )


class DuplicateSubscriberError(EventBusError):
    def __init__(self, event_type: str, subscriber: str):
        self.event_type = event_type
        self.subscriber = subscriber
        super().__init__(
            f"{subscriber} is already subscribed to {event_type!r}."
        )
