"""
Tests for core.events — Subscriber registry and dispatcher.
"""

from datetime import datetime, timezone

import pytest

from core.events import (
    DomainEvent,
    DuplicateSubscriberError,
    EventBusError,
    MalformedEventTypeError,
    SubscriberRegistry,
    UnknownEventTypeError,
    dispatch,
)

T0 = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
EVENT_TYPE = "checkout.order.committed.v1"


def _event(**payload) -> DomainEvent:
    return DomainEvent(
        event_type=EVENT_TYPE,
        source_engine="checkout",
        occurred_at=T0,
        payload=payload,
    )


# ── Registry ─────────────────────────────────────────────────

class TestSubscriberRegistry:
    def test_register_and_lookup(self):
        registry = SubscriberRegistry()
        handler = lambda event: None
        registry.register_subscriber(EVENT_TYPE, handler, "reminders")

        assert registry.has_subscribers(EVENT_TYPE)
        assert registry.subscriber_count(EVENT_TYPE) == 1
        assert registry.get_subscribers(EVENT_TYPE) == [(handler, "reminders")]

    def test_unknown_event_type_has_no_subscribers(self):
        assert SubscriberRegistry().get_subscribers(EVENT_TYPE) == []

    @pytest.mark.parametrize("event_type", [
        "", None, "checkout", "checkout.order.committed", "checkout..committed.v1",
        "checkout.order.committed.v0", "Checkout.order.committed.v1",
    ])
    def test_malformed_event_type(self, event_type):
        with pytest.raises(MalformedEventTypeError):
            SubscriberRegistry().register_subscriber(event_type, print, "reminders")

    def test_known_types_reject_typos(self):
        registry = SubscriberRegistry([EVENT_TYPE])
        with pytest.raises(UnknownEventTypeError, match="checkout.order.commited.v1"):
            registry.register_subscriber("checkout.order.commited.v1", print, "reminders")
        registry.register_subscriber(EVENT_TYPE, print, "reminders")
        assert registry.subscriber_count(EVENT_TYPE) == 1

    def test_known_types_are_validated(self):
        with pytest.raises(MalformedEventTypeError):
            SubscriberRegistry(["checkout.order"])

    def test_duplicate_handler_rejected(self):
        registry = SubscriberRegistry()
        handler = lambda event: None
        registry.register_subscriber(EVENT_TYPE, handler, "reminders")
        with pytest.raises(DuplicateSubscriberError):
            registry.register_subscriber(EVENT_TYPE, handler, "analytics")

    def test_unregister(self):
        registry = SubscriberRegistry()
        handler = lambda event: None
        registry.register_subscriber(EVENT_TYPE, handler, "reminders")

        assert registry.unregister_subscriber(EVENT_TYPE, handler)
        assert not registry.has_subscribers(EVENT_TYPE)
        assert not registry.unregister_subscriber(EVENT_TYPE, handler)

    def test_handler_must_be_callable(self):
        with pytest.raises(EventBusError):
            SubscriberRegistry().register_subscriber(EVENT_TYPE, "nope", "reminders")

    def test_subscriber_name_required(self):
        with pytest.raises(EventBusError):
            SubscriberRegistry().register_subscriber(EVENT_TYPE, print, "")


# ── Dispatch ─────────────────────────────────────────────────

class TestDispatch:
    def test_no_subscribers(self):
        result = dispatch(_event(), SubscriberRegistry())
        assert result["subscribers_notified"] == 0
        assert result["failures"] == []

    def test_handlers_receive_event(self):
        registry = SubscriberRegistry()
        received = []
        registry.register_subscriber(EVENT_TYPE, received.append, "reminders")

        event = _event(order_id="o-1")
        result = dispatch(event, registry)

        assert received == [event]
        assert result["subscribers_notified"] == 1

    def test_failing_handler_does_not_stop_others(self):
        registry = SubscriberRegistry()
        received = []

        def broken(event):
            raise RuntimeError("scheduler offline")

        registry.register_subscriber(EVENT_TYPE, broken, "reminders")
        registry.register_subscriber(EVENT_TYPE, received.append, "analytics")

        result = dispatch(_event(), registry)

        assert result["subscribers_failed"] == 1
        assert result["subscribers_notified"] == 1
        assert result["failures"][0]["error_type"] == "RuntimeError"
        assert result["failures"][0]["subscriber"] == "reminders"
        assert len(received) == 1


class TestDomainEvent:
    def test_requires_aware_timestamp(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            DomainEvent(
                event_type=EVENT_TYPE,
                source_engine="checkout",
                occurred_at=datetime(2025, 1, 1),
            )

    def test_to_dict(self):
        data = _event(total=100).to_dict()
        assert data["event_type"] == EVENT_TYPE
        assert data["payload"] == {"total": 100}
        assert data["occurred_at"] == T0.isoformat()
