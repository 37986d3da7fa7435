"""
GymTastic Checkout Wiring
=========================
Constructs the ORM-backed CheckoutService for the running app.

Glue only: every collaborator is the Django implementation of its
protocol, rules come from `settings.GYMTASTIC_CORE`.
"""

from __future__ import annotations

import threading

from core.config import SettingsConfigStore
from core.events import SubscriberRegistry
from core.time import get_default_clock
from engines.catalog.providers import DbProductCatalog, DbSiteDirectory
from engines.checkout.events import CHECKOUT_EVENT_TYPES
from engines.checkout.service import CheckoutService
from engines.membership.store import DbMembershipStore
from engines.orders.log import DbOrderLog
from engines.stock.db import DbStockLedger

_SERVICE_LOCK = threading.Lock()
_SERVICE: CheckoutService | None = None
_EVENT_REGISTRY = SubscriberRegistry(CHECKOUT_EVENT_TYPES)


def get_event_registry() -> SubscriberRegistry:
    """Registry external schedulers subscribe to for post-commit events."""
    return _EVENT_REGISTRY


def build_db_checkout_service(events: SubscriberRegistry | None = None) -> CheckoutService:
    return CheckoutService(
        stock=DbStockLedger(),
        memberships=DbMembershipStore(),
        orders=DbOrderLog(),
        catalog=DbProductCatalog(),
        sites=DbSiteDirectory(),
        config=SettingsConfigStore(),
        clock=get_default_clock(),
        events=events if events is not None else _EVENT_REGISTRY,
    )


def get_checkout_service() -> CheckoutService:
    global _SERVICE
    with _SERVICE_LOCK:
        if _SERVICE is None:
            _SERVICE = build_db_checkout_service()
        return _SERVICE


def reset_checkout_service() -> None:
    """Drop the cached service (tests that swap settings or clock)."""
    global _SERVICE
    with _SERVICE_LOCK:
        _SERVICE = None
