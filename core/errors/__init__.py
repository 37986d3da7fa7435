"""
GymTastic Core Errors — Public API
====================================
Rejections are values; exceptions are for bad input and broken storage.
"""

from core.errors.exceptions import (
    CartPersistenceError,
    CatalogPersistenceError,
    CommerceError,
    InvalidQuantityError,
    MembershipPersistenceError,
    OrderPersistenceError,
    PersistenceError,
    ProductNotFoundError,
    StockPersistenceError,
    invalid_quantity,
    is_positive_int,
)
from core.errors.rejection import ReasonCode, RejectionReason

__all__ = [
    # ── Rejection ─────────────────────────────────────────────
    "RejectionReason",
    "ReasonCode",
    # ── Exceptions ────────────────────────────────────────────
    "CommerceError",
    "InvalidQuantityError",
    "PersistenceError",
    "StockPersistenceError",
    "MembershipPersistenceError",
    "OrderPersistenceError",
    "CartPersistenceError",
    "CatalogPersistenceError",
    "ProductNotFoundError",
    "invalid_quantity",
    "is_positive_int",
]
