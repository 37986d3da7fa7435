"""
GymTastic Stock — Stock Ledger
================================
Authoritative available quantity per product, shared by all users.

The decrement is a compare-and-subtract: a product is decremented only
when it is stock-tracked and holds at least the requested quantity.
Refusals come back as StockDecrementResult values, never exceptions,
so the checkout can collect every short product before reporting.

No-oversell: under any interleaving of concurrent decrements, the sum
of successful decrements never exceeds the starting stock and the
available quantity never drops below zero.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from core.errors import ReasonCode, RejectionReason, is_positive_int

logger = logging.getLogger("gymtastic.stock")

POLICY_NAME = "stock_decrement"


# ══════════════════════════════════════════════════════════════
# VALUES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StockRecord:
    """available_quantity None means the product is not stock-tracked."""
    product_id: int
    available_quantity: Optional[int] = None

    def __post_init__(self):
        if self.available_quantity is not None and self.available_quantity < 0:
            raise ValueError("available_quantity cannot be negative.")

    @property
    def is_tracked(self) -> bool:
        return self.available_quantity is not None


@dataclass(frozen=True)
class StockDecrementResult:
    product_id: int
    quantity: int
    success: bool
    rejection: Optional[RejectionReason] = None

    def __post_init__(self):
        if self.success and self.rejection is not None:
            raise ValueError("Successful decrement cannot carry a rejection.")
        if not self.success and self.rejection is None:
            raise ValueError("Failed decrement must carry a rejection.")

    @classmethod
    def ok(cls, product_id: int, quantity: int) -> "StockDecrementResult":
        return cls(product_id=product_id, quantity=quantity, success=True)

    @classmethod
    def insufficient(
        cls, product_id: int, quantity: int, available: Optional[int],
    ) -> "StockDecrementResult":
        if available is None:
            detail = "is not stock-tracked"
        else:
            detail = f"has {available} available"
        return cls(
            product_id=product_id,
            quantity=quantity,
            success=False,
            rejection=RejectionReason(
                code=ReasonCode.INSUFFICIENT_STOCK,
                message=(
                    f"Insufficient stock for product {product_id}: "
                    f"requested {quantity}, product {detail}."
                ),
                policy_name=POLICY_NAME,
                product_id=product_id,
            ),
        )

    @classmethod
    def invalid_quantity(cls, product_id: int, quantity) -> "StockDecrementResult":
        return cls(
            product_id=product_id,
            quantity=quantity,
            success=False,
            rejection=RejectionReason(
                code=ReasonCode.INVALID_QUANTITY,
                message=f"Decrement quantity must be a positive integer, got {quantity!r}.",
                policy_name=POLICY_NAME,
                product_id=product_id,
            ),
        )


# ══════════════════════════════════════════════════════════════
# PROTOCOL
# ══════════════════════════════════════════════════════════════

class StockLedger(Protocol):
    def available_quantity(self, product_id: int) -> Optional[int]:
        ...  # pragma: no cover

    def try_decrement(self, product_id: int, quantity: int) -> StockDecrementResult:
        ...  # pragma: no cover

    def restock(self, product_id: int, quantity: int) -> None:
        ...  # pragma: no cover

    def set_stock(self, product_id: int, quantity: Optional[int]) -> None:
        ...  # pragma: no cover


def validate_admin_quantity(quantity: Optional[int], *, allow_none: bool) -> None:
    if quantity is None:
        if allow_none:
            return
        raise ValueError("quantity is required.")
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ValueError(f"quantity must be an integer, got {quantity!r}.")
    if quantity < 0:
        raise ValueError(f"quantity cannot be negative, got {quantity}.")


# ══════════════════════════════════════════════════════════════
# IN-MEMORY LEDGER
# ══════════════════════════════════════════════════════════════

class InMemoryStockLedger:
    """
    Process-local ledger.

    Each product has its own lock, created lazily under a registry
    lock; a decrement holds only its product's lock for the
    compare-and-subtract.
    """

    def __init__(self, initial: Optional[Dict[int, Optional[int]]] = None) -> None:
        self._available: Dict[int, Optional[int]] = {}
        self._locks: Dict[int, threading.Lock] = {}
        self._registry_lock = threading.Lock()
        for product_id, quantity in (initial or {}).items():
            self.set_stock(product_id, quantity)

    def _lock_for(self, product_id: int) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(product_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[product_id] = lock
            return lock

    def available_quantity(self, product_id: int) -> Optional[int]:
        with self._lock_for(product_id):
            return self._available.get(product_id)

    def record(self, product_id: int) -> StockRecord:
        return StockRecord(product_id, self.available_quantity(product_id))

    def try_decrement(self, product_id: int, quantity: int) -> StockDecrementResult:
        if not is_positive_int(quantity):
            return StockDecrementResult.invalid_quantity(product_id, quantity)

        with self._lock_for(product_id):
            available = self._available.get(product_id)
            if available is None or available < quantity:
                logger.debug(
                    f"Decrement refused: product {product_id} "
                    f"requested {quantity}, available {available}"
                )
                return StockDecrementResult.insufficient(product_id, quantity, available)
            self._available[product_id] = available - quantity

        logger.debug(f"Decremented product {product_id} by {quantity}")
        return StockDecrementResult.ok(product_id, quantity)

    def restock(self, product_id: int, quantity: int) -> None:
        validate_admin_quantity(quantity, allow_none=False)
        with self._lock_for(product_id):
            if product_id in self._available and self._available[product_id] is None:
                raise ValueError(f"Product {product_id} is not stock-tracked.")
            self._available[product_id] = self._available.get(product_id, 0) + quantity
        logger.debug(f"Restocked product {product_id} by {quantity}")

    def set_stock(self, product_id: int, quantity: Optional[int]) -> None:
        validate_admin_quantity(quantity, allow_none=True)
        with self._lock_for(product_id):
            self._available[product_id] = quantity
