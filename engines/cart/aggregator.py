"""
GymTastic Cart — Cart Aggregator
==================================
One user's cart. At most one line per product: adding a product that
is already present sums the quantities and refreshes the unit price.

When a CartStore is attached, every mutation writes the full line set
so the cart survives app restarts.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, Optional

from core.errors import invalid_quantity, is_positive_int
from engines.cart.lines import CartLine, CartSnapshot, validate_unit_price
from engines.catalog.domain import ProductKind

logger = logging.getLogger("gymtastic.cart")


class CartAggregator:
    def __init__(self, user_id: Optional[str] = None, store=None) -> None:
        if store is not None and not user_id:
            raise ValueError("user_id is required when a cart store is attached.")
        self._user_id = user_id
        self._store = store
        # dict preserves insertion order
        self._lines: Dict[int, CartLine] = {}
        self._lock = threading.Lock()

    @classmethod
    def load(cls, user_id: str, store) -> "CartAggregator":
        """Restore a persisted cart."""
        cart = cls(user_id=user_id, store=store)
        for line in store.load(user_id):
            cart._lines[line.product_id] = line
        logger.debug(f"Cart loaded for {user_id}: {len(cart._lines)} line(s)")
        return cart

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    # ── Mutations ─────────────────────────────────────────────

    def add(self, product_id: int, quantity: int, unit_price: int, kind: ProductKind) -> None:
        if not is_positive_int(quantity):
            raise invalid_quantity(quantity, policy_name="cart_add", product_id=product_id)
        validate_unit_price(unit_price, policy_name="cart_add", product_id=product_id)

        with self._lock:
            existing = self._lines.get(product_id)
            if existing is None:
                self._lines[product_id] = CartLine(
                    product_id=product_id,
                    quantity=quantity,
                    unit_price=unit_price,
                    kind=kind,
                )
            else:
                self._lines[product_id] = CartLine(
                    product_id=product_id,
                    quantity=existing.quantity + quantity,
                    unit_price=unit_price,
                    kind=existing.kind,
                )
            self._persist()

    def set_quantity(self, product_id: int, quantity: int) -> None:
        """Overwrite a line's quantity. No-op when the product is not in the cart."""
        if not is_positive_int(quantity):
            raise invalid_quantity(
                quantity, policy_name="cart_set_quantity", product_id=product_id,
            )
        with self._lock:
            existing = self._lines.get(product_id)
            if existing is None:
                return
            self._lines[product_id] = CartLine(
                product_id=product_id,
                quantity=quantity,
                unit_price=existing.unit_price,
                kind=existing.kind,
            )
            self._persist()

    def remove(self, product_id: int) -> None:
        with self._lock:
            if self._lines.pop(product_id, None) is not None:
                self._persist()

    def remove_products(self, product_ids: Iterable[int]) -> None:
        with self._lock:
            removed = [pid for pid in list(product_ids) if self._lines.pop(pid, None)]
            if removed:
                self._persist()

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()
            self._persist()

    # ── Queries ───────────────────────────────────────────────

    def quantity_for(self, product_id: int) -> int:
        with self._lock:
            line = self._lines.get(product_id)
        return line.quantity if line else 0

    def snapshot(self) -> CartSnapshot:
        with self._lock:
            return CartSnapshot(lines=tuple(self._lines.values()))

    def total(self) -> int:
        return self.snapshot().total

    def subtotal_for(self, kind: ProductKind) -> int:
        return sum(line.subtotal for line in self.snapshot() if line.kind == kind)

    def item_count(self) -> int:
        return self.snapshot().item_count

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._lines

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    # ── Internal ──────────────────────────────────────────────

    def _persist(self) -> None:
        if self._store is None:
            return
        self._store.save(self._user_id, tuple(self._lines.values()))
