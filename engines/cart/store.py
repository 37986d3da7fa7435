"""
GymTastic Cart — Durable Cart Storage
=======================================
Optional persistence for the cart. `save` replaces the user's whole
line set; `load` returns it in insertion order.
"""

from __future__ import annotations

from typing import Dict, Protocol, Sequence, Tuple

from core.errors import CartPersistenceError
from engines.cart.lines import CartLine


class CartStore(Protocol):
    def load(self, user_id: str) -> Tuple[CartLine, ...]:
        ...  # pragma: no cover

    def save(self, user_id: str, lines: Sequence[CartLine]) -> None:
        ...  # pragma: no cover


class InMemoryCartStore:
    def __init__(self) -> None:
        self._carts: Dict[str, Tuple[CartLine, ...]] = {}

    def load(self, user_id: str) -> Tuple[CartLine, ...]:
        return self._carts.get(user_id, ())

    def save(self, user_id: str, lines: Sequence[CartLine]) -> None:
        self._carts[user_id] = tuple(lines)


class DbCartStore:
    """Cart lines in `gym_cart_lines`, one row per (user_id, product_id)."""

    def load(self, user_id: str) -> Tuple[CartLine, ...]:
        from engines.cart.models import CartLineRecord

        rows = CartLineRecord.objects.filter(user_id=user_id).order_by("position")
        return tuple(row.to_line() for row in rows)

    def save(self, user_id: str, lines: Sequence[CartLine]) -> None:
        from django.db import DatabaseError, transaction

        from engines.cart.models import CartLineRecord

        try:
            with transaction.atomic():
                CartLineRecord.objects.filter(user_id=user_id).delete()
                CartLineRecord.objects.bulk_create([
                    CartLineRecord.from_line(user_id, line, position)
                    for position, line in enumerate(lines)
                ])
        except DatabaseError as exc:
            raise CartPersistenceError(
                f"Could not save cart for {user_id}: {exc}"
            ) from exc
