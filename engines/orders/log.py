"""
GymTastic Orders — Append-Only Order Log
==========================================
append() adds; nothing updates or deletes. Per-user history is read
newest first.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Protocol

from core.errors import OrderPersistenceError
from engines.orders.records import Order

logger = logging.getLogger("gymtastic.checkout")


class OrderLog(Protocol):
    def append(self, order: Order) -> None:
        ...  # pragma: no cover

    def list_for_user(self, user_id: str) -> List[Order]:
        ...  # pragma: no cover


class InMemoryOrderLog:
    def __init__(self) -> None:
        self._orders: List[Order] = []
        self._lock = threading.Lock()

    def append(self, order: Order) -> None:
        with self._lock:
            if any(existing.order_id == order.order_id for existing in self._orders):
                raise OrderPersistenceError(
                    f"Order {order.order_id} already recorded."
                )
            self._orders.append(order)

    def list_for_user(self, user_id: str) -> List[Order]:
        with self._lock:
            mine = [
                (index, order)
                for index, order in enumerate(self._orders)
                if order.user_id == user_id
            ]
        mine.sort(key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
        return [order for _, order in mine]

    def __len__(self) -> int:
        return len(self._orders)


class DbOrderLog:
    """Orders in `gym_orders` (insert-only model)."""

    def append(self, order: Order) -> None:
        from django.db import DatabaseError

        from engines.orders.models import OrderRecord

        try:
            OrderRecord.objects.create(**OrderRecord.fields_from_order(order))
        except DatabaseError as exc:
            raise OrderPersistenceError(
                f"Could not record order {order.order_id}: {exc}"
            ) from exc

    def list_for_user(self, user_id: str) -> List[Order]:
        from django.db import DatabaseError

        from engines.orders.models import OrderRecord

        try:
            rows = list(
                OrderRecord.objects.filter(user_id=user_id)
                .order_by("-created_at", "-id")
            )
        except DatabaseError as exc:
            raise OrderPersistenceError(
                f"Could not read orders for {user_id}: {exc}"
            ) from exc
        return [row.to_order() for row in rows]
