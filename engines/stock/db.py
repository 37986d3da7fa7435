"""
GymTastic Stock — Database Ledger
===================================
Stock ledger backed by the `ProductStock` table.

The decrement is ONE conditional UPDATE:

    UPDATE gym_stock
       SET available_quantity = available_quantity - q
     WHERE product_id = p
       AND available_quantity IS NOT NULL
       AND available_quantity >= q

The database serialises concurrent updates of the same row, so the
compare and the subtract cannot interleave with another writer.
One row updated means success; zero means refused.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.errors import StockPersistenceError, is_positive_int
from engines.stock.ledger import StockDecrementResult, validate_admin_quantity

logger = logging.getLogger("gymtastic.stock")


class DbStockLedger:
    def available_quantity(self, product_id: int) -> Optional[int]:
        from django.db import DatabaseError

        from engines.stock.models import ProductStock

        try:
            return (
                ProductStock.objects.filter(product_id=product_id)
                .values_list("available_quantity", flat=True)
                .first()
            )
        except DatabaseError as exc:
            raise StockPersistenceError(
                f"Could not read stock for product {product_id}: {exc}"
            ) from exc

    def try_decrement(self, product_id: int, quantity: int) -> StockDecrementResult:
        if not is_positive_int(quantity):
            return StockDecrementResult.invalid_quantity(product_id, quantity)

        from django.db import DatabaseError
        from django.db.models import F

        from engines.stock.models import ProductStock

        try:
            updated = ProductStock.objects.filter(
                product_id=product_id,
                available_quantity__isnull=False,
                available_quantity__gte=quantity,
            ).update(available_quantity=F("available_quantity") - quantity)
        except DatabaseError as exc:
            raise StockPersistenceError(
                f"Stock decrement failed for product {product_id}: {exc}"
            ) from exc

        if updated == 1:
            logger.debug(f"Decremented product {product_id} by {quantity}")
            return StockDecrementResult.ok(product_id, quantity)

        available = self.available_quantity(product_id)
        logger.debug(
            f"Decrement refused: product {product_id} "
            f"requested {quantity}, available {available}"
        )
        return StockDecrementResult.insufficient(product_id, quantity, available)

    def restock(self, product_id: int, quantity: int) -> None:
        validate_admin_quantity(quantity, allow_none=False)

        from django.db import DatabaseError, transaction
        from django.db.models import F

        from engines.stock.models import ProductStock

        try:
            with transaction.atomic():
                updated = ProductStock.objects.filter(
                    product_id=product_id,
                    available_quantity__isnull=False,
                ).update(available_quantity=F("available_quantity") + quantity)
                if not updated:
                    if ProductStock.objects.filter(product_id=product_id).exists():
                        raise ValueError(f"Product {product_id} is not stock-tracked.")
                    ProductStock.objects.create(
                        product_id=product_id,
                        available_quantity=quantity,
                    )
        except DatabaseError as exc:
            raise StockPersistenceError(
                f"Restock failed for product {product_id}: {exc}"
            ) from exc

        logger.debug(f"Restocked product {product_id} by {quantity}")

    def set_stock(self, product_id: int, quantity: Optional[int]) -> None:
        validate_admin_quantity(quantity, allow_none=True)

        from django.db import DatabaseError

        from engines.stock.models import ProductStock

        try:
            ProductStock.objects.update_or_create(
                product_id=product_id,
                defaults={"available_quantity": quantity},
            )
        except DatabaseError as exc:
            raise StockPersistenceError(
                f"Could not set stock for product {product_id}: {exc}"
            ) from exc
