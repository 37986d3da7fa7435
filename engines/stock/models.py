"""
GymTastic Stock - Persistent Stock Levels
==========================================
One row per product. NULL available_quantity means not stock-tracked.
"""

from __future__ import annotations

from django.db import models

from engines.stock.ledger import StockRecord


class ProductStock(models.Model):
    product_id = models.IntegerField(primary_key=True)
    available_quantity = models.PositiveIntegerField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "gym_stock"
        ordering = ["product_id"]

    def __str__(self) -> str:
        return f"{self.product_id}: {self.available_quantity}"

    def to_record(self) -> StockRecord:
        return StockRecord(
            product_id=self.product_id,
            available_quantity=self.available_quantity,
        )
