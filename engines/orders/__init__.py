"""
GymTastic Orders — Public API
===============================
"""

from engines.orders.log import DbOrderLog, InMemoryOrderLog, OrderLog
from engines.orders.records import Order, OrderLine

__all__ = [
    "Order",
    "OrderLine",
    "OrderLog",
    "InMemoryOrderLog",
    "DbOrderLog",
]
