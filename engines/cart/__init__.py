"""
GymTastic Cart — Public API
=============================
"""

from engines.cart.aggregator import CartAggregator
from engines.cart.lines import CartLine, CartSnapshot
from engines.cart.store import CartStore, DbCartStore, InMemoryCartStore

__all__ = [
    "CartAggregator",
    "CartLine",
    "CartSnapshot",
    "CartStore",
    "InMemoryCartStore",
    "DbCartStore",
]
