"""
GymTastic Stock — Public API
==============================
"""

from engines.stock.db import DbStockLedger
from engines.stock.ledger import (
    InMemoryStockLedger,
    StockDecrementResult,
    StockLedger,
    StockRecord,
)

__all__ = [
    "StockLedger",
    "StockRecord",
    "StockDecrementResult",
    "InMemoryStockLedger",
    "DbStockLedger",
]
