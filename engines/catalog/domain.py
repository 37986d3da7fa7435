"""
GymTastic Catalog — Canonical Product & Site Types
====================================================
One type per entity. The remote product API, the ORM rows and the
cart all convert to and from these shapes at their boundary.

Money is an integer amount in minor currency units (CLP has none,
so 19990 means CLP 19.990).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ══════════════════════════════════════════════════════════════
# PRODUCT KIND
# ══════════════════════════════════════════════════════════════

class ProductKind(Enum):
    """Plan = time-bound membership. Merch = stock-tracked goods."""
    PLAN = "PLAN"
    MERCH = "MERCH"

    @classmethod
    def parse(cls, value) -> "ProductKind":
        """Accepts enum members and wire values ('plan', 'merch', any case)."""
        if isinstance(value, ProductKind):
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Unknown product kind: {value!r}")
        normalized = value.strip().upper()
        if normalized == "MERCHANDISE":
            normalized = "MERCH"
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown product kind: {value!r}") from None

    @property
    def wire_value(self) -> str:
        return self.value.lower()


# ══════════════════════════════════════════════════════════════
# PRODUCT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Product:
    """
    Catalog entry.

    plan_duration_days is meaningful for PLAN products only; a plan
    without an explicit duration uses the configured default.
    """
    product_id: int
    name: str
    price: int
    kind: ProductKind
    plan_duration_days: Optional[int] = None
    description: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.product_id, int) or isinstance(self.product_id, bool):
            raise ValueError("product_id must be an integer.")
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be non-empty string.")
        if not isinstance(self.price, int) or self.price < 0:
            raise ValueError("price must be a non-negative integer.")
        if not isinstance(self.kind, ProductKind):
            raise ValueError("kind must be ProductKind enum.")
        if self.plan_duration_days is not None:
            if self.kind != ProductKind.PLAN:
                raise ValueError("plan_duration_days only applies to PLAN products.")
            if self.plan_duration_days <= 0:
                raise ValueError("plan_duration_days must be > 0.")

    @property
    def is_plan(self) -> bool:
        return self.kind == ProductKind.PLAN


# ══════════════════════════════════════════════════════════════
# SITE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Site:
    """A physical gym location a membership plan is bound to."""
    site_id: int
    name: str
    address: str
    lat: float
    lng: float

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be non-empty string.")
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"lat out of range: {self.lat}")
        if not -180.0 <= self.lng <= 180.0:
            raise ValueError(f"lng out of range: {self.lng}")

    def label(self) -> str:
        return f"{self.name} • {self.address}"


DEFAULT_SITES = (
    Site(1, "Sede Centro", "Alameda 123", -33.447, -70.653),
    Site(2, "Sede Ñuñoa", "Irarrazaval 456", -33.456, -70.595),
    Site(3, "Sede Providencia", "Providencia 789", -33.426, -70.615),
)
