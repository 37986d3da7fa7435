"""
GymTastic Catalog — Product Catalog & Site Directory
======================================================
Read-only collaborators consumed by the cart and checkout.

The catalog is owned by the remote product service; this core only
needs names (order summaries), kinds (validation) and plan durations
(membership activation).
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Protocol

from core.errors import CatalogPersistenceError, ProductNotFoundError
from engines.catalog.domain import DEFAULT_SITES, Product, ProductKind, Site


# ══════════════════════════════════════════════════════════════
# PROTOCOLS
# ══════════════════════════════════════════════════════════════

class ProductCatalog(Protocol):
    def get(self, product_id: int) -> Product:
        """Raises ProductNotFoundError for unknown ids."""
        ...  # pragma: no cover

    def names_by_id(self, product_ids: Iterable[int]) -> Dict[int, str]:
        ...  # pragma: no cover

    def kinds_by_id(self, product_ids: Iterable[int]) -> Dict[int, ProductKind]:
        ...  # pragma: no cover

    def plan_duration(self, product_id: int) -> Optional[int]:
        ...  # pragma: no cover


class SiteDirectory(Protocol):
    def list_sites(self) -> List[Site]:
        ...  # pragma: no cover

    def get(self, site_id: int) -> Optional[Site]:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IN-MEMORY
# ══════════════════════════════════════════════════════════════

class InMemoryProductCatalog:
    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: Dict[int, Product] = {}
        for product in products:
            self.put(product)

    def put(self, product: Product) -> None:
        self._products[product.product_id] = product

    def get(self, product_id: int) -> Product:
        try:
            return self._products[product_id]
        except KeyError:
            raise ProductNotFoundError(product_id) from None

    def names_by_id(self, product_ids: Iterable[int]) -> Dict[int, str]:
        return {
            pid: self._products[pid].name
            for pid in product_ids
            if pid in self._products
        }

    def kinds_by_id(self, product_ids: Iterable[int]) -> Dict[int, ProductKind]:
        return {
            pid: self._products[pid].kind
            for pid in product_ids
            if pid in self._products
        }

    def plan_duration(self, product_id: int) -> Optional[int]:
        product = self._products.get(product_id)
        return product.plan_duration_days if product else None

    def all(self) -> List[Product]:
        return sorted(self._products.values(), key=lambda p: p.product_id)


class InMemorySiteDirectory:
    def __init__(self, sites: Iterable[Site] = DEFAULT_SITES) -> None:
        self._sites = {site.site_id: site for site in sites}

    def list_sites(self) -> List[Site]:
        return sorted(self._sites.values(), key=lambda s: s.site_id)

    def get(self, site_id: int) -> Optional[Site]:
        return self._sites.get(site_id)


# ══════════════════════════════════════════════════════════════
# DJANGO ORM
# ══════════════════════════════════════════════════════════════

class DbProductCatalog:
    """Catalog backed by the `CatalogProduct` table."""

    def get(self, product_id: int) -> Product:
        from django.db import DatabaseError

        from engines.catalog.models import CatalogProduct

        try:
            row = CatalogProduct.objects.filter(product_id=product_id).first()
        except DatabaseError as exc:
            raise CatalogPersistenceError(
                f"Could not read product {product_id}: {exc}"
            ) from exc
        if row is None:
            raise ProductNotFoundError(product_id)
        return row.to_product()

    def names_by_id(self, product_ids: Iterable[int]) -> Dict[int, str]:
        from django.db import DatabaseError

        from engines.catalog.models import CatalogProduct

        try:
            rows = list(
                CatalogProduct.objects.filter(
                    product_id__in=list(product_ids),
                ).values_list("product_id", "name")
            )
        except DatabaseError as exc:
            raise CatalogPersistenceError(f"Could not read product names: {exc}") from exc
        return dict(rows)

    def kinds_by_id(self, product_ids: Iterable[int]) -> Dict[int, ProductKind]:
        from django.db import DatabaseError

        from engines.catalog.models import CatalogProduct

        try:
            rows = list(
                CatalogProduct.objects.filter(
                    product_id__in=list(product_ids),
                ).values_list("product_id", "kind")
            )
        except DatabaseError as exc:
            raise CatalogPersistenceError(f"Could not read product kinds: {exc}") from exc
        return {pid: ProductKind(kind) for pid, kind in rows}

    def plan_duration(self, product_id: int) -> Optional[int]:
        from django.db import DatabaseError

        from engines.catalog.models import CatalogProduct

        try:
            return (
                CatalogProduct.objects.filter(product_id=product_id)
                .values_list("plan_duration_days", flat=True)
                .first()
            )
        except DatabaseError as exc:
            raise CatalogPersistenceError(
                f"Could not read plan duration for product {product_id}: {exc}"
            ) from exc

    def put(self, product: Product) -> None:
        from django.db import DatabaseError

        from engines.catalog.models import CatalogProduct

        try:
            CatalogProduct.from_product(product).save()
        except DatabaseError as exc:
            raise CatalogPersistenceError(
                f"Could not save product {product.product_id}: {exc}"
            ) from exc


class DbSiteDirectory:
    """Sites from the `GymSite` table, falling back to DEFAULT_SITES when empty."""

    def list_sites(self) -> List[Site]:
        from django.db import DatabaseError

        from engines.catalog.models import GymSite

        try:
            rows = [row.to_site() for row in GymSite.objects.order_by("site_id")]
        except DatabaseError as exc:
            raise CatalogPersistenceError(f"Could not read sites: {exc}") from exc
        return rows or list(DEFAULT_SITES)

    def get(self, site_id: int) -> Optional[Site]:
        for site in self.list_sites():
            if site.site_id == site_id:
                return site
        return None
