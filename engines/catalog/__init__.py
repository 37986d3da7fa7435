"""
GymTastic Catalog — Public API
================================
Products, sites, and the conversions at the catalog boundary.
"""

from engines.catalog.convert import (
    cart_line_for,
    product_from_dict,
    product_to_dict,
    site_from_dict,
    site_to_dict,
    stock_from_dict,
)
from engines.catalog.domain import DEFAULT_SITES, Product, ProductKind, Site
from engines.catalog.providers import (
    DbProductCatalog,
    DbSiteDirectory,
    InMemoryProductCatalog,
    InMemorySiteDirectory,
    ProductCatalog,
    SiteDirectory,
)

__all__ = [
    "Product",
    "ProductKind",
    "Site",
    "DEFAULT_SITES",
    "ProductCatalog",
    "SiteDirectory",
    "InMemoryProductCatalog",
    "InMemorySiteDirectory",
    "DbProductCatalog",
    "DbSiteDirectory",
    "product_from_dict",
    "product_to_dict",
    "stock_from_dict",
    "site_from_dict",
    "site_to_dict",
    "cart_line_for",
]
