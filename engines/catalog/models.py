"""
GymTastic Catalog - Persistent Products & Sites
================================================
Local mirror of the remote catalog, used by the ORM-backed checkout.
"""

from __future__ import annotations

from django.db import models

from engines.catalog.domain import Product, ProductKind, Site


class ProductKindChoice(models.TextChoices):
    PLAN = "PLAN", "Plan"
    MERCH = "MERCH", "Merchandise"


class CatalogProduct(models.Model):
    product_id = models.IntegerField(primary_key=True)
    name = models.CharField(max_length=255)
    price = models.PositiveIntegerField()
    kind = models.CharField(
        max_length=10,
        choices=ProductKindChoice.choices,
    )
    plan_duration_days = models.PositiveIntegerField(null=True, blank=True)
    description = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "gym_products"
        ordering = ["product_id"]

    def __str__(self) -> str:
        return f"{self.product_id} {self.name} ({self.kind})"

    def to_product(self) -> Product:
        return Product(
            product_id=self.product_id,
            name=self.name,
            price=self.price,
            kind=ProductKind(self.kind),
            plan_duration_days=self.plan_duration_days,
            description=self.description,
        )

    @classmethod
    def from_product(cls, product: Product) -> "CatalogProduct":
        return cls(
            product_id=product.product_id,
            name=product.name,
            price=product.price,
            kind=product.kind.value,
            plan_duration_days=product.plan_duration_days,
            description=product.description,
        )


class GymSite(models.Model):
    site_id = models.IntegerField(primary_key=True)
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=255, blank=True, default="")
    lat = models.FloatField()
    lng = models.FloatField()

    class Meta:
        db_table = "gym_sites"
        ordering = ["site_id"]

    def __str__(self) -> str:
        return self.name

    def to_site(self) -> Site:
        return Site(
            site_id=self.site_id,
            name=self.name,
            address=self.address,
            lat=self.lat,
            lng=self.lng,
        )
