"""
Inventory models for the point-of-sale catalog.

A Product is a sellable item with a unit price and a stock count. Stock is
decremented by checkout and set directly by catalog maintenance; it never
drops below zero.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


def default_category():
    """Category assigned to products created without one."""
    return settings.POS_DEFAULT_CATEGORY


class Product(models.Model):
    """
    Sellable catalog item.

    Line items on completed transactions copy the name and price at sale
    time, so editing or deleting a Product never changes sales history.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the product",
    )

    name = models.CharField(
        max_length=200,
        help_text="Product name shown to the cashier and on receipts",
    )

    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Selling price per unit",
    )

    stock = models.IntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Units currently available for sale",
    )

    category = models.CharField(
        max_length=100,
        default=default_category,
        help_text="Free-form category label",
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the product was added to the catalog",
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the product was last updated",
    )

    class Meta:
        db_table = "inventory_products"
        ordering = ["name"]
        verbose_name = "Product"
        verbose_name_plural = "Products"
        indexes = [
            models.Index(fields=["stock"], name="product_stock_idx"),
            models.Index(fields=["category"], name="product_category_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                check=models.Q(stock__gte=0),
                name="product_stock_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.stock} in stock)"
