import uuid
from decimal import Decimal

import django.core.validators
from django.db import migrations, models

import apps.inventory.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the product",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        help_text="Product name shown to the cashier and on receipts",
                        max_length=200,
                    ),
                ),
                (
                    "unit_price",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Selling price per unit",
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "stock",
                    models.IntegerField(
                        default=0,
                        help_text="Units currently available for sale",
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        default=apps.inventory.models.default_category,
                        help_text="Free-form category label",
                        max_length=100,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        help_text="When the product was added to the catalog",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="When the product was last updated",
                    ),
                ),
            ],
            options={
                "verbose_name": "Product",
                "verbose_name_plural": "Products",
                "db_table": "inventory_products",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["stock"], name="product_stock_idx"),
                    models.Index(fields=["category"], name="product_category_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        check=models.Q(stock__gte=0),
                        name="product_stock_non_negative",
                    ),
                ],
            },
        ),
    ]
