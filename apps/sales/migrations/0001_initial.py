import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Transaction",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the transaction",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "total_amount",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Sum of all line item subtotals",
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "tendered_amount",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Amount handed over by the customer (cash payments only)",
                        max_digits=12,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "change_due",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Tendered amount minus total; negative when underpaid",
                        max_digits=12,
                        null=True,
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        choices=[("CASH", "Cash"), ("CARD", "Card"), ("OTHER", "Other")],
                        default="OTHER",
                        help_text="How the customer paid",
                        max_length=20,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        editable=False,
                        help_text="When the sale was completed",
                    ),
                ),
            ],
            options={
                "verbose_name": "Transaction",
                "verbose_name_plural": "Transactions",
                "db_table": "sales_transactions",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="TransactionItem",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the line item",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "position",
                    models.PositiveIntegerField(
                        help_text="Zero-based order of the line within the transaction",
                    ),
                ),
                (
                    "product_name",
                    models.CharField(
                        help_text="Product name at time of sale",
                        max_length=200,
                    ),
                ),
                (
                    "unit_price",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Unit price at time of sale",
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        help_text="Units sold",
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                (
                    "subtotal",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="unit_price x quantity",
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "transaction",
                    models.ForeignKey(
                        help_text="Transaction this line belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="sales.transaction",
                    ),
                ),
            ],
            options={
                "verbose_name": "Transaction Item",
                "verbose_name_plural": "Transaction Items",
                "db_table": "sales_transaction_items",
                "ordering": ["transaction", "position"],
                "unique_together": {("transaction", "position")},
            },
        ),
    ]
