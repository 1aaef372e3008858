"""
Sales models for the point-of-sale ledger.

A Transaction is written once per successful checkout and never updated.
Its TransactionItem rows are snapshots of product name and price at sale
time, with no link back to the catalog.
"""

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class Transaction(models.Model):
    """
    Completed sale recorded in the ledger.

    total_amount always equals the sum of the item subtotals. change_due is
    tendered_amount minus total_amount and may be negative; it is only set
    when a tendered amount was given.
    """

    # Payment method choices
    CASH = "CASH"
    CARD = "CARD"
    OTHER = "OTHER"

    PAYMENT_METHOD_CHOICES = [
        (CASH, "Cash"),
        (CARD, "Card"),
        (OTHER, "Other"),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the transaction",
    )

    # Financial details
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Sum of all line item subtotals",
    )

    tendered_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Amount handed over by the customer (cash payments only)",
    )

    change_due = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Tendered amount minus total; negative when underpaid",
    )

    payment_method = models.CharField(
        max_length=20,
        choices=PAYMENT_METHOD_CHOICES,
        default=OTHER,
        help_text="How the customer paid",
    )

    created_at = models.DateTimeField(
        default=timezone.now,
        editable=False,
        db_index=True,
        help_text="When the sale was completed",
    )

    class Meta:
        db_table = "sales_transactions"
        ordering = ["-created_at"]
        verbose_name = "Transaction"
        verbose_name_plural = "Transactions"

    def __str__(self):
        return f"{self.id} - {self.total_amount}"


class TransactionItem(models.Model):
    """
    Snapshot of one accepted cart line.

    product_name and unit_price are copied from the Product at sale time.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the line item",
    )

    transaction = models.ForeignKey(
        Transaction,
        on_delete=models.CASCADE,
        related_name="items",
        help_text="Transaction this line belongs to",
    )

    position = models.PositiveIntegerField(
        help_text="Zero-based order of the line within the transaction",
    )

    product_name = models.CharField(
        max_length=200,
        help_text="Product name at time of sale",
    )

    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Unit price at time of sale",
    )

    quantity = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Units sold",
    )

    subtotal = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="unit_price x quantity",
    )

    class Meta:
        db_table = "sales_transaction_items"
        ordering = ["transaction", "position"]
        verbose_name = "Transaction Item"
        verbose_name_plural = "Transaction Items"
        unique_together = [["transaction", "position"]]

    def __str__(self):
        return f"{self.product_name} (x{self.quantity})"
