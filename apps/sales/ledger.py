"""
Append-only transaction ledger.

The ledger only ever inserts Transactions; there is no update or delete path.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction

from apps.core.exceptions import NotFoundError, StorageError

from .models import Transaction, TransactionItem

logger = logging.getLogger(__name__)


class TransactionLedger:
    """
    Reads and appends Transaction records.

    Args:
        using: Database alias to run queries against
    """

    def __init__(self, using="default"):
        self.using = using

    def _queryset(self):
        return Transaction.objects.using(self.using).prefetch_related("items")

    def record(
        self,
        items: List[dict],
        total_amount: Decimal,
        tendered_amount: Optional[Decimal] = None,
        change_due: Optional[Decimal] = None,
        payment_method: str = Transaction.OTHER,
    ) -> Transaction:
        """
        Append one Transaction with its line item snapshots.

        Args:
            items: Dicts with product_name, unit_price, quantity and subtotal,
                in cart order
            total_amount: Sum of the item subtotals
            tendered_amount: Amount paid, if any
            change_due: tendered_amount - total_amount, if tendered
            payment_method: One of Transaction.PAYMENT_METHOD_CHOICES

        Returns:
            The saved Transaction

        Raises:
            StorageError: If the insert fails
        """
        try:
            with transaction.atomic(using=self.using):
                sale = Transaction.objects.using(self.using).create(
                    total_amount=total_amount,
                    tendered_amount=tendered_amount,
                    change_due=change_due,
                    payment_method=payment_method,
                )
                TransactionItem.objects.using(self.using).bulk_create(
                    [
                        TransactionItem(transaction=sale, position=position, **item)
                        for position, item in enumerate(items)
                    ]
                )
        except DatabaseError as e:
            logger.error(f"Ledger write failed: {e}", exc_info=True)
            raise StorageError(f"Could not record transaction: {e}") from e

        return sale

    def get(self, transaction_id) -> Transaction:
        """
        Fetch one Transaction with its items.

        Raises:
            NotFoundError: If no transaction has this id (or the id is malformed)
        """
        try:
            return self._queryset().get(pk=transaction_id)
        except (Transaction.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(f"Transaction {transaction_id} not found.")
        except DatabaseError as e:
            raise StorageError(f"Could not load transaction {transaction_id}: {e}") from e

    def newest_first(self, limit: Optional[int] = None) -> List[Transaction]:
        """Return transactions ordered by created_at descending, optionally capped."""
        queryset = self._queryset().order_by("-created_at")
        if limit is not None:
            queryset = queryset[:limit]
        try:
            return list(queryset)
        except DatabaseError as e:
            raise StorageError(f"Could not list transactions: {e}") from e
