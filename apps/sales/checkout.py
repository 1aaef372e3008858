"""
Checkout engine.

Turns a cart into a recorded Transaction:
- Each cart line is checked and reserved with a single conditional UPDATE
  (stock = stock - q WHERE stock >= q), so two concurrent checkouts can never
  both take the last unit
- Lines for unknown products or with too little stock are skipped and
  reported back per line instead of failing the sale
- Stock decrements and the ledger write share one database transaction, so a
  failed ledger write leaves every product's stock untouched
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction
from django.db.models import F

from apps.core.exceptions import EmptyCartError, StorageError, ValidationError
from apps.inventory.models import Product

from .ledger import TransactionLedger
from .models import Transaction

logger = logging.getLogger(__name__)

ACCEPTED = "accepted"
SKIPPED = "skipped"

NOT_FOUND = "not_found"
INSUFFICIENT_STOCK = "insufficient_stock"


@dataclass
class CartLine:
    """One requested product/quantity pair."""

    product_id: str
    quantity: int


@dataclass
class LineOutcome:
    """What happened to one cart line."""

    product_id: str
    quantity: int
    status: str
    reason: Optional[str] = None
    item: Optional[dict] = None

    @property
    def accepted(self):
        return self.status == ACCEPTED


@dataclass
class CheckoutResult:
    """The recorded transaction plus one outcome per cart line, in cart order."""

    transaction: Transaction
    lines: List[LineOutcome] = field(default_factory=list)

    @property
    def skipped(self):
        return [line for line in self.lines if not line.accepted]


def snapshot(product: Product, quantity: int) -> dict:
    """Copy the sale-time name and price of ``product`` into a line item."""
    return {
        "product_name": product.name,
        "unit_price": product.unit_price,
        "quantity": quantity,
        "subtotal": product.unit_price * quantity,
    }


class CheckoutService:
    """
    Runs checkouts against the catalog and the ledger.

    Args:
        using: Database alias for catalog updates and the ledger write
        ledger: Ledger to record into (defaults to one on the same alias)
    """

    def __init__(self, using="default", ledger: Optional[TransactionLedger] = None):
        self.using = using
        self.ledger = ledger or TransactionLedger(using=using)

    def _validate_cart(self, cart):
        if not cart:
            raise EmptyCartError()

        errors = []
        for index, line in enumerate(cart):
            if isinstance(line.quantity, bool) or not isinstance(line.quantity, int):
                errors.append(f"Line {index}: quantity must be an integer.")
            elif line.quantity < 1:
                errors.append(f"Line {index}: quantity must be at least 1.")
        if errors:
            raise ValidationError({"items": errors})

    def _find_product(self, product_id) -> Optional[Product]:
        try:
            return Product.objects.using(self.using).filter(pk=product_id).first()
        except (DjangoValidationError, ValueError):
            return None

    def _reserve(self, line: CartLine) -> LineOutcome:
        """Decrement stock for one line if enough is available."""
        product = self._find_product(line.product_id)
        if product is None:
            return LineOutcome(line.product_id, line.quantity, SKIPPED, NOT_FOUND)

        updated = (
            Product.objects.using(self.using)
            .filter(pk=product.pk, stock__gte=line.quantity)
            .update(stock=F("stock") - line.quantity)
        )
        if updated == 0:
            return LineOutcome(line.product_id, line.quantity, SKIPPED, INSUFFICIENT_STOCK)

        # Row is locked by the UPDATE until commit; snapshot what was actually sold.
        product = Product.objects.using(self.using).only("name", "unit_price").get(pk=product.pk)

        return LineOutcome(
            line.product_id,
            line.quantity,
            ACCEPTED,
            item=snapshot(product, line.quantity),
        )

    def checkout(
        self,
        cart: List[CartLine],
        tendered_amount: Optional[Decimal] = None,
        payment_method: Optional[str] = None,
    ) -> CheckoutResult:
        """
        Sell the available lines of ``cart`` and record the sale.

        Args:
            cart: Ordered cart lines
            tendered_amount: Cash handed over; change_due is computed from it
                and may be negative
            payment_method: Defaults to CASH when tendered_amount is given,
                otherwise OTHER

        Returns:
            CheckoutResult with the new Transaction and per-line outcomes

        Raises:
            EmptyCartError: If the cart is empty or None
            ValidationError: If a quantity is not a positive integer or the
                tendered amount is negative
            StorageError: If the database fails; nothing is committed
        """
        self._validate_cart(cart)

        if tendered_amount is not None and tendered_amount < 0:
            raise ValidationError({"tendered_amount": ["Must be zero or greater."]})
        if payment_method is None:
            payment_method = Transaction.CASH if tendered_amount is not None else Transaction.OTHER
        if payment_method not in dict(Transaction.PAYMENT_METHOD_CHOICES):
            raise ValidationError({"payment_method": [f"Unknown payment method {payment_method}."]})

        try:
            with transaction.atomic(using=self.using):
                lines = [self._reserve(line) for line in cart]
                items = [line.item for line in lines if line.accepted]

                total_amount = sum((item["subtotal"] for item in items), Decimal("0.00"))
                change_due = None
                if tendered_amount is not None:
                    change_due = tendered_amount - total_amount

                sale = self.ledger.record(
                    items,
                    total_amount,
                    tendered_amount=tendered_amount,
                    change_due=change_due,
                    payment_method=payment_method,
                )
        except DatabaseError as e:
            logger.error(f"Checkout failed, nothing committed: {e}", exc_info=True)
            raise StorageError(f"Checkout failed: {e}") from e

        result = CheckoutResult(transaction=sale, lines=lines)
        for line in result.skipped:
            logger.warning(
                f"Checkout {sale.id}: skipped product {line.product_id} "
                f"x{line.quantity} ({line.reason})"
            )
        logger.info(
            f"Checkout {sale.id} completed: total={total_amount} "
            f"accepted={len(items)} skipped={len(result.skipped)}"
        )
        return result

    def preview(self, cart: List[CartLine]) -> List[LineOutcome]:
        """
        Report which lines would be accepted right now, without changing stock.

        Repeated products in the cart draw down the same remaining stock, the
        way a real checkout would.
        """
        self._validate_cart(cart)

        remaining = {}
        outcomes = []
        try:
            for line in cart:
                product = self._find_product(line.product_id)
                if product is None:
                    outcomes.append(LineOutcome(line.product_id, line.quantity, SKIPPED, NOT_FOUND))
                    continue

                available = remaining.get(product.pk, product.stock)
                if available < line.quantity:
                    outcomes.append(
                        LineOutcome(line.product_id, line.quantity, SKIPPED, INSUFFICIENT_STOCK)
                    )
                    continue

                remaining[product.pk] = available - line.quantity
                outcomes.append(
                    LineOutcome(
                        line.product_id,
                        line.quantity,
                        ACCEPTED,
                        item=snapshot(product, line.quantity),
                    )
                )
        except DatabaseError as e:
            raise StorageError(f"Checkout preview failed: {e}") from e

        return outcomes
