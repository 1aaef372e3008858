"""
Serializers for checkout requests, receipts and ledger listings.
"""

from decimal import Decimal

from rest_framework import serializers

from .checkout import CartLine
from .models import Transaction, TransactionItem


class CartLineSerializer(serializers.Serializer):
    """One cart line as submitted by the cashier screen."""

    product_id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1)


class CheckoutRequestSerializer(serializers.Serializer):
    """
    Checkout request body.

    A missing or empty ``items`` list is passed through so the checkout
    engine can reject it as an empty cart.
    """

    items = CartLineSerializer(many=True, required=False)
    tendered_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
        allow_null=True,
    )
    payment_method = serializers.ChoiceField(
        choices=Transaction.PAYMENT_METHOD_CHOICES, required=False, allow_null=True
    )

    def get_cart(self):
        """Build CartLine objects from validated data."""
        return [CartLine(**line) for line in self.validated_data.get("items", [])]


class LineItemSnapshotSerializer(serializers.Serializer):
    """Sale-time copy of a product on an accepted line."""

    product_name = serializers.CharField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField()
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class LineOutcomeSerializer(serializers.Serializer):
    """Per-line checkout result."""

    product_id = serializers.CharField()
    quantity = serializers.IntegerField()
    status = serializers.CharField()
    reason = serializers.CharField(allow_null=True)
    item = LineItemSnapshotSerializer(allow_null=True)


class TransactionItemSerializer(serializers.ModelSerializer):
    """Serializer for a stored line item."""

    class Meta:
        model = TransactionItem
        fields = ["position", "product_name", "unit_price", "quantity", "subtotal"]


class TransactionSerializer(serializers.ModelSerializer):
    """Serializer for a recorded transaction, as shown on a receipt."""

    items = TransactionItemSerializer(many=True, read_only=True)
    payment_method_display = serializers.CharField(
        source="get_payment_method_display", read_only=True
    )

    class Meta:
        model = Transaction
        fields = [
            "id",
            "items",
            "total_amount",
            "tendered_amount",
            "change_due",
            "payment_method",
            "payment_method_display",
            "created_at",
        ]
        read_only_fields = fields
