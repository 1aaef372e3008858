"""
Serializers for the product catalog.
"""

from decimal import Decimal

from django.conf import settings

from rest_framework import serializers

from .models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read/write serializer for catalog maintenance."""

    unit_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.00")
    )
    stock = serializers.IntegerField(min_value=0)
    category = serializers.CharField(max_length=100, required=False, allow_blank=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "unit_price",
            "stock",
            "category",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_name(self, value):
        """Reject names that are empty once whitespace is removed."""
        if not value.strip():
            raise serializers.ValidationError("Name may not be blank.")
        return value.strip()

    def validate_category(self, value):
        """Fall back to the default category when none is given."""
        return value.strip() or settings.POS_DEFAULT_CATEGORY


class ProductListSerializer(serializers.ModelSerializer):
    """Compact serializer for the cashier's product list."""

    class Meta:
        model = Product
        fields = ["id", "name", "unit_price", "stock", "category"]
