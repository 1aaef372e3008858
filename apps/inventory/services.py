"""
Catalog maintenance services.

Thin create/update/delete/list operations over Product. Field validation is
delegated to ProductSerializer; failures surface as apps.core.exceptions.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction

from apps.core.exceptions import NotFoundError, StorageError, ValidationError

from .models import Product
from .serializers import ProductSerializer

logger = logging.getLogger(__name__)


def _plain_errors(errors):
    """Flatten DRF ErrorDetail values into plain strings."""
    return {field: [str(message) for message in messages] for field, messages in errors.items()}


class CatalogService:
    """
    Product catalog maintenance.

    Args:
        using: Database alias to run queries against
    """

    def __init__(self, using="default"):
        self.using = using

    def _queryset(self):
        return Product.objects.using(self.using)

    def list_all(self):
        """Return every product, ordered by name."""
        try:
            return list(self._queryset().all())
        except DatabaseError as e:
            raise StorageError(f"Could not list products: {e}") from e

    def list_available(self):
        """Return products with at least one unit in stock."""
        try:
            return list(self._queryset().filter(stock__gt=0))
        except DatabaseError as e:
            raise StorageError(f"Could not list products: {e}") from e

    def get_product(self, product_id) -> Product:
        """
        Fetch a single product.

        Raises:
            NotFoundError: If no product has this id (or the id is malformed)
        """
        try:
            return self._queryset().get(pk=product_id)
        except (Product.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(f"Product {product_id} not found.")
        except DatabaseError as e:
            raise StorageError(f"Could not load product {product_id}: {e}") from e

    def create_product(self, fields) -> Product:
        """
        Create a product from raw request fields.

        Args:
            fields: Mapping with name, unit_price, stock and optional category

        Returns:
            The saved Product

        Raises:
            ValidationError: If any field is missing or out of range
        """
        serializer = ProductSerializer(data=fields)
        if not serializer.is_valid():
            raise ValidationError(_plain_errors(serializer.errors))

        try:
            with transaction.atomic(using=self.using):
                product = self._queryset().create(**serializer.validated_data)
        except DatabaseError as e:
            raise StorageError(f"Could not create product: {e}") from e

        logger.info(f"Product created: {product.id} {product.name} stock={product.stock}")
        return product

    def update_product(self, product_id, fields) -> Product:
        """
        Update the given fields of an existing product.

        Stock given here replaces the current count outright.
        """
        product = self.get_product(product_id)

        serializer = ProductSerializer(product, data=fields, partial=True)
        if not serializer.is_valid():
            raise ValidationError(_plain_errors(serializer.errors))

        for attr, value in serializer.validated_data.items():
            setattr(product, attr, value)

        try:
            with transaction.atomic(using=self.using):
                product.save(using=self.using)
        except DatabaseError as e:
            raise StorageError(f"Could not update product {product_id}: {e}") from e

        logger.info(f"Product updated: {product.id} fields={sorted(serializer.validated_data)}")
        return product

    def delete_product(self, product_id):
        """Delete a product. Past transactions keep their own copy of it."""
        product = self.get_product(product_id)

        try:
            with transaction.atomic(using=self.using):
                product.delete(using=self.using)
        except DatabaseError as e:
            raise StorageError(f"Could not delete product {product_id}: {e}") from e

        logger.info(f"Product deleted: {product_id}")
