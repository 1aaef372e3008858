"""
Views for the product catalog.

The cashier screen lists products that can be sold; the admin screens list
every product and create, update or delete them.
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.exceptions import PosError, ValidationError, error_response_data

from .serializers import ProductListSerializer, ProductSerializer
from .services import CatalogService

logger = logging.getLogger(__name__)


def _error_response(exc: PosError) -> Response:
    if exc.status_code >= 500:
        logger.error(f"Catalog operation failed: {exc}", exc_info=True)
    return Response(error_response_data(exc), status=exc.status_code)


def _require_id(request):
    product_id = request.data.get("id")
    if not product_id:
        raise ValidationError({"id": ["This field is required."]})
    return product_id


@api_view(["GET"])
def product_list_available(request):
    """
    List products with stock remaining, for the cashier screen.

    Response:
    {
        "products": [{"id": "uuid", "name": "...", "unit_price": "10.00", "stock": 5, ...}]
    }
    """
    try:
        products = CatalogService().list_available()
    except PosError as e:
        return _error_response(e)

    serializer = ProductListSerializer(products, many=True)
    return Response({"products": serializer.data}, status=status.HTTP_200_OK)


@api_view(["GET"])
def product_list_all(request):
    """List every product, including sold-out ones, for the admin screen."""
    try:
        products = CatalogService().list_all()
    except PosError as e:
        return _error_response(e)

    serializer = ProductSerializer(products, many=True)
    return Response({"products": serializer.data}, status=status.HTTP_200_OK)


@api_view(["POST"])
def product_create(request):
    """
    Create a product.

    Request body (JSON or form):
    {
        "name": "Kopi Susu",
        "unit_price": "12000",
        "stock": 10,
        "category": "Minuman" (optional)
    }
    """
    try:
        product = CatalogService().create_product(request.data)
    except PosError as e:
        return _error_response(e)

    return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


@api_view(["POST"])
def product_update(request):
    """Update a product. The body carries ``id`` plus the fields to change."""
    try:
        product_id = _require_id(request)
        fields = {key: value for key, value in request.data.items() if key != "id"}
        product = CatalogService().update_product(product_id, fields)
    except PosError as e:
        return _error_response(e)

    return Response(ProductSerializer(product).data, status=status.HTTP_200_OK)


@api_view(["POST"])
def product_delete(request):
    """Delete the product named by ``id`` in the body."""
    try:
        product_id = _require_id(request)
        CatalogService().delete_product(product_id)
    except PosError as e:
        return _error_response(e)

    return Response({"deleted": str(product_id)}, status=status.HTTP_200_OK)
