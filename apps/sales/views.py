"""
Views for checkout and receipts.
"""

import logging
from decimal import Decimal

from django.urls import reverse

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.exceptions import PosError, error_response_data

from .checkout import CheckoutService
from .ledger import TransactionLedger
from .serializers import CheckoutRequestSerializer, LineOutcomeSerializer, TransactionSerializer

logger = logging.getLogger(__name__)


def _error_response(exc: PosError) -> Response:
    if exc.status_code >= 500:
        logger.error(f"Sales operation failed: {exc}", exc_info=True)
    return Response(error_response_data(exc), status=exc.status_code)


@api_view(["POST"])
def checkout(request):
    """
    Sell a cart and record the transaction.

    Request body:
    {
        "items": [{"product_id": "uuid", "quantity": 2}],
        "tendered_amount": "50000" (optional, cash payments),
        "payment_method": "CASH|CARD|OTHER" (optional)
    }

    Response (201):
    {
        "transaction_id": "uuid",
        "receipt_url": "/struk/<uuid>",
        "total_amount": "20.00",
        "change_due": "30.00",
        "lines": [{"product_id": "...", "status": "accepted|skipped", "reason": ..., "item": ...}]
    }

    Lines for unknown or sold-out products are skipped, not rejected; the
    ``lines`` list says which.
    """
    serializer = CheckoutRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        result = CheckoutService().checkout(
            serializer.get_cart(),
            tendered_amount=serializer.validated_data.get("tendered_amount"),
            payment_method=serializer.validated_data.get("payment_method"),
        )
    except PosError as e:
        return _error_response(e)

    sale = result.transaction
    return Response(
        {
            "transaction_id": str(sale.id),
            "receipt_url": reverse("sales:receipt", args=[sale.id]),
            "total_amount": str(sale.total_amount),
            "change_due": None if sale.change_due is None else str(sale.change_due),
            "lines": LineOutcomeSerializer(result.lines, many=True).data,
        },
        status=status.HTTP_201_CREATED,
    )


@api_view(["POST"])
def checkout_preview(request):
    """
    Check availability for a cart without selling anything.

    Takes the same body as checkout and returns per-line outcomes plus the
    total the sale would come to.
    """
    serializer = CheckoutRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        lines = CheckoutService().preview(serializer.get_cart())
    except PosError as e:
        return _error_response(e)

    total_amount = sum((line.item["subtotal"] for line in lines if line.accepted), Decimal("0.00"))
    return Response(
        {
            "valid": all(line.accepted for line in lines),
            "total_amount": str(total_amount),
            "lines": LineOutcomeSerializer(lines, many=True).data,
        },
        status=status.HTTP_200_OK,
    )


@api_view(["GET"])
def receipt(request, transaction_id):
    """Return one transaction for receipt display."""
    try:
        sale = TransactionLedger().get(transaction_id)
    except PosError as e:
        return _error_response(e)

    return Response(TransactionSerializer(sale).data, status=status.HTTP_200_OK)
