"""
Views for sales reports and the Excel export.
"""

import logging

from django.http import HttpResponse

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.exceptions import PosError, error_response_data
from apps.sales.ledger import TransactionLedger
from apps.sales.serializers import TransactionSerializer

from .services import SalesExcelExporter, SalesReportAggregator

logger = logging.getLogger(__name__)


def _totals_data(totals):
    return {"total": str(totals.total), "count": totals.count}


@api_view(["GET"])
def sales_report(request):
    """
    Sales report: today's and this month's totals plus the latest transactions.

    Response:
    {
        "as_of": "2024-05-01T10:00:00+07:00",
        "daily": {"total": "120000.00", "count": 4},
        "monthly": {"total": "980000.00", "count": 31},
        "history": [<transaction>, ...]
    }
    """
    try:
        summary = SalesReportAggregator().summary()
    except PosError as e:
        logger.error(f"Sales report failed: {e}", exc_info=True)
        return Response(error_response_data(e), status=e.status_code)

    return Response(
        {
            "as_of": summary.as_of.isoformat(),
            "daily": _totals_data(summary.daily),
            "monthly": _totals_data(summary.monthly),
            "history": TransactionSerializer(summary.history, many=True).data,
        },
        status=status.HTTP_200_OK,
    )


@api_view(["GET"])
def export_excel(request):
    """Download every transaction, newest first, as Laporan_Penjualan.xlsx."""
    try:
        transactions = TransactionLedger().newest_first()
    except PosError as e:
        logger.error(f"Excel export failed: {e}", exc_info=True)
        return Response(error_response_data(e), status=e.status_code)

    exporter = SalesExcelExporter()
    response = HttpResponse(exporter.export(transactions), content_type=exporter.CONTENT_TYPE)
    response["Content-Disposition"] = f'attachment; filename="{exporter.FILENAME}"'
    return response
