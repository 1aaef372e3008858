"""
Reporting services for the point-of-sale ledger.

- Daily and monthly sales totals
- Recent transaction history
- Excel export of the ledger
"""

import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from django.conf import settings
from django.db import DatabaseError
from django.db.models import Count, Sum
from django.utils import timezone

import openpyxl
from openpyxl.styles import Font, PatternFill

from apps.core.exceptions import StorageError
from apps.sales.ledger import TransactionLedger
from apps.sales.models import Transaction

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


@dataclass
class SalesTotals:
    """Sum and count of transactions in a period."""

    total: Decimal = Decimal("0.00")
    count: int = 0


@dataclass
class SalesSummary:
    """Everything the sales report screen shows."""

    as_of: datetime
    daily: SalesTotals
    monthly: SalesTotals
    history: List[Transaction] = field(default_factory=list)


def start_of_day(as_of: datetime) -> datetime:
    """
    Local midnight of the day containing ``as_of``.

    A naive ``as_of`` is taken to be in the current time zone.
    """
    if timezone.is_naive(as_of):
        as_of = timezone.make_aware(as_of)
    return timezone.localtime(as_of).replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_month(as_of: datetime) -> datetime:
    """Local midnight of the first day of the month containing ``as_of``."""
    return start_of_day(as_of).replace(day=1)


class SalesReportAggregator:
    """
    Read-only aggregates over the transaction ledger.

    Args:
        using: Database alias to read from
    """

    def __init__(self, using="default"):
        self.using = using
        self.ledger = TransactionLedger(using=using)

    def _totals_since(self, start: datetime) -> SalesTotals:
        try:
            result = (
                Transaction.objects.using(self.using)
                .filter(created_at__gte=start)
                .aggregate(total=Sum("total_amount"), count=Count("id"))
            )
        except DatabaseError as e:
            raise StorageError(f"Could not aggregate sales: {e}") from e

        return SalesTotals(
            total=(result["total"] or Decimal("0")).quantize(CENTS),
            count=result["count"] or 0,
        )

    def daily_totals(self, as_of: Optional[datetime] = None) -> SalesTotals:
        """Totals for transactions since local midnight of ``as_of`` (default now)."""
        return self._totals_since(start_of_day(as_of or timezone.now()))

    def monthly_totals(self, as_of: Optional[datetime] = None) -> SalesTotals:
        """Totals for transactions since the first of the month of ``as_of``."""
        return self._totals_since(start_of_month(as_of or timezone.now()))

    def recent_history(self, limit: int) -> List[Transaction]:
        """The ``limit`` most recent transactions, newest first."""
        return self.ledger.newest_first(limit=limit)

    def summary(self, as_of: Optional[datetime] = None, history_limit: Optional[int] = None):
        """
        Build the sales report: today, this month and the latest transactions.

        Args:
            as_of: Reference time (default now)
            history_limit: How many recent transactions to include
                (default settings.POS_REPORT_HISTORY_LIMIT)

        Returns:
            SalesSummary
        """
        as_of = as_of or timezone.now()
        if history_limit is None:
            history_limit = settings.POS_REPORT_HISTORY_LIMIT

        return SalesSummary(
            as_of=as_of,
            daily=self.daily_totals(as_of),
            monthly=self.monthly_totals(as_of),
            history=self.recent_history(history_limit),
        )


class SalesExcelExporter:
    """
    Export transactions to an Excel workbook using openpyxl.

    One row per transaction: id, local timestamp, items sold as
    "name (xqty)" joined by ", ", and the total.
    """

    SHEET_TITLE = "Laporan Penjualan"
    FILENAME = "Laporan_Penjualan.xlsx"
    CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    TIMESTAMP_FORMAT = "%d/%m/%Y %H.%M.%S"

    COLUMNS = [
        ("ID Transaksi", 25),
        ("Tanggal", 20),
        ("Produk Terjual", 40),
        ("Total Bayar", 15),
    ]

    def export(self, transactions: Iterable[Transaction]) -> bytes:
        """
        Build the workbook and return it as .xlsx bytes.

        Args:
            transactions: Transactions in the order they should appear

        Returns:
            The serialized workbook
        """
        workbook = openpyxl.Workbook()
        worksheet = workbook.active
        worksheet.title = self.SHEET_TITLE

        self._add_excel_headers(worksheet)
        row_count = self._add_excel_data(worksheet, transactions)

        buffer = io.BytesIO()
        workbook.save(buffer)
        logger.info(f"Exported {row_count} transactions to Excel")
        return buffer.getvalue()

    def _add_excel_headers(self, worksheet):
        """Add the bold, shaded header row and fix column widths."""
        for col, (header, width) in enumerate(self.COLUMNS, 1):
            cell = worksheet.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True)
            cell.fill = PatternFill(start_color="CCCCCC", end_color="CCCCCC", fill_type="solid")
            worksheet.column_dimensions[cell.column_letter].width = width

    def _add_excel_data(self, worksheet, transactions) -> int:
        """Add one row per transaction. Returns the number of rows written."""
        row_idx = 1
        for row_idx, sale in enumerate(transactions, 2):
            values = [
                str(sale.id),
                self.format_timestamp(sale.created_at),
                self.describe_items(sale),
                sale.total_amount,
            ]
            for col_idx, value in enumerate(values, 1):
                worksheet.cell(row=row_idx, column=col_idx, value=value)
        return row_idx - 1

    def format_timestamp(self, value: datetime) -> str:
        return timezone.localtime(value).strftime(self.TIMESTAMP_FORMAT)

    def describe_items(self, sale: Transaction) -> str:
        return ", ".join(f"{item.product_name} (x{item.quantity})" for item in sale.items.all())
