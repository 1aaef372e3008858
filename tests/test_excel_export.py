"""
Tests for the Excel sales export.
"""

import io
from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import openpyxl
import pytest

from apps.reporting.services import SalesExcelExporter
from apps.sales.checkout import CartLine, CheckoutService
from apps.sales.ledger import TransactionLedger
from apps.sales.models import Transaction


def load(data):
    return openpyxl.load_workbook(io.BytesIO(data)).active


@pytest.mark.django_db
class TestSalesExcelExporter:
    """Test SalesExcelExporter.export."""

    def test_headers_and_layout(self):
        sheet = load(SalesExcelExporter().export([]))

        assert sheet.title == "Laporan Penjualan"
        assert [cell.value for cell in sheet[1]] == [
            "ID Transaksi",
            "Tanggal",
            "Produk Terjual",
            "Total Bayar",
        ]
        assert sheet["A1"].font.bold
        assert sheet.column_dimensions["A"].width == 25
        assert sheet.column_dimensions["B"].width == 20
        assert sheet.column_dimensions["C"].width == 40
        assert sheet.column_dimensions["D"].width == 15
        assert sheet.max_row == 1

    def test_rows_newest_first(self, make_product):
        kopi = make_product("Kopi", price="10.00", stock=10)
        roti = make_product("Roti", price="4.50", stock=10)
        service = CheckoutService()
        first = service.checkout([CartLine(str(kopi.id), 1)]).transaction
        second = service.checkout(
            [CartLine(str(kopi.id), 2), CartLine(str(roti.id), 1)]
        ).transaction
        Transaction.objects.filter(pk=first.pk).update(
            created_at=datetime(2024, 5, 1, 9, 0, tzinfo=ZoneInfo("Asia/Jakarta"))
        )
        Transaction.objects.filter(pk=second.pk).update(
            created_at=datetime(2024, 5, 2, 14, 5, 9, tzinfo=ZoneInfo("Asia/Jakarta"))
        )

        sheet = load(SalesExcelExporter().export(TransactionLedger().newest_first()))

        rows = [[cell.value for cell in row] for row in sheet.iter_rows(min_row=2)]
        assert rows == [
            [str(second.id), "02/05/2024 14.05.09", "Kopi (x2), Roti (x1)", 24.5],
            [str(first.id), "01/05/2024 09.00.00", "Kopi (x1)", 10],
        ]

    def test_timestamp_in_local_time(self):
        sale = Transaction(
            total_amount=Decimal("1.00"),
            created_at=datetime(2024, 5, 14, 20, 0, 0, tzinfo=ZoneInfo("UTC")),
        )

        assert SalesExcelExporter().format_timestamp(sale.created_at) == "15/05/2024 03.00.00"
