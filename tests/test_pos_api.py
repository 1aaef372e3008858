"""
Tests for the HTTP surface.

Covers the cashier product list, checkout (both paths), receipts, the admin
catalog screens, the sales report, the Excel download and health checks.
"""

import io
import uuid
from decimal import Decimal
from unittest import mock

from django.urls import reverse

import openpyxl
import pytest

from apps.core.exceptions import StorageError
from apps.inventory.models import Product
from apps.sales.models import Transaction


@pytest.mark.django_db
class TestProductListViews:
    """Test the cashier and admin product lists."""

    def test_cashier_list_only_available(self, api_client, product_a, product_b):
        response = api_client.get("/")

        assert response.status_code == 200
        products = response.json()["products"]
        assert [p["name"] for p in products] == ["Product A"]
        assert products[0]["unit_price"] == "10.00"

    def test_admin_list_all(self, api_client, product_a, product_b):
        response = api_client.get(reverse("inventory:product_list_all"))

        assert response.status_code == 200
        assert [p["name"] for p in response.json()["products"]] == ["Product A", "Product B"]

    def test_storage_error_returns_500(self, api_client):
        with mock.patch(
            "apps.inventory.views.CatalogService.list_available",
            side_effect=StorageError("database unavailable"),
        ):
            response = api_client.get("/")

        assert response.status_code == 500
        assert response.json()["detail"] == "database unavailable"


@pytest.mark.django_db
class TestCheckoutView:
    """Test POST /checkout and /transaksi."""

    def test_checkout_creates_transaction(self, api_client, product_a, product_b):
        response = api_client.post(
            "/checkout",
            {
                "items": [
                    {"product_id": str(product_a.id), "quantity": 2},
                    {"product_id": str(product_b.id), "quantity": 1},
                ],
                "tendered_amount": "50.00",
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["total_amount"] == "20.00"
        assert data["change_due"] == "30.00"
        assert data["receipt_url"] == f"/struk/{data['transaction_id']}"
        assert [line["status"] for line in data["lines"]] == ["accepted", "skipped"]
        assert data["lines"][0]["item"]["subtotal"] == "20.00"
        assert data["lines"][1]["reason"] == "insufficient_stock"
        assert data["lines"][1]["item"] is None

        product_a.refresh_from_db()
        assert product_a.stock == 3

    def test_legacy_path(self, api_client, product_a):
        response = api_client.post(
            "/transaksi",
            {"items": [{"product_id": str(product_a.id), "quantity": "1"}]},
            format="json",
        )

        assert response.status_code == 201
        assert Transaction.objects.count() == 1

    @pytest.mark.parametrize("body", [{}, {"items": []}])
    def test_empty_cart_returns_400(self, api_client, body):
        response = api_client.post("/checkout", body, format="json")

        assert response.status_code == 400
        assert response.json()["detail"] == "Cart is empty."
        assert Transaction.objects.count() == 0

    def test_malformed_quantity_returns_400(self, api_client, product_a):
        response = api_client.post(
            "/checkout",
            {"items": [{"product_id": str(product_a.id), "quantity": "two"}]},
            format="json",
        )

        assert response.status_code == 400
        assert "items" in response.json()

    def test_storage_error_returns_500(self, api_client, product_a):
        with mock.patch(
            "apps.sales.views.CheckoutService.checkout",
            side_effect=StorageError("Checkout failed: disk full"),
        ):
            response = api_client.post(
                "/checkout",
                {"items": [{"product_id": str(product_a.id), "quantity": 1}]},
                format="json",
            )

        assert response.status_code == 500

    def test_preview(self, api_client, product_a, product_b):
        response = api_client.post(
            reverse("sales:checkout_preview"),
            {
                "items": [
                    {"product_id": str(product_a.id), "quantity": 2},
                    {"product_id": str(product_b.id), "quantity": 1},
                ]
            },
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["total_amount"] == "20.00"
        product_a.refresh_from_db()
        assert product_a.stock == 5


@pytest.mark.django_db
class TestReceiptView:
    """Test GET /struk/<id>."""

    def test_receipt(self, api_client, product_a):
        checkout = api_client.post(
            "/checkout",
            {"items": [{"product_id": str(product_a.id), "quantity": 2}], "tendered_amount": 15},
            format="json",
        ).json()

        response = api_client.get(checkout["receipt_url"])

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == checkout["transaction_id"]
        assert data["total_amount"] == "20.00"
        assert data["change_due"] == "-5.00"
        assert data["payment_method"] == "CASH"
        assert data["items"] == [
            {
                "position": 0,
                "product_name": "Product A",
                "unit_price": "10.00",
                "quantity": 2,
                "subtotal": "20.00",
            }
        ]

    def test_unknown_receipt_returns_404(self, api_client):
        response = api_client.get(f"/struk/{uuid.uuid4()}")

        assert response.status_code == 404

    def test_malformed_receipt_id_returns_404(self, api_client):
        response = api_client.get("/struk/not-a-uuid")

        assert response.status_code == 404


@pytest.mark.django_db
class TestAdminProductViews:
    """Test the admin add/update/delete endpoints."""

    def test_add_product_form_encoded(self, api_client):
        response = api_client.post(
            "/admin/add-product", {"name": "Kopi", "unit_price": "12000", "stock": "10"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["category"] == "Uncategorized"
        assert Product.objects.get(id=data["id"]).stock == 10

    def test_add_product_validation_error(self, api_client):
        response = api_client.post(
            "/admin/add-product", {"name": "", "unit_price": "-5", "stock": 1}, format="json"
        )

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert "name" in errors
        assert "unit_price" in errors

    def test_update_product(self, api_client, product_a):
        response = api_client.post(
            "/admin/update-product",
            {"id": str(product_a.id), "stock": 0, "category": "Makanan"},
            format="json",
        )

        assert response.status_code == 200
        product_a.refresh_from_db()
        assert product_a.stock == 0
        assert product_a.category == "Makanan"

    def test_update_requires_id(self, api_client):
        response = api_client.post("/admin/update-product", {"stock": 1}, format="json")

        assert response.status_code == 400
        assert "id" in response.json()["errors"]

    def test_update_unknown_product(self, api_client):
        response = api_client.post(
            "/admin/update-product", {"id": str(uuid.uuid4()), "stock": 1}, format="json"
        )

        assert response.status_code == 404

    def test_delete_product(self, api_client, product_a):
        response = api_client.post(
            "/admin/delete-product", {"id": str(product_a.id)}, format="json"
        )

        assert response.status_code == 200
        assert not Product.objects.exists()

    def test_delete_storage_error_returns_500(self, api_client, product_a):
        with mock.patch(
            "apps.inventory.views.CatalogService.delete_product",
            side_effect=StorageError("database unavailable"),
        ):
            response = api_client.post(
                "/admin/delete-product", {"id": str(product_a.id)}, format="json"
            )

        assert response.status_code == 500


@pytest.mark.django_db
class TestReportViews:
    """Test the sales report and Excel download."""

    def test_sales_report(self, api_client, product_a):
        api_client.post(
            "/checkout",
            {"items": [{"product_id": str(product_a.id), "quantity": 2}]},
            format="json",
        )

        response = api_client.get("/admin/laporan")

        assert response.status_code == 200
        data = response.json()
        assert data["daily"] == {"total": "20.00", "count": 1}
        assert data["monthly"] == {"total": "20.00", "count": 1}
        assert len(data["history"]) == 1

    def test_sales_report_empty(self, api_client):
        data = api_client.get("/admin/laporan").json()

        assert data["daily"] == {"total": "0.00", "count": 0}
        assert data["history"] == []

    def test_export_excel(self, api_client, product_a):
        api_client.post(
            "/checkout",
            {"items": [{"product_id": str(product_a.id), "quantity": 1}]},
            format="json",
        )

        response = api_client.get("/admin/export-excel")

        assert response.status_code == 200
        assert 'filename="Laporan_Penjualan.xlsx"' in response["Content-Disposition"]
        sheet = openpyxl.load_workbook(io.BytesIO(response.content)).active
        assert sheet["C2"].value == "Product A (x1)"
        assert Decimal(str(sheet["D2"].value)) == Decimal("10")


@pytest.mark.django_db
class TestHealthCheck:
    """Test the health endpoints."""

    def test_health(self, client):
        response = client.get("/health/")

        assert response.status_code == 200
        assert response.json()["checks"]["database"]["status"] == "healthy"

    def test_liveness(self, client):
        response = client.get("/health/live/")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}
