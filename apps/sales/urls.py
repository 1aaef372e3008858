"""
URL configuration for sales app.
"""

from django.urls import path

from . import views

app_name = "sales"

urlpatterns = [
    # Checkout ("transaksi" is kept for older cashier clients)
    path("checkout", views.checkout, name="checkout"),
    path("transaksi", views.checkout, name="checkout_legacy"),
    path("checkout/preview", views.checkout_preview, name="checkout_preview"),
    # Receipts
    path("struk/<str:transaction_id>", views.receipt, name="receipt"),
]
