"""
URL configuration for inventory app.
"""

from django.urls import path

from . import views

app_name = "inventory"

urlpatterns = [
    # Cashier screen
    path("", views.product_list_available, name="product_list_available"),
    # Admin catalog maintenance
    path("admin", views.product_list_all, name="product_list_all"),
    path("admin/add-product", views.product_create, name="product_create"),
    path("admin/update-product", views.product_update, name="product_update"),
    path("admin/delete-product", views.product_delete, name="product_delete"),
]
