"""
URL configuration for reporting app.
"""

from django.urls import path

from . import views

app_name = "reporting"

urlpatterns = [
    path("admin/laporan", views.sales_report, name="sales_report"),
    path("admin/export-excel", views.export_excel, name="export_excel"),
]
