"""
URL configuration for the Kasir point-of-sale application.
"""

from django.urls import include, path

urlpatterns = [
    path("health/", include("apps.core.health")),  # Liveness and database checks
    path("", include("apps.sales.urls")),
    path("", include("apps.reporting.urls")),
    path("", include("apps.inventory.urls")),
    path("", include("django_prometheus.urls")),  # Prometheus metrics endpoint at /metrics
]
