"""
Health check views for monitoring and deployment verification.

Used by load balancers, container liveness/readiness probes and uptime checks.
"""

import logging

from django.conf import settings
from django.db import connection
from django.http import JsonResponse
from django.urls import path
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_GET

logger = logging.getLogger(__name__)


@never_cache
@require_GET
def health_check(request) -> JsonResponse:
    """
    Health check endpoint with a database probe.

    Returns 200 when the database answers, 503 otherwise.

    Returns:
        JsonResponse: {"status": "healthy", "version": "1.0.0", "checks": {...}}
    """
    health_status = {
        "status": "healthy",
        "version": getattr(settings, "VERSION", "1.0.0"),
        "checks": {},
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful",
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {str(e)}",
        }
        return JsonResponse(health_status, status=503)

    return JsonResponse(health_status)


@require_GET
def liveness_probe(request) -> JsonResponse:
    """Liveness probe: the process is up. Never touches the database."""
    return JsonResponse({"status": "alive"})


# URL patterns for health check endpoints
urlpatterns = [
    path("", health_check, name="health"),
    path("live/", liveness_probe, name="liveness"),
]
