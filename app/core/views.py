"""
Core views providing infrastructure endpoints.

Views here are not part of the messaging domain but are needed by the
deployment: container health checks and load balancer probes. It also
holds the shared translation from failed service results to DRF responses.
"""

import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    Returns:
        JsonResponse with status and component health:
        - status: "healthy" or "unhealthy"
        - database: "connected" or "disconnected"
        - cache: "connected" or "disconnected"

    HTTP Status Codes:
        200: Database reachable (cache problems only degrade)
        503: Database unreachable
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
        "cache": "unknown",
    }
    is_healthy = True

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["database"] = "connected"
    except DatabaseError:
        logger.exception("Health check could not reach the database")
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"
        is_healthy = False

    # Cache is used for throttling only; failures degrade but stay healthy
    try:
        cache.set("health_check", "ok", timeout=1)
        cache_ok = cache.get("health_check") == "ok"
    except Exception:
        logger.warning("Health check could not reach the cache", exc_info=True)
        cache_ok = False
    health_status["cache"] = "connected" if cache_ok else "disconnected"

    status_code = 200 if is_healthy else 503
    return JsonResponse(health_status, status=status_code)


def service_error_response(result):
    """
    Build the DRF error response for a failed ServiceResult.

    Body is {"error", "error_code"}; status follows core.services.ERROR_STATUS.

    Example:
        result = MessageService.send(conversation_id, self.caller, text)
        if not result.success:
            return service_error_response(result)
    """
    return Response(result.to_response(), status=result.http_status)
