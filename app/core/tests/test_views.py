"""
Tests for core infrastructure views.

This module tests:
- health_check: database and cache probes
- service_error_response: failed ServiceResult to DRF response
"""

from django.db import DatabaseError

from core.services import ErrorCode, ServiceResult
from core.views import service_error_response


class TestHealthCheck:
    URL = "/health/"

    def test_healthy(self, client, db):
        response = client.get(self.URL)

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "database": "connected",
            "cache": "connected",
        }

    def test_database_down_is_503(self, client, db, mocker):
        mocker.patch("core.views.connection.cursor", side_effect=DatabaseError("down"))

        response = client.get(self.URL)

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"

    def test_cache_down_still_healthy(self, client, db, mocker):
        mocker.patch("core.views.cache.set", side_effect=ConnectionError("no cache"))

        response = client.get(self.URL)

        assert response.status_code == 200
        assert response.json()["cache"] == "disconnected"


class TestServiceErrorResponse:
    def test_uses_result_status_and_body(self):
        result = ServiceResult.failure("Not a participant", error_code=ErrorCode.FORBIDDEN)

        response = service_error_response(result)

        assert response.status_code == 403
        assert response.data == {
            "error": "Not a participant",
            "error_code": ErrorCode.FORBIDDEN,
        }
