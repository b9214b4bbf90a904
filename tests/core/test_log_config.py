"""Tests for the request logging middleware."""

import logging
from unittest.mock import patch

import pytest

from tests.utils.helpers import create_auth_headers


@pytest.fixture
def http_records(caplog):
    caplog.set_level(logging.INFO, logger="http")

    def collect() -> list[dict]:
        # structlog hands the event dict to stdlib logging as the record message
        return [r.msg for r in caplog.records if r.name == "http" and isinstance(r.msg, dict)]

    return collect


class TestRequestLogging:
    def test_successful_request_logged(self, test_client, http_records):
        response = test_client.get("/", headers={"X-Request-ID": "req-123"})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "req-123"
        record = http_records()[-1]
        assert record["event"] == "request"
        assert record["status"] == 200
        assert record["method"] == "GET"
        assert record["path"] == "/"
        assert record["request_id"] == "req-123"
        assert record["duration_ms"] >= 0

    def test_request_id_generated_when_absent(self, test_client, http_records):
        response = test_client.get("/")

        assert len(response.headers["X-Request-ID"]) == 32
        assert http_records()[-1]["request_id"] == response.headers["X-Request-ID"]

    def test_rejected_request_logged_with_status(self, test_client, http_records):
        response = test_client.get("/api/v1/admin/analytics")

        assert response.status_code == 401
        assert http_records()[-1]["status"] == 401

    def test_crashing_request_logged_as_500(self, test_client, test_admin_token, http_records):
        with patch(
            "lms_api.admin.routes.admin_analytics.AnalyticsService.get_analytics",
            side_effect=RuntimeError("aggregation exploded"),
        ):
            response = test_client.get(
                "/api/v1/admin/analytics", headers=create_auth_headers(test_admin_token)
            )

        assert response.status_code == 500
        failed = [r for r in http_records() if r["status"] == 500]
        assert len(failed) == 1
        assert failed[0]["path"] == "/api/v1/admin/analytics"
        assert failed[0]["error"] == "RuntimeError: aggregation exploded"
        assert failed[0]["level"] == "error"
