from unittest.mock import patch

from django.db import DatabaseError


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert "services" in data

    def test_health_check_reports_database_status(self, client):
        response = client.get("/health")
        data = response.json()
        assert data["services"]["database"]["status"] == "up"
        assert "response_time_ms" in data["services"]["database"]

    def test_health_check_reports_application_status(self, client):
        data = client.get("/health").json()
        assert data["services"]["application"]["status"] == "up"

    def test_healthcheck_status_alias(self, client):
        response = client.get("/api/healthcheck/status")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_database_down_returns_503(self, client):
        with patch(
            "modules.core.views._check_database",
            side_effect=DatabaseError("connection refused"),
        ):
            response = client.get("/health")
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["services"]["database"]["status"] == "down"
