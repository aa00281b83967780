"""Tests for health endpoint."""

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from folio import __version__
from folio.config import AppConfig, DatabaseConfig
from folio.web.api import create_app
from folio.web.routes import health as health_module


def failing_ping():
    raise OperationalError("SELECT 1", {}, Exception("could not connect to server"))


class TestHealthEndpoint:
    """Tests for GET /api/health."""

    def test_healthy(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == __version__
        assert data["database"]["status"] == "connected"
        assert data["database"]["response_time_ms"] is not None
        assert "T" in data["timestamp"]

    def test_environment_flags(self, client):
        env = client.get("/api/health").json()["environment"]
        assert env["environment"] == "test"
        assert env["has_database_url"] is True
        assert env["has_supabase_url"] is False
        assert env["has_supabase_key"] is False

    def test_database_down(self, client, monkeypatch):
        monkeypatch.setattr(health_module, "ping", failing_ping)
        response = client.get("/api/health")
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["database"]["status"] == "error"
        assert "could not connect" in data["database"]["error"]

    def test_error_hidden_in_production(self, db_url, monkeypatch):
        monkeypatch.setattr(health_module, "ping", failing_ping)
        config = AppConfig(environment="production", database=DatabaseConfig(url=db_url))
        response = TestClient(create_app(config)).get("/api/health")
        assert response.status_code == 503
        assert response.json()["database"]["error"] is None
