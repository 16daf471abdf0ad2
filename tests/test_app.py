"""
Tests for configuration and service-level endpoints.
"""
import pytest
from pydantic import ValidationError

from footprint_api.config import Settings
from footprint_api.limiter import limiter


class TestSettings:
    def test_api_key_required(self, monkeypatch):
        monkeypatch.delenv("CLIMATIQ_API_KEY", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_blank_api_key_rejected(self, monkeypatch):
        monkeypatch.setenv("CLIMATIQ_API_KEY", "   ")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("CLIMATIQ_API_KEY", "key")
        monkeypatch.delenv("CLIMATIQ_API_URL", raising=False)
        monkeypatch.delenv("PROVIDER_TIMEOUT", raising=False)
        settings = Settings(_env_file=None)
        assert settings.climatiq_api_url == "https://api.climatiq.io/estimate"
        assert 5 <= settings.provider_timeout <= 10
        assert settings.default_user_id == "default-user"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CLIMATIQ_API_KEY", "key")
        monkeypatch.setenv("PROVIDER_TIMEOUT", "3.5")
        monkeypatch.setenv("PORT", "8080")
        settings = Settings(_env_file=None)
        assert settings.provider_timeout == 3.5
        assert settings.port == 8080


class TestServiceEndpoints:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "OK"

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"

    def test_unknown_route(self, client):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_request_headers(self, client):
        response = client.get("/")
        assert "X-Process-Time" in response.headers
        assert "X-Request-ID" in response.headers


class TestRateLimiting:
    @pytest.fixture
    def limited(self):
        limiter.reset()
        limiter.enabled = True
        yield
        limiter.enabled = False
        limiter.reset()

    def test_limit_exceeded_uses_error_shape(self, client, limited):
        payload = {"activityType": "food", "foodType": "grains", "quantity": 1}
        for _ in range(200):
            response = client.post("/api/emissions/calculate", json=payload)
            if response.status_code == 429:
                break

        assert response.status_code == 429
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "RATE_LIMITED"
        assert body["error"].startswith("Rate limit exceeded")
        assert body["details"] is None
        assert body["timestamp"].endswith("Z")
