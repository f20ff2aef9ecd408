"""
Tests for application wiring: settings, docs, middleware.
"""
import pytest
from pydantic import ValidationError

from car_api.config import Settings


class TestSettings:
    def test_secret_is_required(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "from-env-secret-key-for-the-car-api")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("PERSISTENCE_FAIL_CLOSED", "true")
        settings = Settings(_env_file=None)
        assert settings.jwt_secret == "from-env-secret-key-for-the-car-api"
        assert settings.port == 8080
        assert settings.persistence_fail_closed is True

    def test_defaults(self):
        settings = Settings(jwt_secret="x", _env_file=None)
        assert settings.port == 5000
        assert settings.access_token_expire_minutes == 60
        assert settings.bcrypt_rounds == 10
        assert settings.persistence_fail_closed is False


class TestApplication:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/api-docs"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy", "version": "1.0.0"}

    def test_docs_served_at_api_docs(self, client):
        assert client.get("/api-docs").status_code == 200

    def test_openapi_declares_bearer_scheme(self, client):
        schema = client.get("/openapi.json").json()
        schemes = schema["components"]["securitySchemes"]
        assert any(s["type"] == "http" and s["scheme"] == "bearer" for s in schemes.values())

    def test_process_time_header(self, client):
        response = client.get("/health")
        assert float(response.headers["X-Process-Time"]) >= 0

    def test_claims_attached_to_request_state(self, app, client, auth_headers):
        from fastapi import Depends, Request

        from car_api.dependencies import get_current_user

        @app.get("/whoami")
        def whoami(request: Request, claims=Depends(get_current_user)):
            return {"state": request.state.user.username, "claims": claims.username}

        response = client.get("/whoami", headers=auth_headers)
        assert response.json() == {"state": "alice", "claims": "alice"}
