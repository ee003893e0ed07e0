"""Integration tests for app wiring: health, request IDs, error envelope and startup."""

import logging

import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient

from authorflow import main as main_module
from authorflow.config import Backend, Settings
from authorflow.main import create_app
from authorflow.services.container import Services


class TestHealthAPI:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["environment"] == "test"
        assert "timestamp" in data

    def test_health_needs_no_auth(self, client, invalid_user_headers):
        assert client.get("/api/health", headers=invalid_user_headers).status_code == 200

    def test_custom_prefix(self):
        settings = Settings(backend=Backend.MEMORY, api_prefix="/v1", _env_file=None)
        with TestClient(create_app(settings, Services.in_memory())) as client:
            assert client.get("/v1/health").status_code == 200
            assert client.get("/api/health").status_code == 404


class TestRequestID:
    def test_generated(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Request-ID"]

    def test_incoming_reused(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_error_body_carries_request_id(self, client):
        response = client.get("/api/projects", headers={"X-Request-ID": "req-456"})
        assert response.status_code == 401
        assert response.json()["request_id"] == "req-456"


class TestErrorEnvelope:
    def test_unhandled_exception(self, settings, services):
        app = create_app(settings, services)
        router = APIRouter()

        @router.get("/boom")
        async def boom():
            raise RuntimeError("kaput")

        app.include_router(router, prefix="/api")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/boom")
            traced = client.get("/api/boom", headers={"X-Request-ID": "req-789"})

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["code"] == "INTERNAL_ERROR"
        assert "kaput" not in data["message"]
        assert response.headers["X-Request-ID"] == data["request_id"]

        assert traced.status_code == 500
        assert traced.headers["X-Request-ID"] == "req-789"
        assert traced.json()["request_id"] == "req-789"

    def test_store_failure_hides_details(self, client, store, free_user_headers, monkeypatch):
        from authorflow.errors.exceptions import StoreError

        async def broken(*args, **kwargs):
            raise StoreError("connection refused to 10.0.0.5")

        monkeypatch.setattr(store, "list_for_owner", broken)

        response = client.get("/api/projects", headers=free_user_headers)

        assert response.status_code == 500
        data = response.json()
        assert data["code"] == "STORE_ERROR"
        assert "10.0.0.5" not in data["message"]


class TestStartup:
    def test_missing_credentials_exit(self, monkeypatch, caplog):
        for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "SUPABASE_SERVICE_KEY"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(backend=Backend.SUPABASE, _env_file=None)
        monkeypatch.setattr(main_module, "get_settings", lambda: settings)

        with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc_info:
            main_module.main()

        assert exc_info.value.code == 1
        assert "Missing Supabase credentials" in caplog.text

    def test_memory_backend_built_in_lifespan(self):
        settings = Settings(backend=Backend.MEMORY, _env_file=None)
        app = create_app(settings)
        with TestClient(app) as client:
            assert isinstance(app.state.services, Services)
            assert client.get("/api/tiers").status_code == 200
        assert app.state.services is None
