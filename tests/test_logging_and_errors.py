"""Tests for logging and error handling."""

import pytest
from fastapi import APIRouter

from parkmeter.core.errors import (
    AppError,
    ConflictError,
    ErrorResponse,
    NotFoundError,
    StoreError,
    ValidationError,
)
from parkmeter.core.logging import get_request_id, set_request_id
from parkmeter.core.sentry import _drop_plate_values, init_sentry


class TestErrorClasses:
    """Test custom exception classes."""

    def test_validation_error_creates_correct_response(self):
        """Test ValidationError converts to proper response."""
        exc = ValidationError("plate is required", details={"field": "plate"})

        assert exc.code == "VALIDATION_ERROR"
        assert exc.status_code == 400
        assert exc.details == {"field": "plate"}

        response = exc.to_response()
        assert isinstance(response, ErrorResponse)
        assert response.model_dump() == {"success": False, "error": "plate is required"}

    def test_not_found_error(self):
        exc = NotFoundError("No active parking session found for this plate", details={"plate": "ABC123"})

        assert exc.code == "NOT_FOUND"
        assert exc.status_code == 404
        assert exc.details["plate"] == "ABC123"

    def test_conflict_error(self):
        exc = ConflictError("Parking session was modified concurrently, please retry")

        assert exc.code == "CONFLICT"
        assert exc.status_code == 409
        assert exc.details == {}

    def test_store_error_is_server_error(self):
        exc = StoreError("Store update failed: OperationalError")

        assert isinstance(exc, AppError)
        assert exc.status_code == 500
        assert str(exc) == "Store update failed: OperationalError"


class TestRequestIDContext:
    """Test request ID injection."""

    def test_set_and_get_request_id(self):
        set_request_id("test-request-123")

        assert get_request_id() == "test-request-123"


class TestSentry:
    """Test Sentry setup without a DSN."""

    def test_disabled_without_dsn(self, monkeypatch):
        monkeypatch.delenv("SENTRY_DSN", raising=False)

        assert init_sentry() is False

    def test_placeholder_dsn_is_ignored(self, monkeypatch):
        monkeypatch.setenv("SENTRY_DSN", "xxx")

        assert init_sentry() is False

    def test_plate_values_dropped_from_events(self):
        event = {"extra": {"plate": "ABC123", "request_plate": "ABC123", "attempt": 2}}

        assert _drop_plate_values(event, {})["extra"] == {"attempt": 2}


class TestErrorHandling:
    """Test global error handlers and middleware."""

    @pytest.mark.asyncio
    async def test_request_id_header_in_response(self, client):
        """Test X-Request-ID header is echoed back."""
        response = await client.get("/health", headers={"X-Request-ID": "external-123"})

        assert response.headers.get("X-Request-ID") == "external-123"

    @pytest.mark.asyncio
    async def test_request_id_generated_when_missing(self, client):
        response = await client.get("/health")

        assert len(response.headers["X-Request-ID"]) > 0

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_envelope(self, client):
        response = await client.get("/api/parking/nothing/here")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Not Found"}

    @pytest.mark.asyncio
    async def test_wrong_method_uses_error_envelope(self, client):
        response = await client.delete("/api/parking/active")

        assert response.status_code == 405
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_unhandled_exception_hides_details(self):
        from httpx import ASGITransport, AsyncClient

        from parkmeter.main import create_app

        app = create_app()
        router = APIRouter()

        @router.get("/boom")
        async def boom():
            raise RuntimeError("secret internals")

        app.include_router(router)

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal server error"}
