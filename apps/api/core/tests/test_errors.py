"""Tests for RFC 7807 error handling."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from apps.api.core.errors import (
    AuthenticationError,
    ParseError,
    ValidationError,
    register_error_handlers,
)


class _Payload(BaseModel):
    text: str


@pytest.fixture
def error_app():
    """Create a test app with error handlers registered."""
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/test/parse")
    async def raise_parse():
        raise ParseError()

    @app.get("/test/validation")
    async def raise_validation():
        raise ValidationError("Transaction text must be between 5 and 10000 characters")

    @app.get("/test/auth")
    async def raise_auth():
        raise AuthenticationError()

    @app.post("/test/body")
    async def echo(payload: _Payload):
        return {"text": payload.text}

    @app.get("/test/unhandled")
    async def raise_unhandled():
        raise RuntimeError("Unexpected crash")

    return app


@pytest.fixture
def client(error_app):
    return TestClient(error_app, raise_server_exceptions=False)


class TestRFC7807ErrorFormat:
    """All errors should return RFC 7807 Problem Details format."""

    def test_parse_error_returns_400(self, client):
        response = client.get("/test/parse")
        assert response.status_code == 400
        body = response.json()
        assert body["type"] == "parse-error"
        assert body["title"] == "Bad Request"
        assert body["detail"] == "Could not extract any transactions from the provided text"
        assert body["instance"] == "/test/parse"

    def test_validation_error_returns_rfc7807(self, client):
        response = client.get("/test/validation")
        assert response.status_code == 422
        body = response.json()
        assert body["title"] == "Unprocessable Entity"
        assert "between 5 and 10000" in body["detail"]

    def test_request_body_validation_returns_rfc7807(self, client):
        response = client.post("/test/body", json={})
        assert response.status_code == 422
        body = response.json()
        assert body["status"] == 422
        assert body["detail"].startswith("text:")

    def test_auth_error_returns_rfc7807(self, client):
        response = client.get("/test/auth")
        assert response.status_code == 401
        assert response.json()["title"] == "Unauthorized"

    def test_unknown_route_returns_rfc7807(self, client):
        response = client.get("/test/missing")
        assert response.status_code == 404
        assert response.json()["title"] == "Not Found"

    def test_unhandled_error_returns_rfc7807(self, client):
        response = client.get("/test/unhandled")
        assert response.status_code == 500
        body = response.json()
        assert body["title"] == "Internal Server Error"
        assert body["detail"] == "An unexpected error occurred"
