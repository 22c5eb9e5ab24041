"""
Static routes, 404 contract and CORS behaviour of the assembled app.
"""

from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from conftest import FRONTEND_ORIGIN


def _parse_iso(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_root_returns_welcome_payload(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "message": "Welcome to the Family Chores API",
        "version": "1.0.0",
    }


def test_root_ignores_request_headers_and_body(client: TestClient) -> None:
    resp = client.request(
        "GET",
        "/",
        headers={"Accept": "text/html", "X-Custom": "anything", "Content-Type": "application/json"},
        content=b'{"ignored": true}',
    )
    assert resp.status_code == 200
    assert resp.json()["version"] == "1.0.0"


def test_health_returns_iso_timestamp(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["message"] == "Chores API is running!"
    parsed = _parse_iso(data["timestamp"])
    assert parsed.tzinfo is not None
    assert data["timestamp"].endswith("Z")


def test_health_timestamps_do_not_decrease(client: TestClient) -> None:
    first = _parse_iso(client.get("/health").json()["timestamp"])
    second = _parse_iso(client.get("/health").json()["timestamp"])
    assert second >= first


@pytest.mark.parametrize("method, path", [
    ("GET", "/api/chores"),
    ("GET", "/healthz"),
    ("GET", "/health/"),
    ("POST", "/health"),
    ("DELETE", "/"),
    ("PUT", "/health"),
    ("GET", "/docs"),
    ("GET", "/openapi.json"),
])
def test_undefined_routes_return_404(client: TestClient, method: str, path: str) -> None:
    resp = client.request(method, path, follow_redirects=False)
    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Not found"


def test_404_body_echoes_path(client: TestClient) -> None:
    assert client.get("/api/children").json()["path"] == "/api/children"


def test_cors_reflects_configured_origin(client: TestClient) -> None:
    resp = client.get("/health", headers={"Origin": FRONTEND_ORIGIN})
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == FRONTEND_ORIGIN
    assert resp.headers["access-control-allow-credentials"] == "true"


def test_cors_omits_header_for_other_origins(client: TestClient) -> None:
    resp = client.get("/health", headers={"Origin": "http://evil.example.com"})
    assert resp.status_code == 200
    assert "access-control-allow-origin" not in resp.headers


def test_cors_preflight_for_configured_origin(client: TestClient) -> None:
    resp = client.options(
        "/health",
        headers={
            "Origin": FRONTEND_ORIGIN,
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "content-type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == FRONTEND_ORIGIN
    assert resp.headers["access-control-allow-credentials"] == "true"


def test_cors_preflight_rejects_other_origins(client: TestClient) -> None:
    resp = client.options(
        "/health",
        headers={"Origin": "http://evil.example.com", "Access-Control-Request-Method": "GET"},
    )
    assert resp.status_code == 400
    assert "access-control-allow-origin" not in resp.headers


def test_unhandled_errors_become_json_500(app) -> None:
    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get("/boom")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal server error"}
