from __future__ import annotations

from types import SimpleNamespace

from fastapi.testclient import TestClient

from app import main as app_main

BROWSER_ORIGIN = "https://play.example.com"


def _client(monkeypatch, *, origins: list[str]) -> TestClient:
    settings = SimpleNamespace(log_level="INFO", app_env="test", cors_allowed_origin_list=origins)
    monkeypatch.setattr(app_main, "get_settings", lambda: settings)
    return TestClient(app_main.create_app())


def _preflight(client: TestClient, path: str, *, origin: str = BROWSER_ORIGIN):
    return client.options(
        path,
        headers={
            "Origin": origin,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, content-type, x-client-info, apikey",
        },
    )


def test_preflight_for_browser_endpoints_is_answered(monkeypatch) -> None:
    client = _client(monkeypatch, origins=["*"])

    for path in ("/entitlements/check", "/admin/progress/reset"):
        response = _preflight(client, path)
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        allowed_headers = response.headers["access-control-allow-headers"].lower()
        assert "authorization" in allowed_headers
        assert "x-client-info" in allowed_headers
        assert "POST" in response.headers["access-control-allow-methods"]


def test_error_responses_carry_cors_headers(monkeypatch) -> None:
    client = _client(monkeypatch, origins=["*"])

    response = client.post("/entitlements/check", json={}, headers={"Origin": BROWSER_ORIGIN})

    assert response.status_code == 401
    assert response.headers["access-control-allow-origin"] == "*"


def test_preflight_from_unlisted_origin_is_refused(monkeypatch) -> None:
    client = _client(monkeypatch, origins=[BROWSER_ORIGIN])

    allowed = _preflight(client, "/entitlements/check")
    refused = _preflight(client, "/entitlements/check", origin="https://evil.example.com")

    assert allowed.status_code == 200
    assert allowed.headers["access-control-allow-origin"] == BROWSER_ORIGIN
    assert refused.status_code == 400
    assert "access-control-allow-origin" not in refused.headers
