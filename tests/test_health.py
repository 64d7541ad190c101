# tests/test_health.py
from __future__ import annotations

from homepro.middleware.request_id import accept_request_id


def test_health_ok(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert "timestamp" in body


def test_request_id_is_echoed(client):
    r = client.get("/api/health", headers={"X-Request-ID": "req-123"})
    assert r.headers.get("X-Request-ID") == "req-123"


def test_unsafe_request_id_is_replaced(client):
    r = client.get("/api/health", headers={"X-Request-ID": "bad id with spaces"})
    rid = r.headers.get("X-Request-ID")
    assert rid and rid != "bad id with spaces"
    assert len(rid) == 32


def test_accept_request_id():
    assert accept_request_id(" abc-123 ") == "abc-123"
    assert accept_request_id("x" * 200) != "x" * 200
    assert len(accept_request_id(None)) == 32


def test_unknown_route_uses_the_error_envelope(client):
    r = client.get("/api/no-such-thing")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}
