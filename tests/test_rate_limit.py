# tests/test_rate_limit.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from homepro.middleware.rate_limit import RateLimiter, RateLimitMiddleware, RateLimitResult


def test_fixed_window_counts_hits_per_key():
    rl = RateLimiter(limit=3, window_seconds=60)

    results = [rl.hit("1.2.3.4") for _ in range(4)]
    assert [r.ok for r in results] == [True, True, True, False]
    assert results[0].remaining == 2
    assert results[3].remaining == 0
    assert 0 < results[3].retry_after() <= 60


def test_keys_are_independent():
    rl = RateLimiter(limit=1, window_seconds=60)
    assert rl.hit("a").ok
    assert not rl.hit("a").ok
    assert rl.hit("b").ok


def test_reset_clears_every_window():
    rl = RateLimiter(limit=1, window_seconds=60)
    rl.hit("a")
    assert not rl.hit("a").ok

    rl.reset()
    assert rl.hit("a").ok


def test_sub_second_windows_round_up_to_one_second():
    assert RateLimiter(limit=5, window_seconds=0.2).window_seconds == 1


def test_retry_after_rounds_up_and_never_goes_negative():
    r = RateLimitResult(ok=False, limit=1, remaining=0, reset_at=100.2)
    assert r.retry_after(now=90.0) == 11
    assert r.retry_after(now=200.0) == 0


def _app(limiter: RateLimiter) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, limiter=limiter)

    @app.get("/api/things")
    def things():
        return {"ok": True}

    @app.get("/api/health")
    def health():
        return {"ok": True}

    return app


def test_middleware_returns_429_with_headers():
    client = TestClient(_app(RateLimiter(limit=2, window_seconds=60)))
    h = {"x-forwarded-for": "9.9.9.9, 10.0.0.1"}

    r1 = client.get("/api/things", headers=h)
    assert r1.status_code == 200
    assert r1.headers["X-RateLimit-Limit"] == "2"
    assert r1.headers["X-RateLimit-Remaining"] == "1"

    client.get("/api/things", headers=h)
    r3 = client.get("/api/things", headers=h)
    assert r3.status_code == 429
    assert r3.json()["error"] == "Too Many Requests"
    assert r3.headers["X-RateLimit-Remaining"] == "0"
    assert 0 < int(r3.headers["Retry-After"]) <= 60

    # a different first hop is a different client
    assert client.get("/api/things", headers={"x-forwarded-for": "8.8.8.8"}).status_code == 200


def test_exempt_paths_are_not_counted():
    client = TestClient(_app(RateLimiter(limit=1, window_seconds=60)))
    for _ in range(3):
        assert client.get("/api/health").status_code == 200
