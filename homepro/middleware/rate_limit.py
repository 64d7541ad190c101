# homepro/middleware/rate_limit.py
from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable, Optional

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import FixedWindowRateLimiter
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

# health, webhooks and the cron-driven scans
EXEMPT_PATHS = (
    "/api/health",
    "/api/webhooks",
    "/api/warranties/check-expiring",
    "/api/budget/alerts",
    "/api/notifications/push/send",
)


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


@dataclass(frozen=True)
class RateLimitResult:
    ok: bool
    limit: int
    remaining: int
    reset_at: float

    def retry_after(self, now: Optional[float] = None) -> int:
        now = time.time() if now is None else now
        return int(math.ceil(max(0.0, self.reset_at - now)))


class RateLimiter:
    """
    Fixed-window request counter keyed by client identity, on the `limits`
    package. Counters live in the given storage (in-process MemoryStorage by
    default), which expires each window on its own.
    """

    namespace = "api"

    def __init__(self, *, limit: int, window_seconds: float, storage: Optional[Storage] = None) -> None:
        self.limit = int(limit)
        self.window_seconds = max(1, int(math.ceil(window_seconds)))
        self.item = RateLimitItemPerSecond(self.limit, self.window_seconds, namespace=self.namespace)
        self.storage = storage if storage is not None else MemoryStorage()
        self.strategy = FixedWindowRateLimiter(self.storage)

    def hit(self, key: str) -> RateLimitResult:
        ok = self.strategy.hit(self.item, key)
        reset_at, remaining = self.strategy.get_window_stats(self.item, key)
        return RateLimitResult(ok=ok, limit=self.limit, remaining=max(0, int(remaining)), reset_at=float(reset_at))

    def reset(self) -> None:
        self.storage.reset()


def _is_exempt(path: str) -> bool:
    return any(path == p or path.startswith(p + "/") for p in EXEMPT_PATHS)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Applies a RateLimiter to /api routes; None disables limiting."""

    def __init__(self, app, limiter: Optional[RateLimiter]) -> None:
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if self.limiter is None or not path.startswith("/api") or _is_exempt(path):
            return await call_next(request)

        result = self.limiter.hit(client_ip(request))
        if not result.ok:
            return JSONResponse(
                status_code=429,
                content={"error": "Too Many Requests", "message": "Rate limit exceeded. Try again later."},
                headers={
                    "Retry-After": str(result.retry_after()),
                    "X-RateLimit-Limit": str(result.limit),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(result.limit)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        return response
