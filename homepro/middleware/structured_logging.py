# homepro/middleware/structured_logging.py
from __future__ import annotations

import json
import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .rate_limit import client_ip

log = logging.getLogger("homepro.request")

# Health checks would drown the access log.
QUIET_PATHS = ("/api/health",)


def access_record(request: Request, status_code: int, started: float) -> dict:
    return {
        "event": "http_request",
        "request_id": getattr(request.state, "request_id", None),
        "method": request.method,
        "path": request.url.path,
        "query": request.url.query or "",
        "status_code": status_code,
        "latency_ms": round((time.perf_counter() - started) * 1000),
        "client_ip": client_ip(request),
        # handlers resolve the real principal; the dev header is enough here
        "user_hint": request.headers.get("X-User-Id"),
    }


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    One JSON access line per request. Server errors log at ERROR, client
    errors at WARNING, the rest at INFO; successful health checks are skipped.

    Must sit inside RequestIDMiddleware so request.state.request_id is set.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            if not (status_code < 400 and request.url.path in QUIET_PATHS):
                level = logging.ERROR if status_code >= 500 else logging.WARNING if status_code >= 400 else logging.INFO
                log.log(level, json.dumps(access_record(request, status_code, started), default=str))
