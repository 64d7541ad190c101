# homepro/middleware/request_id.py
from __future__ import annotations

import re
import uuid
from contextvars import ContextVar
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"

# Client-supplied ids end up in log lines; keep them short and printable.
_SAFE_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    return _request_id.get()


def accept_request_id(raw: Optional[str]) -> str:
    """The caller's id when it is safe to log, else a fresh hex UUID."""
    rid = (raw or "").strip()
    return rid if _SAFE_ID.match(rid) else uuid.uuid4().hex


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Outermost middleware: every request gets an id on request.state and in
    a ContextVar (read by the JSON formatter), echoed back in X-Request-ID.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # header lookup is case-insensitive
        rid = accept_request_id(request.headers.get(HEADER))
        request.state.request_id = rid

        token = _request_id.set(rid)
        try:
            response = await call_next(request)
        finally:
            _request_id.reset(token)
        response.headers[HEADER] = rid
        return response
