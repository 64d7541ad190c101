# homepro/logging_config.py
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from .middleware.request_id import get_request_id

# Structured extras a call site may pass through `extra=`.
EXTRA_KEYS = ("user_id", "home_id", "plan_id", "project_id", "provider", "original_bytes", "compressed_bytes", "count")

# Chatty third-party loggers and the env var that overrides each one's level.
_QUIET_LOGGERS = {
    "httpx": "HTTPX_LOG_LEVEL",
    "sqlalchemy.engine": "SQL_LOG_LEVEL",
    "PIL": "PIL_LOG_LEVEL",
}


def _env_level(name: str, default: str) -> str:
    return (os.getenv(name) or default).strip().upper()


class RequestIdFilter(logging.Filter):
    """Stamps the active request id onto every record passing the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = get_request_id()
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        rid = getattr(record, "request_id", None)
        if rid:
            payload["request_id"] = rid

        payload.update({k: getattr(record, k) for k in EXTRA_KEYS if hasattr(record, k)})

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Route everything through one stdout handler writing JSON lines.

    Safe to call more than once (uvicorn --reload, repeated create_app()
    in tests): existing root handlers are replaced, not stacked.
    """
    lvl = (level or _env_level("LOG_LEVEL", "INFO")).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(lvl)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(lvl)

    logging.getLogger("uvicorn.access").setLevel(lvl)
    for name, env in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(_env_level(env, "WARNING"))
