# homepro/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .clients.onesignal import OneSignalPushSender
from .clients.resend import ResendEmailSender
from .config import settings
from .logging_config import configure_logging

from .middleware.rate_limit import RateLimiter, RateLimitMiddleware
from .middleware.request_id import RequestIDMiddleware
from .middleware.structured_logging import StructuredLoggingMiddleware

from .routers.budget import router as budget_router
from .routers.dashboard import router as dashboard_router
from .routers.diy_projects import router as diy_projects_router
from .routers.health import router as health_router
from .routers.homes import router as homes_router
from .routers.inventory import router as inventory_router
from .routers.lookups import router as lookups_router
from .routers.maintenance_history import router as maintenance_history_router
from .routers.notifications import router as notifications_router
from .routers.predictive import router as predictive_router
from .routers.task_templates import router as task_templates_router
from .routers.tasks import router as tasks_router
from .routers.tools import router as tools_router
from .routers.upload import router as upload_router
from .routers.warranties import router as warranties_router

from .services.property_enrichment import PropertyLookupService
from .services.storage import UploadStorage

API_PREFIX = "/api"

log = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    val = getattr(settings, "cors_allow_origins", ["*"])
    if isinstance(val, str):
        v = val.strip()
        return ["*"] if v == "*" else [x.strip() for x in v.split(",") if x.strip()]
    if isinstance(val, list) and val:
        return val
    return ["*"]


def build_rate_limiter() -> RateLimiter | None:
    if settings.rate_limit_disabled:
        return None
    return RateLimiter(
        limit=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_ms / 1000.0,
    )


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Validation error", "details": jsonable_encoder(exc.errors())},
    )


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Home Maintenance Pro", version=settings.app_version)

    # Collaborators live on app.state so tests can replace them per app.
    app.state.limiter = build_rate_limiter()
    app.state.email_sender = ResendEmailSender()
    app.state.push_sender = OneSignalPushSender()
    app.state.storage = UploadStorage.from_settings()
    app.state.property_lookup = PropertyLookupService()

    # Added last runs first: request id wraps logging, logging wraps the limiter.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RateLimitMiddleware, limiter=app.state.limiter)
    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unhandled_error)

    # Core
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(dashboard_router, prefix=API_PREFIX)

    # Homes and what is in them
    app.include_router(homes_router, prefix=API_PREFIX)
    app.include_router(inventory_router, prefix=API_PREFIX)
    app.include_router(maintenance_history_router, prefix=API_PREFIX)
    app.include_router(predictive_router, prefix=API_PREFIX)
    app.include_router(task_templates_router, prefix=API_PREFIX)
    app.include_router(tasks_router, prefix=API_PREFIX)

    # Money
    app.include_router(budget_router, prefix=API_PREFIX)

    # Projects and tools
    app.include_router(diy_projects_router, prefix=API_PREFIX)
    app.include_router(tools_router, prefix=API_PREFIX)
    app.include_router(upload_router, prefix=API_PREFIX)

    # Notifications and scheduled scans
    app.include_router(notifications_router, prefix=API_PREFIX)
    app.include_router(warranties_router, prefix=API_PREFIX)

    # Location lookups
    app.include_router(lookups_router, prefix=API_PREFIX)

    return app


app = create_app()
