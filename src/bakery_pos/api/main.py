from __future__ import annotations

import logging
import os
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from bakery_pos.api.error_handling import register_exception_handlers
from bakery_pos.api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from bakery_pos.api.routes import audit_logs, auth, health, menu, metrics, orders, staff, waste
from bakery_pos.infrastructure.observability.logging_config import configure_logging
from bakery_pos.infrastructure.observability.otel import configure_otel

APP_VERSION = "0.1.0"
_ROUTE_MODULES = (health, metrics, auth, staff, menu, orders, waste, audit_logs)

logger = logging.getLogger("bakery_pos.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "HTTP requests handled by the bakery backend",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "Bakery backend request latency in seconds",
    ["method", "path"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)


def _cors_allow_origins() -> list[str]:
    if os.getenv("APP_ENV", "dev").lower() in {"dev", "test"}:
        return ["*"]
    raw_value = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:5173")
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


def _route_template(request: Request) -> str:
    # Label by template so /orders/{order_id} stays one series.
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed = time.perf_counter() - started
            path = _route_template(request)
            REQUEST_COUNT.labels(request.method, path, str(status_code)).inc()
            REQUEST_LATENCY.labels(request.method, path).observe(elapsed)
            fields = {
                "method": request.method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round(elapsed * 1000, 2),
            }
            if status_code >= 500:
                logger.error("request_failed", extra=fields)
            else:
                logger.info("request_complete", extra=fields)


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Bakery POS Backend", version=APP_VERSION)
    register_exception_handlers(app)
    for module in _ROUTE_MODULES:
        app.include_router(module.router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PATCH"],
        allow_headers=["*"],
        expose_headers=["ETag", REQUEST_ID_HEADER],
    )

    configure_otel(app)
    return app


app = create_app()
