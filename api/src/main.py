"""
FastAPI application entry point for the FastAPI tutorial companion service.

This module provides the application factory with:
- The tutorial endpoints (hello world, items, async delay)
- Health, readiness and Prometheus metrics endpoints
- Request logging with correlation IDs
- App name, security and CORS headers, GZip and rate limiting
- Optional OpenTelemetry distributed tracing
- Graceful startup and shutdown
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.src.config import Settings, get_settings
from api.src.dependencies import bind_app_tracer
from api.src.middleware import (
    AppNameHeaderMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from api.src.routers import async_examples, items, root, system
from shared.logging import configure_logging
from shared.metrics import setup_metrics
from shared.tracing import configure_tracing

logger = structlog.get_logger(__name__)


# ============================================================================
# Lifespan Management
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    Marks the application ready after startup and flushes tracing on
    shutdown.
    """
    settings: Settings = app.state.settings

    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )

    app.state.started = True
    logger.info("application_started", app_name=settings.app_name)

    try:
        yield
    finally:
        logger.info("application_shutting_down")
        app.state.started = False

        tracer_provider = app.state.tracer_provider
        if tracer_provider is not None:
            logger.info("shutting_down_tracing")
            tracer_provider.shutdown()

        logger.info("application_shutdown_complete")


# ============================================================================
# Exception Handlers
# ============================================================================

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    errors = jsonable_encoder(exc.errors())
    logger.warning(
        "validation_error",
        path=request.url.path,
        errors=errors
    )
    return JSONResponse(
        status_code=422,
        content={"detail": errors}
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None)
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(
        "unexpected_exception",
        path=request.url.path,
        error=str(exc),
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


# ============================================================================
# Application Factory
# ============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to build with; the cached environment settings
            are used when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.log_format == "json",
        service_name=settings.app_name,
        environment=settings.environment,
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=settings.app_description,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        debug=settings.debug,
        dependencies=[Depends(bind_app_tracer)],
    )

    registry, http_metrics, tutorial_metrics = setup_metrics()
    app.state.settings = settings
    app.state.started = False
    app.state.metrics_registry = registry
    app.state.tutorial_metrics = tutorial_metrics
    app.state.tracer_provider = None

    # ========================================================================
    # Middleware Configuration (last added runs first)
    # ========================================================================

    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        storage_uri=settings.rate_limit_storage_url or "memory://",
        enabled=settings.rate_limit_enabled,
    )
    for endpoint in (system.health_check, system.readiness_check, system.metrics):
        limiter.exempt(endpoint)
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    if settings.security_headers_enabled:
        app.add_middleware(
            SecurityHeadersMiddleware,
            require_https=settings.security_require_https,
            hsts_max_age=settings.security_hsts_max_age,
        )

    app.add_middleware(
        AppNameHeaderMiddleware,
        app_name=settings.app_name,
        header_name=settings.app_name_header,
    )

    app.add_middleware(
        RequestLoggingMiddleware,
        metrics=http_metrics if settings.metrics_enabled else None,
    )

    if settings.cors_enabled:
        logger.info("configuring_cors", origins=settings.cors_origins)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=settings.cors_allow_credentials,
            allow_methods=settings.cors_allow_methods,
            allow_headers=settings.cors_allow_headers,
        )

    # ========================================================================
    # Exception Handlers
    # ========================================================================

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # ========================================================================
    # Routers
    # ========================================================================

    app.include_router(root.router)
    app.include_router(items.router)
    app.include_router(async_examples.router)
    app.include_router(system.router)

    # ========================================================================
    # OpenTelemetry Instrumentation
    # ========================================================================

    if settings.tracing_enabled:
        logger.info(
            "initializing_tracing",
            exporter=settings.tracing_exporter,
            sample_rate=settings.tracing_sample_rate
        )
        app.state.tracer_provider = configure_tracing(
            service_name=settings.app_name,
            service_version=settings.app_version,
            exporter=settings.tracing_exporter,
            otlp_endpoint=settings.tracing_otlp_endpoint,
            sampling_rate=settings.tracing_sample_rate,
        )
        FastAPIInstrumentor.instrument_app(
            app,
            tracer_provider=app.state.tracer_provider,
            excluded_urls="health,ready,metrics",
        )

    return app


app = create_app()


# ============================================================================
# Application Entry Point
# ============================================================================

def main() -> None:
    """Run the application with Uvicorn."""
    settings = get_settings()

    logger.info(
        "starting_uvicorn_server",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

    uvicorn.run(
        "api.src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
