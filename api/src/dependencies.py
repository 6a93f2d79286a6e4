"""
FastAPI dependency injection for settings, metrics and request context.

Provides injectable dependencies for:
- The settings the running application was built with
- Prometheus metric sets owned by the application
- Request metadata (client IP, correlation ID)
- The tracer provider of the application serving the request

Everything is read from ``request.app.state`` so each application built by
``create_app`` carries its own configuration and collectors.
"""

from typing import Optional

from fastapi import Request

from api.src.config import Settings
from shared.metrics import TutorialMetrics
from shared.tracing import bind_tracer_provider


# ============================================================================
# APPLICATION STATE
# ============================================================================


def get_app_settings(request: Request) -> Settings:
    """
    Get the settings of the application serving this request.

    Args:
        request: HTTP request

    Returns:
        Application settings

    Example:
        @router.get("/name")
        async def name(settings: Settings = Depends(get_app_settings)):
            return {"name": settings.app_name}
    """
    return request.app.state.settings


def get_tutorial_metrics(request: Request) -> TutorialMetrics:
    """Get the tutorial metric set of the application serving this request."""
    return request.app.state.tutorial_metrics


# ============================================================================
# REQUEST METADATA
# ============================================================================


async def get_client_ip(request: Request) -> str:
    """
    Get client IP address from request.

    Checks X-Forwarded-For header first (for proxies),
    then falls back to client host.

    Args:
        request: HTTP request

    Returns:
        Client IP address
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, get the first one
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


async def get_correlation_id(request: Request) -> Optional[str]:
    """
    Get correlation ID assigned to the request.

    The request logging middleware stores it on ``request.state``; the
    X-Correlation-ID header is used when the middleware is not installed.

    Args:
        request: HTTP request

    Returns:
        Correlation ID or None
    """
    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id:
        return correlation_id
    return request.headers.get("X-Correlation-ID")


# ============================================================================
# TRACING
# ============================================================================


async def bind_app_tracer(request: Request) -> None:
    """
    Bind the application's tracer provider for the rest of the request.

    Declared ``async`` so it runs in the endpoint's context; spans from
    ``trace_function`` then reach this application's exporter.
    """
    bind_tracer_provider(request.app.state.tracer_provider)
