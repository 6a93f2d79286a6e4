"""
System router: health, readiness and Prometheus metrics endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST

from api.src.config import Settings
from api.src.dependencies import get_app_settings
from api.src.models import HealthResponse, HealthStatus, ReadinessResponse
from shared.metrics import get_metrics_handler

router = APIRouter()


@router.get("/health", tags=["Health"], response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Health check endpoint.

    Returns basic health status without checking dependencies.
    Use for container health checks.
    """
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get("/ready", tags=["Health"], response_model=ReadinessResponse)
async def readiness_check(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """
    Readiness check endpoint.

    The application is ready once its lifespan startup has completed.
    """
    started = getattr(request.app.state, "started", False)
    checks = {
        "application": HealthStatus.HEALTHY if started else HealthStatus.UNHEALTHY,
    }

    all_healthy = all(check == HealthStatus.HEALTHY for check in checks.values())
    readiness = ReadinessResponse(
        status="ready" if all_healthy else "not_ready",
        service=settings.app_name,
        version=settings.app_version,
        checks=checks,
    )

    return JSONResponse(
        status_code=status.HTTP_200_OK if all_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=readiness.model_dump(mode="json"),
    )


@router.get("/metrics", tags=["Monitoring"], response_class=PlainTextResponse)
async def metrics(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """
    Prometheus metrics endpoint.

    Exposes application metrics in Prometheus format for scraping.
    """
    if not settings.metrics_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Metrics are disabled")

    handler = get_metrics_handler(request.app.state.metrics_registry)
    return Response(content=handler(), media_type=CONTENT_TYPE_LATEST)
