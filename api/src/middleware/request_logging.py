"""
Request logging and metrics middleware.

Provides:
- Correlation ID propagation (X-Correlation-ID)
- Processing time header (X-Process-Time)
- Structured request/response logging
- Prometheus request metrics
"""

import time
import uuid
from typing import Optional

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

from shared.logging import bind_context, unbind_context
from shared.metrics import HttpMetrics

logger = structlog.get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"
PROCESS_TIME_HEADER = "X-Process-Time"
UNMATCHED_ENDPOINT = "<unmatched>"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging, metrics and correlation IDs."""

    def __init__(self, app, metrics: Optional[HttpMetrics] = None):
        """
        Initialize request logging middleware.

        Args:
            app: ASGI application
            metrics: HTTP metric set to record into; metrics are skipped when None
        """
        super().__init__(app)
        self.metrics = metrics

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request and log details."""
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"
        endpoint = self._endpoint_label(request)

        bind_context(correlation_id=correlation_id)

        if self.metrics:
            self.metrics.requests_in_progress.labels(method=method, endpoint=endpoint).inc()

        start_time = time.perf_counter()

        logger.info(
            "request_started",
            method=method,
            path=path,
            client_ip=client_ip,
        )

        try:
            response = await call_next(request)

            duration = time.perf_counter() - start_time

            if self.metrics:
                self.metrics.requests_total.labels(
                    method=method,
                    endpoint=endpoint,
                    status=response.status_code,
                ).inc()
                self.metrics.request_duration.labels(
                    method=method,
                    endpoint=endpoint,
                ).observe(duration)

            logger.info(
                "request_completed",
                method=method,
                path=path,
                status_code=response.status_code,
                duration=f"{duration:.3f}s",
            )

            response.headers[CORRELATION_ID_HEADER] = correlation_id
            response.headers[PROCESS_TIME_HEADER] = f"{duration:.6f}"

            return response

        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(
                "request_failed",
                method=method,
                path=path,
                error=str(e),
                duration=f"{duration:.3f}s",
                exc_info=True,
            )
            raise

        finally:
            if self.metrics:
                self.metrics.requests_in_progress.labels(method=method, endpoint=endpoint).dec()
            unbind_context("correlation_id")

    @staticmethod
    def _endpoint_label(request: Request) -> str:
        """
        Route template for metric labels, keeping label cardinality bounded.

        Resolved against the router before the request is handled, so the
        same label is known to every metric of the request. A path that
        matches a route only by path (wrong method) keeps that route's
        template.
        """
        partial = None
        for route in request.app.router.routes:
            match, _ = route.matches(request.scope)
            if match == Match.FULL:
                return getattr(route, "path", None) or UNMATCHED_ENDPOINT
            if match == Match.PARTIAL and partial is None:
                partial = getattr(route, "path", None)
        return partial or UNMATCHED_ENDPOINT
