"""FastAPI middleware components.

This package contains custom middleware for response headers, request
logging, metrics and correlation IDs.
"""

from api.src.middleware.app_name import AppNameHeaderMiddleware
from api.src.middleware.request_logging import (
    CORRELATION_ID_HEADER,
    PROCESS_TIME_HEADER,
    RequestLoggingMiddleware,
)
from api.src.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "AppNameHeaderMiddleware",
    "CORRELATION_ID_HEADER",
    "PROCESS_TIME_HEADER",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
]
