"""
Middleware that stamps the application name on every response.

This is the middleware example from the tutorial, written as a reusable
class instead of an ``@app.middleware("http")`` function.
"""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


class AppNameHeaderMiddleware(BaseHTTPMiddleware):
    """Add the configured application name header to responses."""

    def __init__(self, app, app_name: str, header_name: str = "X-App-Name"):
        """
        Initialize app name middleware.

        Args:
            app: ASGI application
            app_name: Value of the header
            header_name: Name of the header
        """
        super().__init__(app)
        self.app_name = app_name
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers[self.header_name] = self.app_name
        return response
