"""
Unit tests for request metadata dependencies.
"""

from typing import Optional

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from api.src.dependencies import get_client_ip, get_correlation_id
from api.src.middleware import RequestLoggingMiddleware

pytestmark = pytest.mark.unit


def build_app() -> FastAPI:
    app = FastAPI()

    @app.get("/whoami")
    async def whoami(
        client_ip: str = Depends(get_client_ip),
        correlation_id: Optional[str] = Depends(get_correlation_id),
    ):
        return {"client_ip": client_ip, "correlation_id": correlation_id}

    return app


def test_client_ip_from_connection():
    body = TestClient(build_app()).get("/whoami").json()

    assert body["client_ip"] == "testclient"


def test_client_ip_prefers_first_forwarded_address():
    response = TestClient(build_app()).get(
        "/whoami", headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}
    )

    assert response.json()["client_ip"] == "203.0.113.7"


def test_correlation_id_from_header_without_middleware():
    response = TestClient(build_app()).get("/whoami", headers={"X-Correlation-ID": "req-9"})

    assert response.json()["correlation_id"] == "req-9"


def test_correlation_id_missing_without_middleware():
    assert TestClient(build_app()).get("/whoami").json()["correlation_id"] is None


def test_correlation_id_generated_by_middleware_is_visible():
    app = build_app()
    app.add_middleware(RequestLoggingMiddleware)

    response = TestClient(app).get("/whoami")

    assert response.json()["correlation_id"] == response.headers["X-Correlation-ID"]
