"""
Integration tests for the tutorial endpoints served by the full application.

Tests cover:
- Hello World
- Path and query parameters, including type conversion errors
- Request body parsing and validation errors
- The async delay endpoint, including concurrent requests
- Response headers added by middleware
- Error handler responses
"""

import asyncio
import time

import httpx
import pytest
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from api.src.main import create_app
from tests.conftest import build_settings

pytestmark = pytest.mark.integration


class TestHelloWorld:
    """GET /"""

    def test_hello_world(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "Hello World from FastAPI"}


class TestReadItem:
    """GET /items/{item_id}"""

    def test_with_query(self, client: TestClient):
        response = client.get("/items/5", params={"q": "somequery"})

        assert response.status_code == 200
        assert response.json() == {"item_id": 5, "query": "somequery"}

    def test_without_query_omits_key(self, client: TestClient):
        response = client.get("/items/5")

        assert response.status_code == 200
        assert response.json() == {"item_id": 5}

    def test_long_query_echoed_unchanged(self, client: TestClient):
        q = "x" * 1000

        response = client.get("/items/5", params={"q": q})

        assert response.status_code == 200
        assert response.json() == {"item_id": 5, "query": q}

    def test_negative_item_id_is_an_integer(self, client: TestClient):
        assert client.get("/items/-3").json() == {"item_id": -3}

    def test_non_integer_item_id_rejected(self, client: TestClient):
        response = client.get("/items/abc")

        assert response.status_code == 422
        errors = response.json()["detail"]
        assert errors[0]["loc"] == ["path", "item_id"]
        assert errors[0]["type"] == "int_parsing"


class TestCreateItem:
    """POST /items/"""

    def test_echoes_parsed_item(self, client: TestClient):
        payload = {"name": "Laptop", "price": 999.99, "is_offer": True}

        response = client.post("/items/", json=payload)

        assert response.status_code == 200
        assert response.json() == {
            "message": "Item created successfully",
            "data": payload,
        }

    def test_defaults_applied(self, client: TestClient):
        response = client.post("/items/", json={"name": "Pen", "price": 2})

        assert response.json()["data"] == {"name": "Pen", "price": 2.0, "is_offer": False}

    def test_missing_field_rejected(self, client: TestClient):
        response = client.post("/items/", json={"name": "Pen"})

        assert response.status_code == 422
        locations = [e["loc"] for e in response.json()["detail"]]
        assert ["body", "price"] in locations

    def test_negative_price_rejected(self, client: TestClient):
        response = client.post("/items/", json={"name": "Pen", "price": -1})

        assert response.status_code == 422

    def test_malformed_json_rejected(self, client: TestClient):
        response = client.post(
            "/items/",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422

    def test_created_items_counted(self, client: TestClient):
        client.post("/items/", json={"name": "Pen", "price": 1, "is_offer": True})

        metrics = client.get("/metrics").text

        assert 'tutorial_items_created_total{is_offer="true"} 1.0' in metrics


class TestAsyncDelay:
    """GET /async-delay"""

    def test_zero_delay(self, client: TestClient):
        response = client.get("/async-delay", params={"seconds": 0})

        assert response.status_code == 200
        assert response.json() == {
            "message": "Waited 0.0 seconds asynchronously",
            "delay_seconds": 0.0,
        }

    def test_negative_delay_rejected(self, client: TestClient):
        assert client.get("/async-delay", params={"seconds": -1}).status_code == 422

    def test_delay_above_maximum_rejected(self, client: TestClient):
        response = client.get("/async-delay", params={"seconds": 11})

        assert response.status_code == 422
        assert response.json() == {"detail": "seconds must not exceed 10.0"}

    @pytest.mark.asyncio
    async def test_concurrent_delays_overlap(self, test_settings):
        app = create_app(test_settings)
        transport = httpx.ASGITransport(app=app)

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            start = time.perf_counter()
            responses = await asyncio.gather(
                *(ac.get("/async-delay", params={"seconds": 0.3}) for _ in range(3))
            )
            elapsed = time.perf_counter() - start

        assert all(r.status_code == 200 for r in responses)
        # three sequential waits would take at least 0.9s
        assert elapsed < 0.8

    def test_spans_reach_each_applications_provider(self):
        apps, exporters = [], []
        for _ in range(2):
            app = create_app(build_settings(tracing_enabled=True))
            exporter = InMemorySpanExporter()
            app.state.tracer_provider.add_span_processor(SimpleSpanProcessor(exporter))
            apps.append(app)
            exporters.append(exporter)

        # the first lifespan shuts its provider down before the second app runs
        for app in apps:
            with TestClient(app) as client:
                assert client.get("/async-delay", params={"seconds": 0}).status_code == 200

        for exporter in exporters:
            names = [span.name for span in exporter.get_finished_spans()]
            assert names.count("async_delay") == 1


class TestResponseHeaders:
    """Headers added by middleware."""

    def test_app_name_header(self, client: TestClient):
        response = client.get("/")

        assert response.headers["X-App-Name"] == "My FastAPI App"

    def test_app_name_header_follows_settings(self):
        app = create_app(build_settings(app_name="Renamed App"))

        with TestClient(app) as client:
            assert client.get("/").headers["X-App-Name"] == "Renamed App"

    def test_app_name_header_on_validation_error(self, client: TestClient):
        response = client.get("/items/abc")

        assert response.headers["X-App-Name"] == "My FastAPI App"

    def test_correlation_and_timing_headers(self, client: TestClient):
        response = client.get("/", headers={"X-Correlation-ID": "tutorial-1"})

        assert response.headers["X-Correlation-ID"] == "tutorial-1"
        assert "X-Process-Time" in response.headers

    def test_security_headers(self, client: TestClient):
        response = client.get("/")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_security_headers_can_be_disabled(self):
        app = create_app(build_settings(security_headers_enabled=False))

        with TestClient(app) as client:
            assert "X-Frame-Options" not in client.get("/").headers

    def test_cors_preflight(self, client: TestClient):
        response = client.options(
            "/items/",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


class TestErrorHandlers:
    """Exception handlers registered by create_app."""

    def test_unknown_path(self, client: TestClient):
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"detail": "Not Found"}

    def test_method_not_allowed(self, client: TestClient):
        response = client.delete("/")

        assert response.status_code == 405

    def test_unexpected_exception_hidden(self, test_settings):
        app = create_app(test_settings)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("secret details")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        assert "secret" not in response.text
