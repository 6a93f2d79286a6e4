"""Prometheus metrics definitions and helpers.

Metrics are bound to an explicit registry so each application instance
(and each test) owns its own collectors.
"""

from typing import Callable

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)


class HttpMetrics:
    """HTTP request metrics."""

    def __init__(self, registry: CollectorRegistry) -> None:
        """Initialize HTTP metrics.

        Args:
            registry: Prometheus registry to use
        """
        self.requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status"],
            registry=registry,
        )

        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
            registry=registry,
        )

        self.requests_in_progress = Gauge(
            "http_requests_in_progress",
            "HTTP requests currently in progress",
            ["method", "endpoint"],
            registry=registry,
        )


class TutorialMetrics:
    """Metrics for the tutorial endpoints."""

    def __init__(self, registry: CollectorRegistry) -> None:
        self.items_created = Counter(
            "tutorial_items_created_total",
            "Total number of items accepted by POST /items/",
            ["is_offer"],
            registry=registry,
        )

        self.delay_seconds = Histogram(
            "tutorial_async_delay_seconds",
            "Delays served by the async endpoint",
            buckets=[0.0, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
            registry=registry,
        )


def setup_metrics(
    registry: CollectorRegistry | None = None,
) -> tuple[CollectorRegistry, HttpMetrics, TutorialMetrics]:
    """Create a registry and the metric sets bound to it.

    Args:
        registry: Registry to reuse; a fresh one is created when omitted

    Returns:
        Tuple of (registry, HttpMetrics, TutorialMetrics)
    """
    registry = registry or CollectorRegistry()
    return registry, HttpMetrics(registry), TutorialMetrics(registry)


def get_metrics_handler(registry: CollectorRegistry) -> Callable[[], bytes]:
    """Get metrics handler for HTTP endpoint.

    Args:
        registry: Registry to render

    Returns:
        Function that generates Prometheus metrics output
    """

    def metrics_handler() -> bytes:
        return generate_latest(registry)

    return metrics_handler
