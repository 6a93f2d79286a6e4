"""Metrics module using Prometheus."""

from .prometheus_metrics import (
    HttpMetrics,
    TutorialMetrics,
    setup_metrics,
    get_metrics_handler,
)

__all__ = [
    "HttpMetrics",
    "TutorialMetrics",
    "setup_metrics",
    "get_metrics_handler",
]
