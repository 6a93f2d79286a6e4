"""Distributed tracing module using OpenTelemetry."""

from .otel_config import (
    bind_tracer_provider,
    build_exporter,
    configure_tracing,
    get_tracer,
    trace_function,
)

__all__ = [
    "bind_tracer_provider",
    "build_exporter",
    "configure_tracing",
    "get_tracer",
    "trace_function",
]
