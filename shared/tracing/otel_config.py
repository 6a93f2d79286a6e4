"""OpenTelemetry configuration for distributed tracing.

Provides trace export to the console or to an OTLP/HTTP collector.
"""

import functools
import inspect
from contextvars import ContextVar
from typing import Any, Callable, Optional, TypeVar

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.trace import Status, StatusCode

F = TypeVar("F", bound=Callable[..., Any])

_active_provider: ContextVar[Optional[TracerProvider]] = ContextVar(
    "tracer_provider", default=None
)


def build_exporter(exporter: str, otlp_endpoint: Optional[str] = None) -> SpanExporter:
    """Create the span exporter named by configuration.

    Args:
        exporter: "console" or "otlp"
        otlp_endpoint: Collector traces URL, used by the OTLP exporter

    Returns:
        Span exporter instance

    Raises:
        ValueError: If the exporter name is unknown
    """
    if exporter == "console":
        return ConsoleSpanExporter()
    if exporter == "otlp":
        return OTLPSpanExporter(endpoint=otlp_endpoint)
    raise ValueError(f"Unknown tracing exporter: {exporter}")


def configure_tracing(
    service_name: str,
    service_version: str = "0.1.0",
    exporter: str = "console",
    otlp_endpoint: Optional[str] = None,
    sampling_rate: float = 1.0,
) -> TracerProvider:
    """Configure OpenTelemetry tracing for the service.

    Args:
        service_name: Name of the service
        service_version: Version reported on the resource
        exporter: "console" or "otlp"
        otlp_endpoint: OTLP/HTTP traces endpoint
        sampling_rate: Sampling rate (0.0 to 1.0)

    Returns:
        Configured TracerProvider
    """
    resource = Resource(
        attributes={
            "service.name": service_name,
            "service.namespace": "fastapi-tutorial",
            "service.version": service_version,
        }
    )

    provider = TracerProvider(
        resource=resource,
        sampler=ParentBased(TraceIdRatioBased(sampling_rate)),
    )
    provider.add_span_processor(
        BatchSpanProcessor(build_exporter(exporter, otlp_endpoint))
    )

    # Not installed globally; each application binds its own provider.
    return provider


def bind_tracer_provider(provider: Optional[TracerProvider]) -> None:
    """Route spans created in the current context to ``provider``.

    Args:
        provider: Provider to use, or None to fall back to the global one
    """
    _active_provider.set(provider)


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer from the provider bound to the current context.

    Args:
        name: Tracer name (typically __name__)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name, tracer_provider=_active_provider.get())


def trace_function(span_name: Optional[str] = None) -> Callable[[F], F]:
    """Decorator to automatically trace a function.

    Args:
        span_name: Optional custom span name (defaults to function name)

    Returns:
        Decorated function with automatic tracing
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer(func.__module__)

            with tracer.start_as_current_span(name) as span:
                try:
                    span.set_attribute("function.name", func.__name__)
                    span.set_attribute("function.module", func.__module__)

                    result = func(*args, **kwargs)

                    span.set_status(Status(StatusCode.OK))
                    return result
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer(func.__module__)

            with tracer.start_as_current_span(name) as span:
                try:
                    span.set_attribute("function.name", func.__name__)
                    span.set_attribute("function.module", func.__module__)

                    result = await func(*args, **kwargs)

                    span.set_status(Status(StatusCode.OK))
                    return result
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper  # type: ignore

    return decorator
