"""Tracing utilities and decorators."""

import functools
import inspect
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from opentelemetry import trace
from opentelemetry.instrumentation.asgi import collect_request_attributes
from opentelemetry.propagate import extract
from opentelemetry.trace import SpanKind, Status, StatusCode
from starlette.requests import Request

DEFAULT_TRACER_NAME = "autotrace_demo"

# Tracers obtained from the global provider, by instrumentation name
_tracers: dict[str, trace.Tracer] = {}


def get_tracer(
    name: str = DEFAULT_TRACER_NAME,
    tracer_provider: Optional[trace.TracerProvider] = None,
) -> trace.Tracer:
    """
    Get or create a tracer instance.

    Tracers from an explicit provider are not cached. Global ones are proxies
    that follow whatever provider gets installed later, so caching them is safe.
    """
    if tracer_provider is not None:
        return tracer_provider.get_tracer(name)
    if name not in _tracers:
        _tracers[name] = trace.get_tracer(name)
    return _tracers[name]


def traced(
    name: Optional[str] = None,
    attributes: Optional[dict[str, Any]] = None,
    kind: SpanKind = SpanKind.INTERNAL,
) -> Callable:
    """
    Decorator to trace a function execution.

    Args:
        name: Span name (defaults to function name)
        attributes: Additional span attributes
        kind: Span kind

    Example:
        @traced("client")
        def run(param):
            ...
    """

    def decorator(func: Callable) -> Callable:
        span_name = name or func.__name__

        def _start(span: trace.Span) -> None:
            if attributes:
                for key, value in attributes.items():
                    span.set_attribute(key, value)

            span.set_attribute("code.function", func.__name__)
            span.set_attribute("code.namespace", func.__module__)

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            tracer = get_tracer()
            with tracer.start_as_current_span(
                span_name, kind=kind, record_exception=False, set_status_on_exception=False
            ) as span:
                _start(span)
                try:
                    result = await func(*args, **kwargs)
                    span.set_status(Status(StatusCode.OK))
                    return result
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            tracer = get_tracer()
            with tracer.start_as_current_span(
                span_name, kind=kind, record_exception=False, set_status_on_exception=False
            ) as span:
                _start(span)
                try:
                    result = func(*args, **kwargs)
                    span.set_status(Status(StatusCode.OK))
                    return result
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise

        # Return appropriate wrapper based on function type
        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


@contextmanager
def server_span(
    request: Request,
    tracer: trace.Tracer,
    name: str = "server_request",
) -> Iterator[trace.Span]:
    """
    Open a SERVER span for an incoming request by hand.

    The parent context comes from the request headers (W3C ``traceparent`` by
    default), and the span carries the same HTTP attributes the ASGI
    instrumentation would record.
    """
    with tracer.start_as_current_span(
        name,
        context=extract(request.headers),
        kind=SpanKind.SERVER,
        attributes=collect_request_attributes(request.scope),
    ) as span:
        yield span
