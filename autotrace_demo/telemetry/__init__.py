"""OpenTelemetry instrumentation."""

from .metrics import REQUESTS_SERVED
from .setup import build_span_exporter, setup_telemetry, shutdown_telemetry
from .tracing import get_tracer, server_span, traced

__all__ = [
    "REQUESTS_SERVED",
    "build_span_exporter",
    "setup_telemetry",
    "shutdown_telemetry",
    "get_tracer",
    "server_span",
    "traced",
]
