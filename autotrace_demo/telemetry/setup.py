"""OpenTelemetry setup and configuration."""

import logging
from typing import Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)

from .. import __version__
from ..config import TRACES_EXPORTERS, Settings, TelemetrySettings

logger = logging.getLogger(__name__)


def resolve_exporter_name(telemetry: TelemetrySettings) -> str:
    """
    Pick the first exporter this service can build from ``traces_exporter``.

    Other entries are logged and ignored. Raises ValueError when none of
    the entries is supported.
    """
    names = telemetry.exporter_names or ["none"]
    supported = [name for name in names if name in TRACES_EXPORTERS]
    if not supported:
        raise ValueError(
            f"Unknown traces exporter {telemetry.traces_exporter!r}, "
            f"expected one of {', '.join(TRACES_EXPORTERS)}"
        )

    chosen = supported[0]
    ignored = [name for name in names if name != chosen]
    if ignored:
        logger.warning(f"Using the {chosen} exporter, ignoring: {', '.join(ignored)}")
    return chosen


def build_span_exporter(telemetry: TelemetrySettings) -> Optional[SpanExporter]:
    """Create the exporter selected from ``telemetry.traces_exporter``."""
    name = resolve_exporter_name(telemetry)
    if name == "console":
        return ConsoleSpanExporter(service_name=telemetry.service_name)
    if name == "otlp":
        return OTLPSpanExporter(
            endpoint=telemetry.exporter_endpoint,
            insecure=True,  # For local development
        )
    return None


def setup_telemetry(
    settings: Settings,
    *,
    service_name: Optional[str] = None,
    exporter: Optional[SpanExporter] = None,
    set_global: bool = True,
) -> Optional[TracerProvider]:
    """
    Configure OpenTelemetry tracing.

    Sets up:
    - A tracer provider carrying the service resource attributes
    - The configured exporter (console or OTLP) behind a span processor
    - The global tracer provider, unless ``set_global`` is False

    An explicit ``exporter`` replaces the configured one. Returns None when
    telemetry is disabled.
    """
    telemetry = settings.telemetry
    if not telemetry.enabled:
        logger.info("OpenTelemetry disabled")
        return None

    # Create resource with service information
    resource = Resource.create({
        "service.name": service_name or telemetry.service_name,
        "service.version": __version__,
        "demo.variant": settings.variant,
    })

    # Create tracer provider
    provider = TracerProvider(resource=resource)

    try:
        if exporter is None:
            exporter = build_span_exporter(telemetry)

        if exporter is not None:
            if telemetry.span_processor == "simple":
                processor = SimpleSpanProcessor(exporter)
            else:
                processor = BatchSpanProcessor(exporter)
            provider.add_span_processor(processor)
            logger.info(
                f"OpenTelemetry configured: {type(exporter).__name__} via {telemetry.span_processor} processor"
            )
        else:
            logger.info("OpenTelemetry configured without an exporter")

    except Exception as e:
        logger.warning(f"Failed to configure {telemetry.traces_exporter} exporter: {e}")

    # Still set provider for local tracing
    if set_global:
        trace.set_tracer_provider(provider)

    return provider


def shutdown_telemetry(provider: Optional[TracerProvider]) -> None:
    """Flush pending spans and shut the provider down."""
    if provider is None:
        return

    provider.force_flush()
    provider.shutdown()
    logger.info("OpenTelemetry provider shut down")
