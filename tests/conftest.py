"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from autotrace_demo.config import ClientSettings, Settings, TelemetrySettings

# The global tracer provider can only be installed once per process
_EXPORTER = InMemorySpanExporter()
_PROVIDER = TracerProvider()
_PROVIDER.add_span_processor(SimpleSpanProcessor(_EXPORTER))
trace.set_tracer_provider(_PROVIDER)


@pytest.fixture
def tracer_provider():
    """The process-wide SDK provider the tests record into."""
    return _PROVIDER


@pytest.fixture
def span_exporter():
    """In-memory exporter, emptied around every test."""
    _EXPORTER.clear()
    yield _EXPORTER
    _EXPORTER.clear()


@pytest.fixture
def settings():
    """Settings isolated from the environment, exporting nowhere."""
    return Settings(
        telemetry=TelemetrySettings(traces_exporter="none", span_processor="simple"),
        client=ClientSettings(server_url="http://testserver"),
    )


@pytest.fixture
def instrumented_client(settings, tracer_provider, span_exporter):
    from autotrace_demo.servers.instrumented import create_app

    with TestClient(create_app(settings, tracer_provider=tracer_provider)) as client:
        yield client


@pytest.fixture
def uninstrumented_client(settings, span_exporter):
    from autotrace_demo.servers.uninstrumented import create_app

    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def programmatic_client(settings, tracer_provider, span_exporter):
    from autotrace_demo.servers.programmatic import create_app

    with TestClient(create_app(settings, tracer_provider=tracer_provider)) as client:
        yield client
