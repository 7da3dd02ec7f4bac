"""Tests for the three server variants."""

import pytest
from opentelemetry.trace import SpanKind
from prometheus_client import REGISTRY

from autotrace_demo.api import SERVED

TRACE_ID = "4bf92f3577b34da6a3ce929d0e0e4736"
PARENT_ID = "00f067aa0ba902b7"


def _served_count(variant):
    value = REGISTRY.get_sample_value("autotrace_server_requests_total", {"variant": variant})
    return value or 0.0


@pytest.mark.parametrize(
    "client_fixture", ["instrumented_client", "uninstrumented_client", "programmatic_client"]
)
def test_server_request_returns_served(request, client_fixture):
    client = request.getfixturevalue(client_fixture)

    response = client.get("/server_request", params={"param": "testing"})

    assert response.status_code == 200
    assert response.text == SERVED
    assert response.headers["content-type"].startswith("text/plain")


@pytest.mark.parametrize(
    "client_fixture", ["instrumented_client", "uninstrumented_client", "programmatic_client"]
)
def test_param_is_optional(request, client_fixture):
    client = request.getfixturevalue(client_fixture)

    response = client.get("/server_request")

    assert response.status_code == 200
    assert response.text == SERVED


class TestInstrumentedServer:
    """The handler opens its own SERVER span."""

    def test_emits_one_server_span(self, instrumented_client, span_exporter):
        instrumented_client.get("/server_request", params={"param": "testing"})

        spans = span_exporter.get_finished_spans()
        assert len(spans) == 1
        span = spans[0]
        assert span.name == "server_request"
        assert span.kind == SpanKind.SERVER
        assert span.attributes["demo.param"] == "testing"
        method = span.attributes.get("http.method") or span.attributes.get("http.request.method")
        assert method == "GET"

    def test_root_span_without_incoming_context(self, instrumented_client, span_exporter):
        instrumented_client.get("/server_request", params={"param": "x"})

        (span,) = span_exporter.get_finished_spans()
        assert span.parent is None

    def test_joins_propagated_trace(self, instrumented_client, span_exporter):
        traceparent = f"00-{TRACE_ID}-{PARENT_ID}-01"

        instrumented_client.get(
            "/server_request", params={"param": "x"}, headers={"traceparent": traceparent}
        )

        (span,) = span_exporter.get_finished_spans()
        assert span.context.trace_id == int(TRACE_ID, 16)
        assert span.parent is not None
        assert span.parent.span_id == int(PARENT_ID, 16)
        assert span.parent.is_remote

    def test_health_routes_are_not_traced(self, instrumented_client, span_exporter):
        assert instrumented_client.get("/health").status_code == 200
        assert span_exporter.get_finished_spans() == ()

    def test_counts_served_requests(self, instrumented_client):
        before = _served_count("instrumented")

        instrumented_client.get("/server_request", params={"param": "x"})
        instrumented_client.get("/server_request", params={"param": "y"})

        assert _served_count("instrumented") == before + 2


class TestUninstrumentedServer:
    """Without the agent attached nothing is traced."""

    def test_emits_no_spans(self, uninstrumented_client, span_exporter):
        response = uninstrumented_client.get("/server_request", params={"param": "testing"})

        assert response.text == SERVED
        assert span_exporter.get_finished_spans() == ()

    def test_counts_served_requests(self, uninstrumented_client):
        before = _served_count("uninstrumented")

        uninstrumented_client.get("/server_request", params={"param": "x"})

        assert _served_count("uninstrumented") == before + 1


class TestProgrammaticServer:
    """FastAPIInstrumentor traces requests without route code."""

    def test_emits_server_span(self, programmatic_client, span_exporter):
        programmatic_client.get("/server_request", params={"param": "testing"})

        server_spans = [
            s for s in span_exporter.get_finished_spans() if s.kind == SpanKind.SERVER
        ]
        assert len(server_spans) == 1
        assert "/server_request" in server_spans[0].name

    def test_joins_propagated_trace(self, programmatic_client, span_exporter):
        programmatic_client.get(
            "/server_request",
            params={"param": "x"},
            headers={"traceparent": f"00-{TRACE_ID}-{PARENT_ID}-01"},
        )

        (server_span,) = [
            s for s in span_exporter.get_finished_spans() if s.kind == SpanKind.SERVER
        ]
        assert server_span.context.trace_id == int(TRACE_ID, 16)
        assert server_span.parent.span_id == int(PARENT_ID, 16)

    def test_excluded_urls_are_not_traced(self, programmatic_client, span_exporter):
        assert programmatic_client.get("/health").status_code == 200
        assert programmatic_client.get("/ready").status_code == 200

        assert span_exporter.get_finished_spans() == ()


class TestSharedRoutes:
    """Routes every variant exposes."""

    def test_health_reports_variant(self, instrumented_client):
        response = instrumented_client.get("/health")

        data = response.json()
        assert data["status"] == "healthy"
        assert data["variant"] == "instrumented"
        assert data["telemetry_enabled"] is True
        assert data["tracer_provider"] == "TracerProvider"

    def test_probes(self, uninstrumented_client):
        assert uninstrumented_client.get("/ready").json() == {"ready": True}
        assert uninstrumented_client.get("/live").json() == {"live": True}

    def test_metrics_endpoint(self, uninstrumented_client):
        uninstrumented_client.get("/server_request", params={"param": "x"})

        response = uninstrumented_client.get("/metrics/")

        assert response.status_code == 200
        assert "autotrace_server_requests_total" in response.text
