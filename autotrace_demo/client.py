#!/usr/bin/env python3
"""
Demo client.

Sends ``GET /server_request?param=<value>`` inside a CLIENT span and injects
the trace context into the request headers, so the server span (manual,
programmatic or from the agent) lands in the same trace.
"""

import argparse
import logging
import sys
from typing import Optional

import httpx
from opentelemetry.propagate import inject
from opentelemetry.trace import SpanKind, Status, StatusCode

from .config import Settings, get_settings
from .logging_config import configure_logging
from .telemetry import get_tracer, setup_telemetry, shutdown_telemetry, traced

logger = logging.getLogger(__name__)


class ServerRequestError(Exception):
    """The demo server answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Server responded with {status_code}: {body}")
        self.status_code = status_code
        self.body = body


@traced("client")
def send_request(
    param: str,
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.Client] = None,
) -> str:
    """
    Send one demo request and return the response body.

    Args:
        param: Value for the ``param`` query parameter
        settings: Settings providing the server URL and timeout
        http_client: Client to send with; a short-lived one is created if None
    """
    settings = settings or get_settings()
    tracer = get_tracer(__name__)
    url = f"{settings.client.server_url.rstrip('/')}/server_request"

    with tracer.start_as_current_span("client-server", kind=SpanKind.CLIENT) as span:
        headers: dict[str, str] = {}
        inject(headers)
        span.set_attribute("http.method", "GET")
        span.set_attribute("http.url", url)

        if http_client is None:
            with httpx.Client(timeout=settings.client.timeout) as owned:
                response = owned.get(url, params={"param": param}, headers=headers)
        else:
            response = http_client.get(url, params={"param": param}, headers=headers)

        span.set_attribute("http.status_code", response.status_code)
        if not response.is_success:
            span.set_status(Status(StatusCode.ERROR, f"HTTP {response.status_code}"))
            raise ServerRequestError(response.status_code, response.text)

        logger.debug(f"Server answered {response.status_code}")
        return response.text


def main(argv=None):
    parser = argparse.ArgumentParser(description="Send a traced request to the demo server")
    parser.add_argument("param", help="Value for the param query parameter")
    parser.add_argument("--url", help="Server base URL (overrides CLIENT_SERVER_URL)")
    parser.add_argument("--no-trace", action="store_true", help="Send without configuring tracing")
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.url:
        settings = settings.model_copy(
            update={"client": settings.client.model_copy(update={"server_url": args.url})}
        )
    configure_logging(settings)

    provider = None
    if not args.no_trace:
        provider = setup_telemetry(settings, service_name=f"{settings.telemetry.service_name}-client")

    try:
        body = send_request(args.param, settings)
    except (ServerRequestError, httpx.HTTPError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    finally:
        shutdown_telemetry(provider)

    print(body)
    return 0


if __name__ == "__main__":
    sys.exit(main())
