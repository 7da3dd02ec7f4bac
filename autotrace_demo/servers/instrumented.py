"""
Manually instrumented server.

The tracer provider is configured at startup and the request handler opens
its own ``server_request`` span, parented on the context propagated by the
caller.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.responses import PlainTextResponse
from opentelemetry.sdk.trace import TracerProvider

from ..api import serve_request
from ..app import build_app
from ..config import Settings, get_settings
from ..telemetry import get_tracer, server_span, setup_telemetry, shutdown_telemetry
from . import run_server

VARIANT = "instrumented"

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/server_request", response_class=PlainTextResponse)
def server_request(
    request: Request,
    param: Optional[str] = Query(None, description="Value echoed to the server log"),
) -> str:
    """Answer a demo request inside a hand-made SERVER span."""
    with server_span(request, request.app.state.tracer) as span:
        span.set_attribute("demo.param", param or "")
        return serve_request(param, VARIANT)


def create_app(
    settings: Optional[Settings] = None,
    tracer_provider: Optional[TracerProvider] = None,
) -> FastAPI:
    """
    Create the instrumented application.

    Without ``tracer_provider`` the SDK is configured from settings when the
    application starts. A provider passed in is used as is and left running.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        provider = None
        if tracer_provider is None:
            provider = setup_telemetry(settings)
            if provider is not None:
                logger.info("OpenTelemetry tracing enabled")
        logger.info(f"Starting {VARIANT} demo server")

        yield

        # Cleanup
        shutdown_telemetry(provider)
        logger.info(f"Shutting down {VARIANT} demo server")

    app = build_app(VARIANT, settings, request_router=router, lifespan=lifespan)
    app.state.tracer = get_tracer(__name__, tracer_provider)
    return app


if __name__ == "__main__":
    run_server("autotrace_demo.servers.instrumented:create_app", get_settings())
