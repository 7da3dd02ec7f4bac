"""
Programmatically instrumented server.

No per-route tracing code: the SDK is configured in the factory and the
application is handed to ``FastAPIInstrumentor``, which wraps it in the ASGI
tracing middleware.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.trace import TracerProvider

from ..app import build_app
from ..config import Settings, get_settings
from ..telemetry import setup_telemetry, shutdown_telemetry
from . import run_server

VARIANT = "programmatic"

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    tracer_provider: Optional[TracerProvider] = None,
) -> FastAPI:
    """
    Create the programmatically instrumented application.

    The instrumentation middleware has to be in place before the first
    request, so telemetry is set up here rather than in the lifespan.
    """
    settings = settings or get_settings()
    owned_provider = None
    if tracer_provider is None:
        owned_provider = tracer_provider = setup_telemetry(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(f"Starting {VARIANT} demo server")
        yield
        shutdown_telemetry(owned_provider)
        logger.info(f"Shutting down {VARIANT} demo server")

    app = build_app(VARIANT, settings, lifespan=lifespan)

    FastAPIInstrumentor.instrument_app(
        app,
        tracer_provider=tracer_provider,
        excluded_urls=",".join(settings.telemetry.excluded_urls),
    )
    logger.info("FastAPI instrumentation installed")
    return app


if __name__ == "__main__":
    run_server("autotrace_demo.servers.programmatic:create_app", get_settings())
