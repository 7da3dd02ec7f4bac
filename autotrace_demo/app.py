"""FastAPI application factory shared by the server variants."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from . import __version__
from .api import api_router, requests_router
from .config import Settings

logger = logging.getLogger(__name__)

Lifespan = Callable[[FastAPI], Any]


def default_lifespan(variant: str) -> Lifespan:
    """Lifespan that only logs start and stop."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(f"Starting {variant} demo server")
        yield
        logger.info(f"Shutting down {variant} demo server")

    return lifespan


def build_app(
    variant: str,
    settings: Settings,
    request_router: Optional[APIRouter] = None,
    lifespan: Optional[Lifespan] = None,
) -> FastAPI:
    """Create and configure the FastAPI application for one variant."""
    app = FastAPI(
        title=f"autotrace demo server ({variant})",
        description="Sample server for comparing manual and automatic tracing",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan or default_lifespan(variant),
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.variant = variant
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    app.include_router(request_router or requests_router, tags=["demo"])

    # Mount Prometheus metrics endpoint
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    return app
