"""Health check endpoints."""

from fastapi import APIRouter, Depends, Request
from opentelemetry import trace
from pydantic import BaseModel

from .. import __version__
from ..config import Settings

router = APIRouter()


class HealthStatus(BaseModel):
    """Health status response."""

    status: str
    version: str
    variant: str
    telemetry_enabled: bool
    tracer_provider: str


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


@router.get("/health", response_model=HealthStatus)
async def health_check(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> HealthStatus:
    """Report the server variant and which tracer provider is installed.

    Without the auto-instrumentation agent and without SDK setup, the global
    provider is still the API's ``ProxyTracerProvider``.
    """
    return HealthStatus(
        status="healthy",
        version=__version__,
        variant=request.app.state.variant,
        telemetry_enabled=settings.telemetry.enabled,
        tracer_provider=type(trace.get_tracer_provider()).__name__,
    )


@router.get("/ready")
async def readiness_check() -> dict:
    """Readiness probe."""
    return {"ready": True}


@router.get("/live")
async def liveness_check() -> dict:
    """Liveness probe."""
    return {"live": True}
