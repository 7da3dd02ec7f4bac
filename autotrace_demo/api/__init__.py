"""API routes shared by the server variants."""

from fastapi import APIRouter

from .health import router as health_router
from .requests import SERVED, router as requests_router, serve_request

# Routes every variant exposes regardless of how /server_request is traced
api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])

__all__ = ["api_router", "requests_router", "serve_request", "SERVED"]
