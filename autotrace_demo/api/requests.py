"""The demo request endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import PlainTextResponse

from ..telemetry.metrics import REQUESTS_SERVED

logger = logging.getLogger(__name__)

SERVED = "served"

router = APIRouter()


def serve_request(param: Optional[str], variant: str) -> str:
    """Log the received parameter and produce the response body."""
    logger.info(f"[{variant}] server_request param={param}")
    REQUESTS_SERVED.labels(variant=variant).inc()
    return SERVED


@router.get("/server_request", response_class=PlainTextResponse)
def server_request(
    request: Request,
    param: Optional[str] = Query(None, description="Value echoed to the server log"),
) -> str:
    """Answer a demo request without any tracing code."""
    return serve_request(param, request.app.state.variant)
