"""
Server without any tracing code.

Run it under the auto-instrumentation agent to get server spans anyway::

    opentelemetry-instrument --traces_exporter console \\
        python -m autotrace_demo.servers.uninstrumented

Run it plainly and it serves the same responses with no spans at all.
"""

from typing import Optional

from fastapi import FastAPI

from ..app import build_app
from ..config import Settings, get_settings
from . import run_server

VARIANT = "uninstrumented"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the uninstrumented application."""
    return build_app(VARIANT, settings or get_settings())


if __name__ == "__main__":
    run_server("autotrace_demo.servers.uninstrumented:create_app", get_settings())
