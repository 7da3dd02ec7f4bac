"""
autotrace demo server

Main application entry point. Starts the variant selected by ``APP_VARIANT``.
"""

import importlib
from typing import Optional

from fastapi import FastAPI

from .config import VARIANTS, Settings, get_settings
from .servers import run_server


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the application for the configured variant."""
    settings = settings or get_settings()
    if settings.variant not in VARIANTS:
        raise ValueError(f"Unknown server variant: {settings.variant}")

    module = importlib.import_module(f"{__package__}.servers.{settings.variant}")
    return module.create_app(settings)


if __name__ == "__main__":
    run_server("autotrace_demo.main:create_app", get_settings())
