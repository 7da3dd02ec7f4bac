"""Logging configuration shared by the servers and the CLIs."""

import logging

from .config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure root logging for a server or CLI process."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
    )
