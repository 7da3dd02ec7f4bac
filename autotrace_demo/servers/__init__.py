"""Server variants of the demo.

- ``instrumented``: opens its server span by hand
- ``uninstrumented``: no tracing code, meant for ``opentelemetry-instrument``
- ``programmatic``: instrumented with ``FastAPIInstrumentor.instrument_app``
"""

import uvicorn

from ..config import Settings
from ..logging_config import configure_logging


def run_server(factory: str, settings: Settings) -> None:
    """Run an application factory (``module:function``) under uvicorn."""
    configure_logging(settings)
    uvicorn.run(
        factory,
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
