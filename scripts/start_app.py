#!/usr/bin/env python3
"""Start the API server with Logfire tracking of startup errors."""

import sys

import logfire
import uvicorn

from flow.config import Settings
from flow.util.logging import setup_logging
from flow.util.observability import configure_logfire


def main() -> int:
    """Configure logging and observability, then serve the app."""
    settings = Settings()
    setup_logging(settings)
    # Before the app module is imported, so instrumentation has a target
    configure_logfire(settings)

    try:
        logfire.info("Starting Service Flow API", port=settings.port)
        uvicorn.run(
            "flow.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
