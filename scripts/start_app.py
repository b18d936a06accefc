#!/usr/bin/env python3
"""Start one of the LevelUp services with Logfire error tracking for startup errors.

Usage:
    python scripts/start_app.py linking
    python scripts/start_app.py recall
"""

import sys
import typing

import logfire
import uvicorn

from levelup.config import ServiceName, Settings
from levelup.util.logging import setup_logging
from levelup.util.observability import configure_logfire

FACTORIES: dict[str, str] = {
    "linking": "levelup.interface.api.app:create_linking_app",
    "recall": "levelup.interface.api.app:create_recall_app",
}


def main(argv: list[str]) -> int:
    """Start the requested service and log any startup errors to Logfire."""
    if len(argv) != 2 or argv[1] not in typing.get_args(ServiceName):
        print(f"usage: {argv[0]} <{'|'.join(FACTORIES)}>", file=sys.stderr)
        return 2

    service = typing.cast(ServiceName, argv[1])
    settings = Settings()

    setup_logging(settings)
    # Configure Logfire early to catch startup errors
    configure_logfire(settings, service)

    try:
        logfire.info("Starting service", service=service)

        # Factory mode: the app (and its configuration check) is built by uvicorn
        uvicorn.run(
            FACTORIES[service],
            factory=True,
            host=settings.api.host,
            port=settings.api.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Service startup failed",
            service=service,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv))
