"""Stdout logging for both services."""

import logging
import sys

from levelup.config import Settings

LEVELS = {
    "test": logging.WARNING,
    "development": logging.DEBUG,
    "staging": logging.INFO,
    "production": logging.INFO,
}


def setup_logging(settings: Settings) -> None:
    """Configure the root logger from the environment name.

    ``DEBUG=true`` forces debug output in any environment.
    """
    level = logging.DEBUG if settings.debug else LEVELS[settings.environment]

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # Adapters log their own provider calls; request lines come from Logfire
    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).info(
        f"Logging at {logging.getLevelName(level)} for {settings.environment}"
    )
