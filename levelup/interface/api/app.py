"""FastAPI applications.

Two services are built from one factory: identity linking (with the
progress endpoint) and recall. Run them with uvicorn in factory mode, e.g.
``uvicorn --factory levelup.interface.api.app:create_linking_app``.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from levelup.config import ServiceName, Settings
from levelup.interface.api.routes import health, link, progress, recall
from levelup.interface.error import (
    ErrorBody,
    detail_body,
    register_error_handlers,
    status_body,
)
from levelup.util.di.container import create_container, setup_di
from levelup.util.error import ConfigurationError
from levelup.util.observability import instrument_fastapi, instrument_httpx

logger = logging.getLogger(__name__)

ROUTERS: dict[ServiceName, list[APIRouter]] = {
    "linking": [health.router, link.router, progress.router],
    "recall": [health.router, recall.router],
}

ERROR_BODIES: dict[ServiceName, ErrorBody] = {
    "linking": detail_body,
    "recall": status_body,
}

TITLES: dict[ServiceName, str] = {
    "linking": "LevelUp Identity Linking API",
    "recall": "LevelUp Recall API",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    await app.state.dishka_container.close()


def create_app(
    service: ServiceName,
    container: AsyncContainer | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create the FastAPI application for one service.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        service: Which service to build
        container: DI container; the production container when omitted
        settings: Settings; loaded from the environment when omitted

    Raises:
        ConfigurationError: If a variable the service requires is absent
    """
    settings = settings or Settings()

    missing = settings.missing_for(service)
    if missing:
        raise ConfigurationError(
            f"Cannot start {service} service, missing configuration: "
            f"{', '.join(missing)}",
            missing,
        )

    # Logfire must be configured before instrumentation
    instrument_httpx()

    app_instance = FastAPI(
        title=TITLES[service],
        description="Links third-party player identities to in-game accounts",
        version="0.1.0",
        lifespan=lifespan,
    )
    app_instance.state.service = service

    instrument_fastapi(app_instance)

    # Game clients authenticate with bearer tokens, never cookies
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container(settings))
    register_error_handlers(app_instance, ERROR_BODIES[service])

    for router in ROUTERS[service]:
        app_instance.include_router(router)

    logger.info(
        f"Created {service} app (store={settings.persistence.backend}, "
        f"base_url={settings.api.base_url})"
    )
    return app_instance


def create_linking_app(container: AsyncContainer | None = None) -> FastAPI:
    """Identity linking and progress service."""
    return create_app("linking", container)


def create_recall_app(container: AsyncContainer | None = None) -> FastAPI:
    """Recall service."""
    return create_app("recall", container)
