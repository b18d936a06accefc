"""Production container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from levelup.config import Settings
from levelup.util.di import PROVIDERS, ProdConfigProvider, ProviderBase


def build_providers(
    settings: Settings, mocked: set[str] | frozenset[str] = frozenset()
) -> list[ProviderBase]:
    """Instantiate one provider per entry of ``PROVIDERS``.

    Args:
        settings: Settings handed to the config provider
        mocked: Components to resolve to their mock implementation
    """
    providers: list[ProviderBase] = []
    for base in PROVIDERS:
        if base is ProdConfigProvider:
            providers.append(ProdConfigProvider(settings))
            continue
        providers.append(base.implementation(base.__mock_component__ in mocked)())
    return providers


def create_container(settings: Settings | None = None) -> AsyncContainer:
    """Build the production container.

    Identity providers and the recall broker are always real. The store is
    in-memory or PostgreSQL according to ``persistence.backend``; the
    in-memory store is the persistence component's mock implementation.
    """
    settings = settings or Settings()
    mocked = {"persistence"} if settings.persistence.backend == "memory" else set()

    return make_async_container(*build_providers(settings, mocked), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; routes resolve ``FromDishka`` from it."""
    setup_dishka(container, app)
